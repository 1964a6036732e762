"""
Anticustom UI - component rendering and design token compilation.
"""

from pathlib import Path

COMPONENTS_DIR = Path(__file__).parent / "components"
