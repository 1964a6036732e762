"""
Smoke verification of the shipped components.

Renders each component with representative props and checks the output
for an expected marker (and, for escaping checks, the absence of raw
markup).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from anticustom_ui.runtime.component_renderer import ComponentRenderer

logger = logging.getLogger(__name__)


@dataclass
class VerifyCase:
    """One render-and-inspect check."""

    label: str
    component: str
    props: dict[str, Any]
    expected: list[str]
    forbidden: list[str] = field(default_factory=list)


@dataclass
class VerifyResult:
    label: str
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _table_columns() -> list[dict[str, Any]]:
    return [
        {"key": "name", "label": "Name"},
        {"key": "email", "label": "Email"},
        {
            "label": "Status",
            "component": {"name": "badge", "props": {"text": "{status}", "variant": "{variant}"}},
        },
    ]


def default_cases() -> list[VerifyCase]:
    """Checks covering every shipped component."""
    cases = [
        VerifyCase("button", "button", {"text": "Test Button", "url": "#"}, ["anti-button"]),
        VerifyCase("intro", "intro", {"title": "Hello World", "size": "m"}, ["anti-intro"]),
    ]

    for variant in ("neutral", "success", "warning", "danger", "info"):
        cases.append(
            VerifyCase(
                f"badge/{variant}",
                "badge",
                {"text": variant.capitalize(), "variant": variant},
                [f"anti-badge--{variant}"],
            )
        )

    cases += [
        VerifyCase(
            "hero",
            "hero",
            {
                "alignment": "center",
                "size": "lg",
                "children": [
                    {"type": "intro", "props": {"title": "Hero Title", "size": "l"}},
                    {"type": "button", "props": {"text": "Get Started", "url": "#"}},
                ],
            },
            ["anti-hero"],
        ),
        VerifyCase(
            "hero/compose",
            "hero",
            {
                "children": [
                    {"type": "intro", "props": {"title": "Composition Test"}},
                    {"type": "button", "props": {"text": "CTA Button", "url": "#"}},
                ],
            },
            ["anti-intro", "anti-button"],
        ),
        VerifyCase(
            "table",
            "table",
            {
                "columns": _table_columns(),
                "data": [
                    {"id": 1, "name": "Alice", "email": "alice@test.com", "status": "Active", "variant": "success"},
                    {"id": 2, "name": "Bob", "email": "bob@test.com", "status": "Inactive", "variant": "neutral"},
                ],
            },
            ["anti-table"],
        ),
        VerifyCase(
            "table/delegate",
            "table",
            {
                "columns": [
                    {"label": "Status", "component": {"name": "badge", "props": {"text": "{status}"}}}
                ],
                "data": [{"id": 1, "status": "Active"}],
            },
            ["anti-badge"],
        ),
        VerifyCase(
            "table/empty",
            "table",
            {"columns": [{"key": "name", "label": "Name"}], "data": [], "empty_title": "Nothing here"},
            ["anti-table__empty"],
        ),
        VerifyCase(
            "code-block",
            "code-block",
            {"code": 'print("Hello")', "language": "python", "title": "Example"},
            ["anti-code-block"],
        ),
        VerifyCase(
            "code-block/esc",
            "code-block",
            {"code": '<script>alert("xss")</script>'},
            ["&lt;script&gt;"],
            forbidden=["<script>"],
        ),
        VerifyCase(
            "code-block/lines",
            "code-block",
            {"code": "line 1\nline 2\nline 3", "line_numbers": True},
            ["anti-code-block--has-line-numbers"],
        ),
        VerifyCase("card", "card", {"title": "Card", "link_url": "/more"}, ["anti-card--clickable"]),
        VerifyCase(
            "container",
            "container",
            {"children": [{"type": "badge", "props": {"text": "Inside"}}]},
            ["anti-container", "anti-badge"],
        ),
        VerifyCase("faq", "faq", {"initially_open": "true"}, ["anti-faq", " open"]),
        VerifyCase(
            "section",
            "section",
            {"colorway": "primary", "children": [{"type": "intro", "props": {"title": "Inside"}}]},
            ['data-colorway="primary"', "anti-intro"],
        ),
        VerifyCase(
            "select",
            "select",
            {"name": "plan", "options": [{"value": "a", "label": "A"}], "value": "a"},
            ["anti-select--dropdown", "selected"],
        ),
        VerifyCase(
            "select/radio",
            "select",
            {"display": "radio", "name": "plan", "options": [{"value": "a", "label": "A"}]},
            ["anti-select__input"],
        ),
        VerifyCase("stats", "stats", {"value": "42", "prefix": "$"}, ["anti-stats__prefix"]),
        VerifyCase(
            "testimonial",
            "testimonial",
            {"author_name": "Ada", "rating": 3},
            ["anti-testimonial__star--filled", "anti-testimonial__avatar--placeholder"],
        ),
    ]
    return cases


def verify_case(renderer: ComponentRenderer, case: VerifyCase) -> VerifyResult:
    """Render one case; any failure is reported, not raised."""
    try:
        output = str(renderer.render_component(case.component, case.props))
    except Exception as e:
        logger.debug("Verification of '%s' raised", case.label, exc_info=True)
        return VerifyResult(case.label, f"{type(e).__name__}: {e}")

    if not output.strip():
        return VerifyResult(case.label, "Empty output")
    for marker in case.expected:
        if marker not in output:
            return VerifyResult(case.label, f"Expected '{marker}' not found in output")
    for marker in case.forbidden:
        if marker in output:
            return VerifyResult(case.label, f"Unexpected '{marker}' found in output")
    return VerifyResult(case.label)


def verify_components(
    renderer: ComponentRenderer, cases: list[VerifyCase] | None = None
) -> list[VerifyResult]:
    return [verify_case(renderer, case) for case in (cases if cases is not None else default_cases())]
