"""Core support modules: errors and project configuration."""
