"""Field-level checks and input sanitation shared by the form handlers."""

import html


def is_non_empty_string(value) -> bool:
    """True for a string with at least one non-whitespace character."""
    return isinstance(value, str) and value.strip() != ""


def sanitize(value: str) -> str:
    """Trim surrounding whitespace and escape HTML special characters."""
    return html.escape(value.strip(), quote=True)
