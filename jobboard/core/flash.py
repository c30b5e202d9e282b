"""
One-shot flash messages stored in the request session.

A message set while handling one request is shown on the next rendered
page and then discarded.
"""
from fastapi import Request

FLASH_KEY = "_flash"
FLASH_KINDS = ("success", "error")


def set_flash(request: Request, kind: str, message: str) -> None:
    if kind not in FLASH_KINDS:
        raise ValueError(f"Unknown flash kind: {kind}")
    messages = dict(request.session.get(FLASH_KEY) or {})
    messages[kind] = message
    request.session[FLASH_KEY] = messages


def pop_flash(request: Request) -> dict[str, str]:
    """Return pending messages keyed by kind and clear them."""
    if "session" not in request.scope:
        return {}
    return request.session.pop(FLASH_KEY, None) or {}
