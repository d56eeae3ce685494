from typing import Any

# keys that mark {success|status, message, data} wrappers
ENVELOPE_MARKERS = ("success", "status", "message")


def unwrap_envelope(payload: Any) -> Any:
    """Return the ``data`` of an envelope, or the payload itself when it is bare."""
    if isinstance(payload, dict) and "data" in payload and any(key in payload for key in ENVELOPE_MARKERS):
        return payload["data"]
    return payload

def unwrap_page(payload: Any) -> dict:
    """
    Normalize the listing shapes the API returns into a page dict.

    Handles ``{data: {content: [...]}}``, ``{status, message, content: {content: [...]}}``,
    ``{content: [...], totalPages: ..}`` and a bare list.

    Raises:
        ValueError: If the payload is none of those.
    """
    body = unwrap_envelope(payload)
    if isinstance(body, list):
        return {
            "content": body,
            "totalPages": 1,
            "totalElements": len(body),
            "size": len(body),
            "number": 0,
            "first": True,
            "last": True,
            "empty": not body,
        }
    if isinstance(body, dict):
        content = body.get("content")
        if isinstance(content, dict) and isinstance(content.get("content"), list):
            return content
        if isinstance(content, list):
            page = dict(body)
            page.setdefault("empty", not content)
            page.setdefault("totalElements", len(content))
            page.setdefault("size", len(content))
            return page
    raise ValueError(f"Unrecognised page payload: {type(body).__name__}")
