"""Success envelope — {status: "success", message, data, ...extra}."""

from typing import Any


def success(message: str, data: Any = None, **extra: Any) -> dict:
    body = {"status": "success", "message": message, "data": data}
    body.update(extra)
    return body
