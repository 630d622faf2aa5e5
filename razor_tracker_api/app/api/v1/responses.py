"""
Helpers building the response envelope.
"""

from typing import Any, Dict

from fastapi.encoders import jsonable_encoder


def success_response(data: Any, message: str) -> Dict[str, Any]:
    """Wrap ``data`` in a successful envelope; ``None`` data is omitted."""
    body: Dict[str, Any] = {"success": True, "message": message}
    if data is not None:
        body["data"] = jsonable_encoder(data)
    return body


def error_response(error: str, message: str = "Operation failed") -> Dict[str, Any]:
    return {"success": False, "message": message, "error": error}
