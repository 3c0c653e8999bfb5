"""Response envelope shared by every reportcard JSON endpoint.

Successful responses look like ``{"success": true, "data": ..., "message":
...}``; failures carry ``success: false`` with a message and error title.
"""

from __future__ import annotations

import typing as typ

import msgspec


def success(data: object, message: str) -> dict[str, typ.Any]:
    """Wrap ``data`` in a success envelope, converting structs to builtins."""
    return {
        "success": True,
        "data": msgspec.to_builtins(data),
        "message": message,
    }


def failure(message: str, *, error: str) -> dict[str, typ.Any]:
    """Return a failure envelope."""
    return {"success": False, "message": message, "error": error}
