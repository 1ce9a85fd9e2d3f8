from __future__ import annotations

from flask import jsonify


def ok(data=None, message: str = "", status: int = 200):
    return jsonify({"success": True, "message": message, "data": data}), status


def fail(message: str = "Bad Request", status: int = 400, code: str | None = None):
    payload = {"success": False, "message": message}
    if code:
        payload["code"] = code
    return jsonify(payload), status
