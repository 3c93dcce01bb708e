from flask import jsonify

from library_ledger.errors import PersistenceError


def json_ok(message: str, data=None, code: int = 200):
    return jsonify({"success": True, "message": message, "data": data}), code


def json_error(message: str, code: int = 400, error=None):
    body = {"success": False, "message": message}
    if error is not None:
        body["error"] = error
    return jsonify(body), code


def persistence_error(message: str, e: PersistenceError):
    if e.retryable:
        response, code = json_error(message, 503, e.message)
        response.headers["Retry-After"] = "1"
        return response, code
    return json_error(message, 500, e.message)
