from pydantic import ValidationError as PydanticValidationError


def _value_at(body, loc):
    value = body
    for key in loc:
        if isinstance(value, dict) and key in value:
            value = value[key]
        else:
            return None
    return value


def format_validation_error(error: PydanticValidationError, body=None) -> dict:
    """
    Flatten a pydantic error into one entry per field path, carrying the
    offending value from the request body (None when the field is missing).
    """
    errors = {}
    for issue in error.errors():
        loc = tuple(issue["loc"])
        path = ".".join(str(part) for part in loc)
        ctx = issue.get("ctx") or {}

        properties = {"message": issue["msg"], "type": issue["type"]}
        for key in ("ge", "gt", "min_length", "min"):
            if key in ctx:
                properties["min"] = ctx[key]
                break
        for key in ("le", "lt", "max_length", "max"):
            if key in ctx:
                properties["max"] = ctx[key]
                break

        errors[path] = {
            "message": issue["msg"],
            "name": "ValidatorError",
            "properties": properties,
            "kind": issue["type"],
            "path": path,
            "value": _value_at(body, loc),
        }
    return {"name": "ValidationError", "errors": errors}
