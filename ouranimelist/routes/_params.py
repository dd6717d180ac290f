from flask import current_app, request

from ouranimelist.exceptions import ValidationException


def json_body():
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationException("Expected a JSON object body")
    return data


def int_arg(name, default=None):
    value = request.args.get(name)
    if value is None or value == "":
        return default
    try:
        return int(value)
    except ValueError:
        raise ValidationException(f"{name} must be an integer, got {value!r}")


def page_args():
    """(page_size, page_index) from the query string, capped at the configured maximum"""
    pagination = current_app.config["APP_SETTINGS"]["pagination"]
    page_size = int_arg("page_size", pagination["default_page_size"])
    page_index = int_arg("page_index", 0)
    if page_size is not None and page_size > pagination["max_page_size"]:
        raise ValidationException(f"page_size must be at most {pagination['max_page_size']}")
    return page_size, page_index


def has_page_args():
    return "page_size" in request.args or "page_index" in request.args
