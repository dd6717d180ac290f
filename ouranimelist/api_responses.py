"""
API Response Utilities - Standardized error handling and responses
Every command returns the same envelope: {"code", "success", "data"?, "message"?}
"""

from flask import jsonify
import logging

logger = logging.getLogger(__name__)


# API Error Codes
class ErrorCode:
    SUCCESS = "SUCCESS"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    NOT_FOUND = "NOT_FOUND"
    INTERNAL_ERROR = "INTERNAL_ERROR"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    CONFLICT = "CONFLICT"
    RATE_LIMIT_EXCEEDED = "RATE_LIMIT_EXCEEDED"


DEFAULT_MESSAGES = {
    ErrorCode.NOT_FOUND: "Resource not found",
    ErrorCode.VALIDATION_ERROR: "Invalid request parameters",
    ErrorCode.INTERNAL_ERROR: "An unexpected error occurred",
    ErrorCode.UNAUTHORIZED: "Authentication required",
    ErrorCode.FORBIDDEN: "Access forbidden",
    ErrorCode.CONFLICT: "Resource conflict",
    ErrorCode.RATE_LIMIT_EXCEEDED: "Rate limit exceeded",
}


def success_response(data=None, message=None, status_code=200):
    """
    Standard success response format for API endpoints
    """
    response = {"code": ErrorCode.SUCCESS, "success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return jsonify(response), status_code


def error_response(
    error_code=ErrorCode.INTERNAL_ERROR,
    message=None,
    details=None,
    status_code=400,
    log_error=True,
):
    """
    Standard error response format for API endpoints
    """
    response = {"code": error_code, "success": False}

    response["message"] = message or DEFAULT_MESSAGES.get(error_code, "Request failed")

    if details:
        response["details"] = details

    if log_error and error_code in [ErrorCode.INTERNAL_ERROR, ErrorCode.VALIDATION_ERROR]:
        logger.error(f"{error_code}: {message} | Details: {details}")

    return jsonify(response), status_code


def page_response(items, page_index, page_size):
    """
    Paginated list response. The total is not known without a second query,
    so has_more is inferred from a full page.
    """
    response = {
        "code": ErrorCode.SUCCESS,
        "success": True,
        "data": items,
        "pagination": {
            "page_index": page_index,
            "page_size": page_size,
            "has_more": len(items) == page_size,
        },
    }
    return jsonify(response), 200


def not_found_response(resource_type, resource_id=None):
    """
    Convenience function for not found errors
    """
    if resource_id:
        message = f"{resource_type} '{resource_id}' not found"
    else:
        message = f"{resource_type} not found"
    return error_response(ErrorCode.NOT_FOUND, message=message, status_code=404)
