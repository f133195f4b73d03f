from __future__ import annotations

import logging
from functools import wraps
from typing import Callable

from flask import jsonify, request, session

from ..core.exceptions import (
    AuthenticationError,
    AuthorizationError,
    DomainError,
    NotFoundError,
    ValidationError,
)
from ..security.auth import PageAccessPolicy, require_auth

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (NotFoundError, 404),
)


def error_response(exc: DomainError):
    """JSON body + status code for a domain error raised by a service."""

    status = 400
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            status = code
            break
    return jsonify({"success": False, "message": str(exc)}), status


def form_or_json() -> dict:
    """Request payload from either a JSON body or a submitted form."""

    if request.is_json:
        return dict(request.get_json(silent=True) or {})
    return request.form.to_dict()


def api_view(page_access: PageAccessPolicy, page: str) -> Callable:
    """Login + page access check; the view receives the session user first.

    Domain errors become JSON error responses.
    """

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                viewer = require_auth(session)
                page_access.require(viewer, page)
                return view(viewer, *args, **kwargs)
            except DomainError as e:
                if isinstance(e, (AuthenticationError, AuthorizationError)):
                    logger.info("Rejected %s %s: %s", request.method, request.path, e)
                return error_response(e)

        return wrapper

    return decorator
