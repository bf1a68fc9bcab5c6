"""
JSON helpers shared by the API views.

Every endpoint of the registration and payment flow speaks JSON.
This module parses request bodies, builds error responses with the
``{"error": ...}`` shape the front-end expects, and wraps views so
that an unexpected exception becomes a logged 500 instead of an
HTML error page.
"""

import json
import logging
from functools import wraps

from django.conf import settings
from django.core.exceptions import ObjectDoesNotExist
from django.http import Http404, JsonResponse

from monitoring.html_logger import error

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """
    Error reported to the API caller as a JSON body.

    Parameters
    ----------
    message : str
        Human-readable message, returned under the ``error`` key.
    status : int
        HTTP status code of the response. Defaults to 400.
    **extra
        Additional keys merged into the response body.
    """

    def __init__(self, message: str, status: int = 400, **extra):
        super().__init__(message)
        self.message = message
        self.status = status
        self.extra = extra


def json_error(message: str, status: int = 400, **extra) -> JsonResponse:
    """Build a JSON error response ``{"error": message, **extra}``."""
    return JsonResponse({"error": message, **extra}, status=status)


def json_body(request) -> dict:
    """
    Decode the JSON object sent in the request body.

    An empty body decodes to an empty dict.

    Raises
    ------
    ApiError
        If the body is not valid JSON or not a JSON object.
    """
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (ValueError, UnicodeDecodeError):
        raise ApiError("Invalid JSON body")
    if not isinstance(data, dict):
        raise ApiError("JSON body must be an object")
    return data


def get_or_404(model_or_queryset, message: str, **lookup):
    """
    Fetch one object or raise a JSON 404 carrying ``message``.

    Accepts a model class or a queryset, like
    :func:`django.shortcuts.get_object_or_404`.
    """
    queryset = getattr(model_or_queryset, "_default_manager", model_or_queryset)
    try:
        return queryset.get(**lookup)
    except (ObjectDoesNotExist, ValueError):
        # ValueError: malformed identifier, e.g. "abc" for an integer key
        raise ApiError(message, 404)


def api_view(view):
    """
    Wrap a view so failures are answered with JSON.

    - :class:`ApiError` becomes its own status and message.
    - :class:`~django.http.Http404` becomes a JSON 404.
    - Anything else is logged and answered with a generic 500. The
      exception text is only exposed when ``API_ERROR_DETAIL`` is on.
    """

    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except ApiError as exc:
            return json_error(exc.message, exc.status, **exc.extra)
        except Http404 as exc:
            return json_error(str(exc) or "Not found", 404)
        except Exception as exc:
            logger.exception("Unhandled error in %s", view.__name__)
            error(f"Unhandled error in {view.__name__}: {exc!r}")
            extra = {}
            if getattr(settings, "API_ERROR_DETAIL", False):
                extra["detail"] = repr(exc)
            return json_error("Internal server error", 500, **extra)

    return wrapper
