# ============================================
# tracker/exceptions.py
# ============================================
"""
Error taxonomy for the tracker core.

Services raise Django's own ``ValidationError`` for malformed input and the
classes below for policy and constraint failures. ``api_exception_handler``
turns them into DRF responses.
"""
from django.core.exceptions import PermissionDenied, ValidationError
from django.http import Http404
from rest_framework import exceptions, status
from rest_framework.views import exception_handler


class AccessDenied(PermissionDenied):
    """The caller can see the record but the policy forbids the operation."""


class NotFound(Http404):
    """
    The record does not exist or the caller cannot see it.

    Always raised without a message so both cases render the same body.
    """

    def __init__(self):
        super().__init__()


class ConflictError(Exception):
    """A uniqueness or referential constraint rejected the write."""


class InvalidRequest(exceptions.APIException):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = 'Invalid request.'
    default_code = 'invalid'


class Conflict(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Conflict.'
    default_code = 'conflict'


def api_exception_handler(exc, context):
    if isinstance(exc, ValidationError):
        exc = InvalidRequest(' '.join(exc.messages))
    elif isinstance(exc, ConflictError):
        exc = Conflict(str(exc) or None)
    return exception_handler(exc, context)
