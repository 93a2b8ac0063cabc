"""
Error taxonomy for the patient records application.

Services raise these; HTML requests have them rendered by
``records.middleware.DomainErrorMiddleware`` and DRF views by
:func:`api_exception_handler`.
"""
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler


class ValidationError(exceptions.ValidationError):
    """Bad form input.  ``detail`` maps field names to messages."""


class NotFoundError(exceptions.NotFound):
    default_code = 'not_found'


class ConflictError(exceptions.APIException):
    status_code = status.HTTP_409_CONFLICT
    default_detail = 'Resource already exists.'
    default_code = 'conflict'


class AuthenticationError(exceptions.AuthenticationFailed):
    # One message for every failure so callers cannot tell which part was wrong
    default_detail = 'Invalid username or password.'
    default_code = 'authentication_failed'

    def __init__(self):
        super().__init__(self.default_detail, self.default_code)


class AuthorizationError(exceptions.PermissionDenied):
    default_code = 'forbidden'


def api_exception_handler(exc, context):
    resp = drf_exception_handler(exc, context)
    if resp is None:
        return Response({'ok': False, 'error': {'code': 'server_error', 'message': str(exc)}}, status=500)
    # normalize response
    code = getattr(exc, 'default_code', 'api_error')
    if isinstance(resp.data, dict):
        detail = resp.data.get('detail') or resp.data
    else:
        detail = resp.data
    return Response({'ok': False, 'error': {'code': code, 'message': detail}}, status=resp.status_code)
