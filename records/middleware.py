from django.conf import settings
from django.http import HttpResponseRedirect
from django.shortcuts import render

from .exceptions import AuthorizationError, ConflictError, NotFoundError
from .permissions import PUBLIC, principal_for_request, required_authorities


class AuthorityGateMiddleware:
    """Apply the route authority policy to every request.

    Anonymous requests for protected routes are redirected to the login
    page; authenticated requests lacking the authority get a 403.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        path = request.path or ''
        required = required_authorities(path)
        request.principal = principal_for_request(request)
        if required is PUBLIC:
            return self.get_response(request)
        if request.principal is None:
            return HttpResponseRedirect(settings.LOGIN_URL)
        if not request.principal.has_any_authority(required):
            return _error_page(request, AuthorizationError('You do not have the authority to access this page.'))
        return self.get_response(request)


class DomainErrorMiddleware:
    """Render domain errors raised by HTML views as error pages."""
    HANDLED = (NotFoundError, AuthorizationError, ConflictError)

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if isinstance(exception, self.HANDLED):
            return _error_page(request, exception)
        return None


def _error_page(request, exc):
    context = {'status_code': exc.status_code, 'message': str(exc.detail)}
    return render(request, 'records/error.html', context, status=exc.status_code)
