"""
Login and logout views.

``/login`` is public.  A failed login re-renders the form with a single
generic message whatever went wrong; a successful one always lands on
the patient list.  ``/logout`` only accepts POST.
"""
from __future__ import annotations

from django.conf import settings
from django.shortcuts import redirect, render
from django.views.decorators.http import require_http_methods, require_POST

from records.exceptions import AuthenticationError
from records.serializers.auth import LoginSerializer
from records.services.auth import authenticate_credentials, end_session, establish_session


@require_http_methods(['GET', 'POST'])
def login_view(request):
    context = {
        'logged_out': 'logout' in request.GET,
        'error': None,
        'username': '',
    }
    if request.method == 'GET':
        return render(request, 'records/login.html', context)

    s = LoginSerializer(data=request.POST)
    try:
        if not s.is_valid():
            raise AuthenticationError()
        user = authenticate_credentials(request, s.validated_data['username'], s.validated_data['password'])
    except AuthenticationError as exc:
        context['error'] = str(exc.detail)
        context['username'] = request.POST.get('username', '')
        return render(request, 'records/login.html', context)

    establish_session(request, user)
    return redirect(settings.LOGIN_REDIRECT_URL)


@require_POST
def logout_view(request):
    end_session(request)
    return redirect(f"{settings.LOGIN_URL}?logout")
