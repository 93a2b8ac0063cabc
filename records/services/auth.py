"""
Credential checks and session principal management.

Passwords are only ever compared through Django's hashers (via the
model backend).  There is no lockout, MFA or credential expiry.
"""
from __future__ import annotations

import logging

from django.contrib.auth import authenticate, login, logout

from records.exceptions import AuthenticationError
from records.permissions import SESSION_AUTHORITIES_KEY, Principal
from records.services.audit import log_action

logger = logging.getLogger(__name__)


def authenticate_credentials(request, username: str, password: str):
    """Return the matching user or raise :class:`AuthenticationError`.

    Unknown usernames and wrong passwords fail identically.
    """
    user = authenticate(request, username=username, password=password) if username and password else None
    if user is None:
        log_action(user=None, action='login', object_type='user',
                   detail={'result': 'fail', 'username': username, 'ip': _client_ip(request)})
        logger.info('login failed for %r', username)
        raise AuthenticationError()
    return user


def establish_session(request, user) -> Principal:
    """Log ``user`` in and store its authorities on the session."""
    login(request, user)
    principal = Principal.from_user(user)
    request.session[SESSION_AUTHORITIES_KEY] = sorted(principal.authorities)
    request.principal = principal
    log_action(user=user, action='login', object_type='user', object_id=user.pk,
               detail={'result': 'ok', 'ip': _client_ip(request)})
    return principal


def end_session(request) -> None:
    user = request.user if request.user.is_authenticated else None
    if user is not None:
        log_action(user=user, action='logout', object_type='user', object_id=user.pk)
    # flushes the session, authorities included
    logout(request)
    request.principal = None


def _client_ip(request):
    return request.META.get('REMOTE_ADDR') if request is not None else None
