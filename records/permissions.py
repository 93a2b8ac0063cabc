"""
Route authority policy and the session principal.

The policy is a static, ordered table of path rules; the first rule that
matches a request path decides which authorities are required.  It is
enforced for every request by ``records.middleware.AuthorityGateMiddleware``
and again on DRF views through :class:`HasRouteAuthority`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from django.conf import settings
from rest_framework.permissions import BasePermission

ADMIN = 'ADMIN'
USER = 'USER'

SESSION_AUTHORITIES_KEY = 'authorities'

# Marker for rules that need no principal at all
PUBLIC = None
# Marker for rules satisfied by any authenticated principal
AUTHENTICATED: frozenset[str] = frozenset()


@dataclass(frozen=True)
class RouteRule:
    paths: tuple[str, ...]
    authorities: Optional[frozenset[str]]
    prefix: bool = False

    def matches(self, path: str) -> bool:
        if self.prefix:
            return any(path.startswith(p) for p in self.paths)
        return path in self.paths


def route_policy() -> tuple[RouteRule, ...]:
    rules = [
        RouteRule((settings.STATIC_URL,), PUBLIC, prefix=True),
        RouteRule(('/login',), PUBLIC),
        RouteRule(('/formPatients', '/save', '/delete', '/editPatient'), frozenset({ADMIN})),
        RouteRule(('/index', '/patients'), frozenset({USER, ADMIN})),
    ]
    if getattr(settings, 'METRICS_PUBLIC', False):
        rules.insert(2, RouteRule(('/metrics',), PUBLIC))
    return tuple(rules)


def required_authorities(path: str) -> Optional[frozenset[str]]:
    """Return the authorities a path needs.

    ``None`` means the path is public.  An empty set means any
    authenticated principal will do.  Otherwise the principal must hold
    at least one of the returned authorities.
    """
    for rule in route_policy():
        if rule.matches(path):
            return rule.authorities
    return AUTHENTICATED


@dataclass(frozen=True)
class Principal:
    """Identity attached to an authenticated session."""
    username: str
    authorities: frozenset[str]

    @property
    def is_admin(self) -> bool:
        return ADMIN in self.authorities

    def has_any_authority(self, required: frozenset[str]) -> bool:
        if not required:
            return True
        return bool(self.authorities & required)

    @classmethod
    def from_user(cls, user) -> 'Principal':
        return cls(username=user.get_username(), authorities=frozenset(user.authorities))


def principal_for_request(request) -> Optional[Principal]:
    """Rebuild the principal from the session, or ``None`` if anonymous."""
    user = getattr(request, 'user', None)
    if not (user and user.is_authenticated):
        return None
    authorities = request.session.get(SESSION_AUTHORITIES_KEY)
    if authorities is None:
        # Session established outside the login view (e.g. force_login)
        return Principal.from_user(user)
    return Principal(username=user.get_username(), authorities=frozenset(authorities))


class HasRouteAuthority(BasePermission):
    """DRF counterpart of the route policy for API views."""
    message = 'Insufficient authority for this resource.'

    def has_permission(self, request, view) -> bool:  # type: ignore[override]
        required = required_authorities(request.path)
        if required is PUBLIC:
            return True
        principal = principal_for_request(request)
        return bool(principal and principal.has_any_authority(required))
