"""
Account store: users, roles and their assignment, plus startup seeding.
"""
from __future__ import annotations

import logging
from typing import Optional

from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import transaction

from records.exceptions import ConflictError, NotFoundError, ValidationError
from records.models import AppRole
from records.permissions import ADMIN, USER

logger = logging.getLogger(__name__)

AppUser = get_user_model()


def find_by_username(username: str) -> Optional[AppUser]:
    return AppUser.objects.filter(username=username).first()


def find_role_by_name(role_name: str) -> Optional[AppRole]:
    return AppRole.objects.filter(role_name=role_name).first()


def create_user(username: str, password: str, confirm_password: Optional[str] = None) -> AppUser:
    """Create an account; only the salted hash of ``password`` is stored."""
    username = (username or '').strip()
    if not username:
        raise ValidationError({'username': ['Username must not be empty.']})
    if not password:
        raise ValidationError({'password': ['Password must not be empty.']})
    if confirm_password is not None and password != confirm_password:
        raise ValidationError({'confirm_password': ['Passwords do not match.']})
    if AppUser.objects.filter(username=username).exists():
        raise ConflictError(f'User {username} already exists.')
    user = AppUser.objects.create_user(username=username, password=password)
    logger.info('created user %s', username)
    return user


def create_role(role_name: str) -> AppRole:
    role_name = (role_name or '').strip()
    if not role_name:
        raise ValidationError({'role_name': ['Role name must not be empty.']})
    if AppRole.objects.filter(role_name=role_name).exists():
        raise ConflictError(f'Role {role_name} already exists.')
    role = AppRole.objects.create(role_name=role_name)
    logger.info('created role %s', role_name)
    return role


def assign_role(username: str, role_name: str) -> None:
    """Grant a role; granting one the user already holds changes nothing."""
    user = find_by_username(username)
    role = find_role_by_name(role_name)
    if user is None or role is None:
        raise NotFoundError(f'User {username} or role {role_name} not found.')
    # the join table is a set; add() skips existing pairs
    user.roles.add(role)


def seed_accounts() -> dict[str, int]:
    """Create the baseline roles and accounts.

    Every step checks for existing rows, and the run is one transaction,
    so repeating it after a restart or a failed run only fills the gaps.
    """
    seed = [
        ('user1', settings.SEED_USER_PASSWORD, USER),
        ('admin', settings.SEED_ADMIN_PASSWORD, ADMIN),
    ]
    stats = {'roles': 0, 'users': 0}
    with transaction.atomic():
        for role_name in (USER, ADMIN):
            if find_role_by_name(role_name) is None:
                create_role(role_name)
                stats['roles'] += 1
        for username, password, role_name in seed:
            if find_by_username(username) is None:
                create_user(username, password)
                stats['users'] += 1
            assign_role(username, role_name)
    if stats['roles'] or stats['users']:
        logger.info('seeded %(roles)d roles and %(users)d users', stats)
    else:
        logger.debug('accounts already seeded')
    return stats
