import pytest
from django.contrib.auth import get_user_model

from records.exceptions import ConflictError, NotFoundError, ValidationError
from records.models import AppRole
from records.services import accounts

pytestmark = pytest.mark.django_db

User = get_user_model()


def test_migrate_seeds_baseline_accounts():
    admin = accounts.find_by_username('admin')
    user = accounts.find_by_username('user1')
    assert admin.authorities == frozenset({'ADMIN'})
    assert user.authorities == frozenset({'USER'})
    assert set(AppRole.objects.values_list('role_name', flat=True)) == {'USER', 'ADMIN'}


def test_seeding_twice_creates_no_duplicates():
    first = accounts.seed_accounts()
    second = accounts.seed_accounts()
    assert first == second == {'roles': 0, 'users': 0}
    assert User.objects.filter(username='admin').count() == 1
    assert AppRole.objects.count() == 2
    assert accounts.find_by_username('admin').roles.count() == 1


def test_seeding_fills_gaps_left_by_a_partial_run():
    # roles exist but the admin account never got created
    User.objects.filter(username='admin').delete()
    stats = accounts.seed_accounts()
    assert stats == {'roles': 0, 'users': 1}
    assert accounts.find_by_username('admin').authorities == frozenset({'ADMIN'})


def test_passwords_are_stored_hashed():
    user = accounts.create_user('nurse', 's3cret', 's3cret')
    assert user.password != 's3cret'
    assert user.check_password('s3cret')


def test_create_user_conflict_and_mismatch():
    with pytest.raises(ConflictError):
        accounts.create_user('admin', 'x')
    with pytest.raises(ValidationError):
        accounts.create_user('doctor', 'one', 'two')
    assert accounts.find_by_username('doctor') is None


def test_create_role_conflict():
    role = accounts.create_role('NURSE')
    assert accounts.find_role_by_name('NURSE') == role
    with pytest.raises(ConflictError):
        accounts.create_role('NURSE')


def test_assign_role_is_idempotent():
    accounts.assign_role('user1', 'ADMIN')
    accounts.assign_role('user1', 'ADMIN')
    user = accounts.find_by_username('user1')
    assert user.authorities == frozenset({'USER', 'ADMIN'})
    assert user.roles.count() == 2


def test_assign_role_requires_existing_user_and_role():
    with pytest.raises(NotFoundError):
        accounts.assign_role('nobody', 'USER')
    with pytest.raises(NotFoundError):
        accounts.assign_role('user1', 'SURGEON')
