from datetime import date

import pytest
from django.test import Client

from records.models import Patient
from records.services import accounts


@pytest.fixture
def make_patient(db):
    def _make(name, score=10, is_sick=False, birth_date=date(2000, 1, 1)):
        return Patient.objects.create(name=name, score=score, is_sick=is_sick, birth_date=birth_date)
    return _make


@pytest.fixture
def user_session(db):
    # user1 / admin are seeded when the test database is migrated
    c = Client()
    c.force_login(accounts.find_by_username('user1'))
    return c


@pytest.fixture
def admin_session(db):
    c = Client()
    c.force_login(accounts.find_by_username('admin'))
    return c
