import pytest
from django.test import Client, RequestFactory

from records.exceptions import AuthenticationError
from records.models import AuditEvent, Patient
from records.permissions import ADMIN, USER, required_authorities
from records.services.auth import authenticate_credentials

pytestmark = pytest.mark.django_db


def login(client, username, password):
    return client.post('/login', {'username': username, 'password': password})


def test_route_policy_table():
    assert required_authorities('/static/css/style.css') is None
    assert required_authorities('/login') is None
    for path in ('/formPatients', '/save', '/delete', '/editPatient'):
        assert required_authorities(path) == {ADMIN}
    for path in ('/index', '/patients'):
        assert required_authorities(path) == {USER, ADMIN}
    assert required_authorities('/metrics') == frozenset()


def test_anonymous_requests_are_sent_to_login():
    c = Client()
    for path in ('/index', '/patients', '/formPatients', '/'):
        r = c.get(path)
        assert r.status_code == 302
        assert r.url == '/login'


def test_public_paths_do_not_redirect():
    c = Client()
    assert c.get('/login').status_code == 200
    assert c.get('/static/css/missing.css').status_code != 302


def test_login_sets_session_authorities_and_lands_on_index():
    c = Client()
    r = login(c, 'admin', 'admin')
    assert r.status_code == 302
    assert r.url == '/index'
    assert c.session['authorities'] == ['ADMIN']
    assert c.get('/index').status_code == 200


def test_bad_credentials_fail_identically():
    rf = RequestFactory()
    with pytest.raises(AuthenticationError) as wrong_password:
        authenticate_credentials(rf.post('/login'), 'admin', 'nope')
    with pytest.raises(AuthenticationError) as unknown_user:
        authenticate_credentials(rf.post('/login'), 'ghost', 'admin')
    assert type(wrong_password.value) is type(unknown_user.value)
    assert wrong_password.value.detail == unknown_user.value.detail
    assert wrong_password.value.status_code == unknown_user.value.status_code


def test_failed_login_reprompts_with_generic_message():
    r1 = login(Client(), 'admin', 'nope')
    r2 = login(Client(), 'ghost', 'admin')
    assert r1.status_code == r2.status_code == 200
    assert r1.context['error'] == r2.context['error'] == 'Invalid username or password.'
    assert AuditEvent.objects.filter(action='login', detail__result='fail').count() == 2


def test_user_authority_cannot_write(user_session):
    r = user_session.post('/save', {'name': 'Hafsa', 'birth_date': '1995-11-23', 'score': 5})
    assert r.status_code == 403
    for path in ('/formPatients', '/editPatient?id=1', '/delete?id=1'):
        assert user_session.get(path).status_code == 403


def test_user_login_stores_user_authority_and_gates_writes(make_patient):
    p = make_patient('Said')
    c = Client()
    r = login(c, 'user1', '1234')
    assert r.status_code == 302
    assert c.session['authorities'] == ['USER']
    assert c.post('/save', {'name': 'Hafsa', 'birth_date': '1995-11-23', 'score': 5}).status_code == 403
    for path in ('/formPatients', f'/editPatient?id={p.pk}', f'/delete?id={p.pk}'):
        assert c.get(path).status_code == 403
    assert c.get('/index').status_code == 200
    assert c.get('/patients').status_code == 200
    assert list(Patient.objects.values_list('name', flat=True)) == ['Said']


def test_metrics_need_a_login_unless_made_public(settings):
    assert Client().get('/metrics').status_code == 302
    settings.METRICS_PUBLIC = True
    assert required_authorities('/metrics') is None
    assert Client().get('/metrics').status_code == 200


def test_user_authority_can_read(user_session):
    assert user_session.get('/index').status_code == 200
    assert user_session.get('/patients').status_code == 200


def test_logout_ends_the_session():
    c = Client()
    login(c, 'user1', '1234')
    r = c.post('/logout')
    assert r.status_code == 302
    assert r.url == '/login?logout'
    assert 'authorities' not in c.session
    assert c.get('/index').status_code == 302
    assert AuditEvent.objects.filter(action='logout').count() == 1


def test_logout_page_shows_notice():
    r = Client().get('/login?logout')
    assert r.context['logged_out'] is True
