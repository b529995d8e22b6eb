import itertools

import pytest
from rest_framework.test import APIClient

from accounts.models import User

_counter = itertools.count(1)

PASSWORD = 'secret-pass-123'


@pytest.fixture
def make_user(db):
    def _make(role='donor', email=None, **extra):
        email = email or f"{role}{next(_counter)}@raktsetu.test"
        if role == 'donor':
            extra.setdefault('blood_group', 'O+')
        if role == 'hospital':
            extra.setdefault('hospital_name', f"City Hospital {next(_counter)}")
        extra.setdefault('name', email.split('@')[0].title())
        return User.objects.create_user(username=email, email=email, password=PASSWORD, role=role, **extra)
    return _make


@pytest.fixture
def hospital(make_user):
    return make_user('hospital', hospital_name='Lifeline Hospital')


@pytest.fixture
def donor(make_user):
    return make_user('donor', name='Asha Rao', blood_group='B+')


@pytest.fixture
def admin_user(make_user):
    return make_user('admin', is_staff=True)


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def client_for():
    def _client(user):
        client = APIClient()
        client.force_authenticate(user=user)
        return client
    return _client
