import pytest
from uuid import uuid4
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient
from accounts.models import Role
from evaluation_app.models import EvaluationType, Criterion


def full_sections(level=4, team=5, **overrides):
    """Every rated key set to `level`, team set to `team`."""
    sections = {f"a{i}": level for i in range(1, 7)}
    sections.update({f"b1_{i}": level for i in range(1, 7)})
    sections.update({f"b2_{i}": level for i in range(1, 7)})
    sections["team"] = team
    sections.update(overrides)
    return sections


@pytest.fixture
def api_client():
    return APIClient()

@pytest.fixture
def create_user(db):
    User = get_user_model()
    def _create_user(**kw):
        data = {
            "username": f"u_{uuid4().hex[:8]}",
            "email": f"{uuid4().hex[:8]}@test.local",
            "password": "pass12345",
            "name": "Test User",
            "role": Role.EMPLOYEE,
        }
        data.update(kw)
        return User.objects.create_user(**data)
    return _create_user

@pytest.fixture
def admin_user(create_user):
    return create_user(role=Role.ADMIN, name="Alice Admin")

@pytest.fixture
def supervisor_user(create_user):
    return create_user(role=Role.SUPERVISOR, name="Sam Supervisor")

@pytest.fixture
def employee_user(create_user):
    return create_user(role=Role.EMPLOYEE, name="Eve Employee")

@pytest.fixture
def create_type(db):
    def _create_type(**kw):
        defaults = dict(
            name="Technical",
            description="",
            section_percentage=100,
        )
        defaults.update(kw)
        return EvaluationType.objects.create(**defaults)
    return _create_type

@pytest.fixture
def create_criterion(db):
    def _create_criterion(evaluation_type, **kw):
        defaults = dict(
            type=evaluation_type,
            criteria="Quality of work",
            weight=10,
            level=2,
        )
        defaults.update(kw)
        return Criterion.objects.create(**defaults)
    return _create_criterion

@pytest.fixture
def staff_client(client, create_user):
    """Django test client logged in as a superuser for admin pages."""
    user = create_user(role=Role.ADMIN, is_staff=True, is_superuser=True)
    client.force_login(user)
    return client
