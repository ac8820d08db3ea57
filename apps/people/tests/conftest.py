import pytest
from rest_framework.test import APIClient
from apps.people.models import Person
from apps.people.services import get_current_user


@pytest.fixture
def api_client():
    """Return an API client. The app has no authentication."""
    return APIClient()


@pytest.fixture
def me(db):
    """Return the current device user."""
    return get_current_user()


@pytest.fixture
def alice(db):
    """Create and return a contact."""
    return Person.objects.create(name='Alice', color_name='pink-500')


@pytest.fixture
def bob(db):
    """Create and return a second contact."""
    return Person.objects.create(name='Bob', color_name='teal-500')
