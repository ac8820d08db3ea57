import pytest
from django.urls import reverse
from rest_framework import status
from apps.people.models import Person, CURRENT_USER_ID


@pytest.mark.django_db
class TestPersonList:
    """Tests for GET /api/people/"""

    def test_list_excludes_current_user(self, api_client, me, alice, bob):
        url = reverse('people:person-list')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert [p['name'] for p in response.data] == ['Alice', 'Bob']


@pytest.mark.django_db
class TestPersonCreate:
    """Tests for POST /api/people/"""

    def test_create_person(self, api_client):
        url = reverse('people:person-list')
        response = api_client.post(url, {'name': 'Carol'}, format='json')

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data['name'] == 'Carol'
        assert response.data['is_current_user'] is False
        assert Person.objects.filter(name='Carol').exists()

    def test_create_person_blank_name(self, api_client):
        url = reverse('people:person-list')
        response = api_client.post(url, {'name': '   '}, format='json')

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.django_db
class TestPersonMe:
    """Tests for GET /api/people/me/"""

    def test_me_creates_current_user(self, api_client):
        url = reverse('people:person-me')
        response = api_client.get(url)

        assert response.status_code == status.HTTP_200_OK
        assert response.data['id'] == CURRENT_USER_ID
        assert response.data['is_current_user'] is True


@pytest.mark.django_db
class TestPersonDelete:
    """Tests for DELETE /api/people/{id}/"""

    def test_delete_contact(self, api_client, alice):
        url = reverse('people:person-detail', kwargs={'pk': alice.id})
        response = api_client.delete(url)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not Person.objects.filter(id=alice.id).exists()

    def test_delete_current_user_forbidden(self, api_client, me):
        url = reverse('people:person-detail', kwargs={'pk': me.id})
        response = api_client.delete(url)

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert 'error' in response.data

    def test_delete_missing(self, api_client, db):
        url = reverse('people:person-detail', kwargs={'pk': 'missing'})
        response = api_client.delete(url)

        assert response.status_code == status.HTTP_404_NOT_FOUND
