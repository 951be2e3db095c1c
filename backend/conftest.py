"""
Shared pytest fixtures for the driving compliance backend.
"""

import pytest
from rest_framework.test import APIClient


@pytest.fixture
def driver(django_user_model):
    return django_user_model.objects.create_user(username="driver", password="secret-pass-123")


@pytest.fixture
def other_driver(django_user_model):
    return django_user_model.objects.create_user(username="other", password="secret-pass-123")


@pytest.fixture
def api_client(driver):
    client = APIClient()
    client.force_authenticate(user=driver)
    return client
