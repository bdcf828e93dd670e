"""
Pytest configuration and fixtures.
"""

import pytest
from rest_framework.test import APIClient
from rest_framework_simplejwt.tokens import AccessToken

from authentication.models import User
from menus.models import MenuTemplate
from menus.storage import MenuStorage


@pytest.fixture
def storage():
    return MenuStorage()


@pytest.fixture
def owner(db):
    return User.objects.create_user(
        "idp|owner", email="owner@bistro.test", first_name="Olive", last_name="Owner"
    )


@pytest.fixture
def stranger(db):
    return User.objects.create_user("idp|stranger", email="stranger@elsewhere.test")


@pytest.fixture
def api_client():
    return APIClient()


@pytest.fixture
def owner_client(owner):
    client = APIClient()
    client.force_authenticate(user=owner)
    return client


@pytest.fixture
def stranger_client(stranger):
    client = APIClient()
    client.force_authenticate(user=stranger)
    return client


@pytest.fixture
def template(db):
    return MenuTemplate.objects.create(
        name="Modern Indigo",
        description="Clean layout with indigo accents",
        design_config={"color_scheme": "indigo", "font_family": "inter", "spacing": 3, "header_style": "gradient"},
        category="modern",
    )


@pytest.fixture
def make_token():
    """Sign a bearer token the way the identity provider would."""
    def _make(sub, **claims):
        token = AccessToken()
        token["sub"] = sub
        for key, value in claims.items():
            token[key] = value
        return str(token)
    return _make
