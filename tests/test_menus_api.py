"""
Menu endpoint tests (/api/menus).

Covers:
  - authentication required (401 envelope)
  - create: 201, share slug, unpublished default, owner from token
  - create validation: missing name, bad design config, inactive template
  - list: only caller's menus, is_published filter
  - detail: full nested aggregate for owner
  - foreign menu is indistinguishable from a missing one
  - PUT/PATCH partial update
  - delete: 204, cascade, foreign delete refused
  - unexpected errors: generic 500 body without exception text
"""

from datetime import timedelta

import pytest
from django.utils import timezone

from menus.models import Menu, MenuSection, MenuItem
from menus.storage import MenuStorage
from menus.views import MenuListCreateView


pytestmark = pytest.mark.django_db


def _create_menu(client, **body):
    body.setdefault("name", "Bistro")
    response = client.post("/api/menus", body, format="json")
    assert response.status_code == 201, response.content
    return response.json()


def test_menus_require_authentication(api_client):
    response = api_client.get("/api/menus")

    assert response.status_code == 401
    body = response.json()
    assert body["error"] is True
    assert body["message"] == "Authentication required"
    assert body["status_code"] == 401


def test_create_menu(owner_client, owner, template):
    menu = _create_menu(owner_client, template=template.id, restaurant_name="Chez Olive")

    assert menu["id"]
    assert menu["user"] == owner.pk
    assert menu["name"] == "Bistro"
    assert menu["template"] == template.id
    assert menu["is_published"] is False
    assert isinstance(menu["share_slug"], str) and len(menu["share_slug"]) == 10
    assert menu["design_config"] == template.design_config


def test_create_menu_ignores_client_slug_and_owner(owner_client, owner, stranger):
    menu = _create_menu(owner_client, share_slug="chosen", user=stranger.pk)

    assert menu["share_slug"] != "chosen"
    assert menu["user"] == owner.pk


def test_create_menu_starts_unpublished(owner_client):
    menu = _create_menu(owner_client, is_published=True)

    assert menu["is_published"] is False
    assert Menu.objects.get(pk=menu["id"]).is_published is False


def test_create_menu_requires_name(owner_client):
    response = owner_client.post("/api/menus", {"tagline": "No name"}, format="json")

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation error"
    assert "name" in body["details"]
    assert not Menu.objects.exists()


def test_create_menu_rejects_long_fields(owner_client):
    response = owner_client.post("/api/menus", {"name": "x" * 201, "tagline": "y" * 301}, format="json")

    assert response.status_code == 400
    assert set(response.json()["details"]) == {"name", "tagline"}


@pytest.mark.parametrize("design_config", [
    {"color_scheme": "neon"},
    {"spacing": 9},
    {"font_family": "inter", "sparkles": True},
    "indigo",
])
def test_create_menu_rejects_bad_design_config(owner_client, design_config):
    response = owner_client.post("/api/menus", {"name": "Bistro", "design_config": design_config}, format="json")

    assert response.status_code == 400
    assert "design_config" in response.json()["details"]
    assert not Menu.objects.exists()


def test_create_menu_rejects_inactive_template(owner_client, template):
    template.is_active = False
    template.save()

    response = owner_client.post("/api/menus", {"name": "Bistro", "template": template.id}, format="json")

    assert response.status_code == 400
    assert "template" in response.json()["details"]


def test_list_menus_only_own(owner_client, stranger_client):
    mine = _create_menu(owner_client, name="Mine")
    _create_menu(stranger_client, name="Theirs")

    response = owner_client.get("/api/menus")

    assert response.status_code == 200
    assert [m["id"] for m in response.json()] == [mine["id"]]


def test_list_menus_filter_published(owner_client):
    draft = _create_menu(owner_client, name="Draft")
    live = _create_menu(owner_client, name="Live")
    owner_client.put(f"/api/menus/{live['id']}", {"is_published": True}, format="json")

    published = owner_client.get("/api/menus", {"is_published": "true"}).json()
    drafts = owner_client.get("/api/menus", {"is_published": "false"}).json()

    assert [m["id"] for m in published] == [live["id"]]
    assert [m["id"] for m in drafts] == [draft["id"]]


def test_get_full_menu(owner_client):
    menu = _create_menu(owner_client)
    mains = owner_client.post(f"/api/menus/{menu['id']}/sections", {"name": "Mains", "sort_order": 1}, format="json").json()
    starters = owner_client.post(f"/api/menus/{menu['id']}/sections", {"name": "Starters", "sort_order": 0}, format="json").json()
    owner_client.post(f"/api/sections/{starters['id']}/items", {"name": "Soup", "price": "5.50"}, format="json")

    response = owner_client.get(f"/api/menus/{menu['id']}")

    assert response.status_code == 200
    body = response.json()
    assert body["menu"]["id"] == menu["id"]
    assert [s["id"] for s in body["sections"]] == [starters["id"], mains["id"]]
    assert [i["name"] for i in body["sections"][0]["items"]] == ["Soup"]
    assert body["sections"][1]["items"] == []


def test_foreign_menu_looks_missing(owner_client, stranger_client):
    menu = _create_menu(owner_client)

    foreign = stranger_client.get(f"/api/menus/{menu['id']}")
    missing = stranger_client.get("/api/menus/999999")

    assert foreign.status_code == missing.status_code == 404
    assert foreign.json() == missing.json()


def test_partial_update_changes_only_given_field(owner_client):
    menu = _create_menu(owner_client, restaurant_name="Chez Olive", tagline="Old", description="Since 1999")
    Menu.objects.filter(pk=menu["id"]).update(updated_at=timezone.now() - timedelta(days=1))
    before = owner_client.get(f"/api/menus/{menu['id']}").json()["menu"]

    response = owner_client.put(f"/api/menus/{menu['id']}", {"tagline": "X"}, format="json")

    assert response.status_code == 200
    after = response.json()
    assert after["tagline"] == "X"
    assert after["updated_at"] != before["updated_at"]
    changed = {key for key in after if after[key] != before[key]}
    assert changed == {"tagline", "updated_at"}


def test_patch_is_partial_too(owner_client):
    menu = _create_menu(owner_client, tagline="Keep me")

    response = owner_client.patch(f"/api/menus/{menu['id']}", {"restaurant_name": "Olive's"}, format="json")

    assert response.status_code == 200
    assert response.json()["tagline"] == "Keep me"
    assert response.json()["restaurant_name"] == "Olive's"


def test_update_validation_does_not_write(owner_client):
    menu = _create_menu(owner_client, tagline="Safe")

    response = owner_client.put(
        f"/api/menus/{menu['id']}", {"tagline": "Changed", "design_config": {"spacing": 0}}, format="json"
    )

    assert response.status_code == 400
    assert Menu.objects.get(pk=menu["id"]).tagline == "Safe"


def test_update_foreign_menu(owner_client, stranger_client):
    menu = _create_menu(owner_client)

    response = stranger_client.put(f"/api/menus/{menu['id']}", {"is_published": True}, format="json")

    assert response.status_code == 404
    assert Menu.objects.get(pk=menu["id"]).is_published is False


def test_delete_menu(owner_client):
    menu = _create_menu(owner_client)
    section = owner_client.post(f"/api/menus/{menu['id']}/sections", {"name": "Starters"}, format="json").json()
    owner_client.post(f"/api/sections/{section['id']}/items", {"name": "Soup", "price": "5.50"}, format="json")

    response = owner_client.delete(f"/api/menus/{menu['id']}")

    assert response.status_code == 204
    assert owner_client.get(f"/api/menus/{menu['id']}").status_code == 404
    assert not MenuSection.objects.exists()
    assert not MenuItem.objects.exists()


def test_delete_foreign_menu(owner_client, stranger_client):
    menu = _create_menu(owner_client)

    response = stranger_client.delete(f"/api/menus/{menu['id']}")

    assert response.status_code == 404
    assert Menu.objects.filter(pk=menu["id"]).exists()


class BrokenStorage(MenuStorage):
    def get_user_menus(self, user):
        raise RuntimeError("could not connect to server at 10.0.0.5:5432")


def test_unexpected_error_hides_internals(owner_client, monkeypatch):
    monkeypatch.setattr(MenuListCreateView, "storage_class", BrokenStorage)

    response = owner_client.get("/api/menus")

    assert response.status_code == 500
    assert response.json() == {
        "error": True,
        "message": "An unexpected error occurred",
        "details": {},
        "status_code": 500,
    }
    assert b"10.0.0.5" not in response.content
