"""End-to-end tests for the admin API."""

import re

import pytest

from tests.factories import wedding_form_data
from tests.harness import create_client_fixture, login_user, seed_admin

client = create_client_fixture()

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "admin-password"


@pytest.fixture
def admin_client(client):
    """Client holding an admin session cookie."""
    seed_admin(client, ADMIN_EMAIL, ADMIN_PASSWORD)
    response = client.post(
        "/admin/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200, response.text
    return client


def _wedding(client, headers, **fields):
    payload = {
        "title": "Sarah & John Wedding",
        "type": "wedding",
        "form_data": wedding_form_data(),
        **fields,
    }
    return client.post("/invitations", json=payload, headers=headers).json()["data"]


class TestAdminAuth:
    """Tests for admin login and the admin gate."""

    def test_login_and_me(self, admin_client):
        response = admin_client.get("/admin/auth/me")

        assert response.status_code == 200
        admin = response.json()["data"]
        assert admin["email"] == ADMIN_EMAIL
        assert admin["role"] == "admin"
        assert admin["last_login_at"] is not None
        assert "password_hash" not in admin

    def test_wrong_password(self, client):
        seed_admin(client, ADMIN_EMAIL, ADMIN_PASSWORD)

        response = client.post(
            "/admin/auth/login", json={"email": ADMIN_EMAIL, "password": "nope-nope"}
        )

        assert response.status_code == 401
        assert response.json()["error"] == "Invalid email or password"
        assert "admin_token" not in response.cookies

    def test_admin_routes_need_a_session(self, client):
        response = client.get("/admin/users")

        assert response.status_code == 401
        assert response.json() == {
            "success": False,
            "data": None,
            "error": "Authentication required",
        }

    def test_user_token_is_not_an_admin_token(self, client):
        headers = login_user(client, "sarah@example.com")
        token = headers["Authorization"].split(" ")[1]

        response = client.get(
            "/admin/users", headers={"Cookie": f"admin_token={token}"}
        )

        assert response.status_code == 403
        assert response.json()["error"] == "Admin access required"

    def test_admin_creates_admin(self, admin_client):
        response = admin_client.post(
            "/admin/auth/create-admin",
            json={
                "email": "second@example.com",
                "password": "another-password",
                "name": "Grace",
            },
        )

        assert response.status_code == 201
        assert response.json()["data"]["email"] == "second@example.com"


class TestAdminUsers:
    """Tests for /admin/users."""

    def test_create_list_and_find(self, admin_client):
        created = admin_client.post(
            "/admin/users", json={"email": "new@example.com", "name": "New User"}
        )
        listed = admin_client.get("/admin/users?search=new")
        found = admin_client.get("/admin/users/email/new@example.com")

        assert created.status_code == 201
        assert listed.json()["meta"]["total"] == 1
        assert found.json()["data"]["id"] == created.json()["data"]["id"]

    def test_duplicate_email(self, admin_client):
        admin_client.post("/admin/users", json={"email": "new@example.com"})

        response = admin_client.post("/admin/users", json={"email": "new@example.com"})

        assert response.status_code == 409
        assert response.json()["error"] == (
            "User with email 'new@example.com' already exists"
        )

    def test_delete(self, admin_client):
        user = admin_client.post(
            "/admin/users", json={"email": "new@example.com"}
        ).json()["data"]

        deleted = admin_client.delete(f"/admin/users/{user['id']}")
        missing = admin_client.get(f"/admin/users/{user['id']}")

        assert deleted.json()["data"]["message"] == "User deleted successfully"
        assert missing.status_code == 404

    def test_stats(self, admin_client):
        admin_client.post("/admin/users", json={"email": "new@example.com"})

        stats = admin_client.get("/admin/users/stats").json()["data"]

        assert stats["total_users"] == 1
        assert stats["recent_signups"] == 1


class TestAdminResellers:
    """Tests for /admin/resellers."""

    def test_create_and_lookup_by_referral_code(self, admin_client):
        user = admin_client.post(
            "/admin/users", json={"email": "seller@example.com"}
        ).json()["data"]

        created = admin_client.post(
            "/admin/resellers", json={"user_id": user["id"], "type": "PREMIUM"}
        )
        reseller = created.json()["data"]
        found = admin_client.get(
            f"/admin/resellers/referral/{reseller['referral_code'].lower()}"
        )

        assert created.status_code == 201
        assert re.fullmatch(r"[A-Z0-9]{8}", reseller["referral_code"])
        assert reseller["type"] == "PREMIUM"
        assert found.json()["data"]["id"] == reseller["id"]

    def test_user_can_only_be_reseller_once(self, admin_client):
        user = admin_client.post(
            "/admin/users", json={"email": "seller@example.com"}
        ).json()["data"]
        admin_client.post("/admin/resellers", json={"user_id": user["id"]})

        response = admin_client.post("/admin/resellers", json={"user_id": user["id"]})

        assert response.status_code == 409
        assert response.json()["error"] == "User is already a reseller"

    def test_stats(self, admin_client):
        user = admin_client.post(
            "/admin/users", json={"email": "seller@example.com"}
        ).json()["data"]
        admin_client.post("/admin/resellers", json={"user_id": user["id"]})

        stats = admin_client.get("/admin/resellers/stats").json()["data"]

        assert stats == {
            "total_resellers": 1,
            "type_distribution": {"FREE": 1, "PREMIUM": 0},
        }


class TestAdminInvites:
    """Tests for /admin/invites."""

    def test_list_and_lookup_across_owners(self, admin_client):
        sarah = login_user(admin_client, "sarah@example.com")
        john = login_user(admin_client, "john@example.com")
        _wedding(admin_client, sarah)
        draft = _wedding(admin_client, john, title="John's Draft")

        listed = admin_client.get("/admin/invites")
        by_slug = admin_client.get(f"/admin/invites/slug/{draft['slug']}")

        assert listed.json()["meta"]["total"] == 2
        assert by_slug.json()["data"]["id"] == draft["id"]

    def test_archive_takes_invitation_offline(self, admin_client):
        sarah = login_user(admin_client, "sarah@example.com")
        invitation = _wedding(admin_client, sarah)
        admin_client.post(f"/invitations/{invitation['id']}/publish", headers=sarah)

        response = admin_client.patch(
            f"/admin/invites/{invitation['id']}/status", json={"status": "archived"}
        )
        public = admin_client.get(f"/public/invitations/{invitation['slug']}")

        assert response.json()["data"]["status"] == "archived"
        assert response.json()["data"]["is_published"] is False
        assert public.status_code == 404

    def test_cannot_publish_through_status_change(self, admin_client):
        sarah = login_user(admin_client, "sarah@example.com")
        invitation = _wedding(admin_client, sarah)

        response = admin_client.patch(
            f"/admin/invites/{invitation['id']}/status", json={"status": "published"}
        )

        assert response.status_code == 400
        assert response.json()["error"] == "Status must be 'archived' or 'expired'"


class TestAdminTemplates:
    """Tests for /admin/templates."""

    def test_inactive_templates_only_visible_to_admins(self, admin_client):
        created = admin_client.post(
            "/admin/templates",
            json={
                "name": "Old Lace",
                "category": "wedding",
                "style": "vintage",
                "is_active": False,
            },
        )
        template = created.json()["data"]

        assert created.status_code == 201
        assert template["created_by"] == ADMIN_EMAIL
        assert admin_client.get(f"/admin/templates/{template['id']}").status_code == 200
        assert admin_client.get(f"/templates/{template['id']}").status_code == 404
        assert admin_client.get("/admin/templates").json()["meta"]["total"] == 1
        assert admin_client.get("/templates").json()["meta"]["total"] == 0

    def test_update(self, admin_client):
        template = admin_client.post(
            "/admin/templates",
            json={"name": "Rose Garden", "category": "wedding", "style": "floral"},
        ).json()["data"]

        response = admin_client.put(
            f"/admin/templates/{template['id']}", json={"is_premium": True, "price": 5}
        )

        assert response.json()["data"]["is_premium"] is True
        assert response.json()["data"]["name"] == "Rose Garden"

    def test_referenced_template_cannot_be_deleted(self, admin_client):
        template = admin_client.post(
            "/admin/templates",
            json={"name": "Rose Garden", "category": "wedding", "style": "floral"},
        ).json()["data"]
        sarah = login_user(admin_client, "sarah@example.com")
        _wedding(admin_client, sarah, template_id=template["id"])

        blocked = admin_client.delete(f"/admin/templates/{template['id']}")
        usage = admin_client.get(f"/admin/templates/{template['id']}")

        assert blocked.status_code == 409
        assert usage.json()["data"]["usage_count"] == 1

    def test_delete_unused_template(self, admin_client):
        template = admin_client.post(
            "/admin/templates",
            json={"name": "Rose Garden", "category": "wedding", "style": "floral"},
        ).json()["data"]

        response = admin_client.delete(f"/admin/templates/{template['id']}")

        assert response.json()["data"]["message"] == "Template deleted successfully"
