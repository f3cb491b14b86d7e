import pytest
from unittest.mock import MagicMock

from app.main import app
from app.modules.profiles import service as profile_service
from app.modules.profiles.routes import get_profile_service
from app.modules.profiles.service import ProfileService, default_display_name

PROFILE_ROW = {
    "id": "user-1",
    "email": "ana@example.com",
    "role": "teacher",
    "created_at": "2024-01-01T00:00:00+00:00",
    "updated_at": None,
}


@pytest.fixture
def profiles_client(auth_client, supabase_mock):
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(supabase_mock, admin=supabase_mock)
    supabase_mock.table.return_value.select.return_value.eq.return_value.maybe_single.return_value.execute.return_value = \
        MagicMock(data=dict(PROFILE_ROW))
    return auth_client


@pytest.fixture
def verifier(monkeypatch):
    """Client used to check the current password."""
    client = MagicMock()
    monkeypatch.setattr(profile_service, "create_client", lambda url, key: client)
    return client


def test_default_display_name():
    assert default_display_name({"email": "ana@example.com", "user_metadata": {}}) == "ana"
    assert default_display_name({"email": "ana@example.com", "user_metadata": {"display_name": "Ana"}}) == "Ana"


def test_get_profile(profiles_client):
    response = profiles_client.get("/api/v1/profiles/me")

    assert response.status_code == 200
    data = response.json()
    assert data["role"] == "teacher"
    assert data["display_name"] == "ana"


def test_get_profile_missing_row(profiles_client, supabase_mock):
    supabase_mock.table.return_value.select.return_value.eq.return_value.maybe_single.return_value.execute.return_value = None

    assert profiles_client.get("/api/v1/profiles/me").status_code == 404


def test_update_display_name(profiles_client, supabase_mock):
    response = profiles_client.put("/api/v1/profiles/me", json={"display_name": "  Ms. Ana "})

    assert response.status_code == 200
    assert response.json()["display_name"] == "Ms. Ana"
    supabase_mock.auth.admin.update_user_by_id.assert_called_once_with(
        "user-1", {"user_metadata": {"display_name": "Ms. Ana"}}
    )


def test_update_blank_display_name(profiles_client):
    response = profiles_client.put("/api/v1/profiles/me", json={"display_name": "   "})

    assert response.status_code == 400
    assert response.json()["detail"] == "Display name cannot be empty"


@pytest.mark.parametrize("body, detail", [
    ({"current_password": "old", "new_password": "newpass"}, "All password fields are required"),
    ({"current_password": "old", "new_password": "newpass", "confirm_password": "other1"}, "New passwords do not match"),
    ({"current_password": "old", "new_password": "abc", "confirm_password": "abc"}, "Password must be at least 6 characters"),
])
def test_password_validation(profiles_client, body, detail):
    response = profiles_client.post("/api/v1/profiles/me/password", json=body)

    assert response.status_code == 400
    assert response.json()["detail"] == detail


def test_password_wrong_current(profiles_client, supabase_mock, verifier):
    verifier.auth.sign_in_with_password.side_effect = Exception("Invalid login credentials")

    response = profiles_client.post("/api/v1/profiles/me/password", json={
        "current_password": "wrong", "new_password": "newpass", "confirm_password": "newpass"
    })

    assert response.status_code == 401
    assert response.json()["detail"] == "Current password is incorrect"
    supabase_mock.auth.admin.update_user_by_id.assert_not_called()


def test_password_changed(profiles_client, supabase_mock, verifier):
    response = profiles_client.post("/api/v1/profiles/me/password", json={
        "current_password": "oldpass", "new_password": "newpass", "confirm_password": "newpass"
    })

    assert response.status_code == 200
    assert response.json() == {"message": "Password changed successfully"}
    verifier.auth.sign_in_with_password.assert_called_once_with({"email": "ana@example.com", "password": "oldpass"})
    supabase_mock.auth.admin.update_user_by_id.assert_called_once_with("user-1", {"password": "newpass"})


def test_password_change_needs_service_key(auth_client, supabase_mock):
    app.dependency_overrides[get_profile_service] = lambda: ProfileService(supabase_mock)

    response = auth_client.post("/api/v1/profiles/me/password", json={
        "current_password": "oldpass", "new_password": "newpass", "confirm_password": "newpass"
    })

    assert response.status_code == 500
