import pytest
from unittest.mock import MagicMock

from app.modules.profiles.models import NO_ROWS, UNDEFINED_TABLE
from app.modules.students.service import generate_temporary_password


def profiles_query(supabase_mock):
    return supabase_mock.table.return_value.select.return_value.eq.return_value


def test_temporary_password():
    password = generate_temporary_password()

    assert len(password) == 8
    assert password.isalnum() and password == password.lower()


def test_students_forbidden_for_students(auth_client, role_query):
    role_query.return_value = MagicMock(data={"role": "student"})

    response = auth_client.get("/api/v1/students")

    assert response.status_code == 403
    assert response.json()["detail"] == "Insufficient role. Required: teacher"


def test_list_students(auth_client, supabase_mock, role_query):
    role_query.return_value = MagicMock(data={"role": "teacher"})
    profiles_query(supabase_mock).order.return_value.execute.return_value = MagicMock(data=[
        {"id": "s2", "email": "bo@example.com", "created_at": "2024-02-01T00:00:00+00:00"},
        {"id": "s1", "email": "cy@example.com", "created_at": "2024-01-01T00:00:00+00:00"},
    ])

    response = auth_client.get("/api/v1/students")

    assert response.status_code == 200
    assert [s["id"] for s in response.json()] == ["s2", "s1"]
    supabase_mock.table.return_value.select.return_value.eq.assert_called_with("role", "student")
    profiles_query(supabase_mock).order.assert_called_with("created_at", desc=True)


def test_search_students(auth_client, supabase_mock, role_query):
    role_query.return_value = MagicMock(data={"role": "teacher"})
    profiles_query(supabase_mock).ilike.return_value.order.return_value.execute.return_value = MagicMock(data=[])

    response = auth_client.get("/api/v1/students", params={"search": " bo "})

    assert response.status_code == 200
    profiles_query(supabase_mock).ilike.assert_called_once_with("email", "%bo%")


def test_list_students_without_table(auth_client, supabase_mock, role_query, api_error):
    role_query.return_value = MagicMock(data={"role": "teacher"})
    profiles_query(supabase_mock).order.return_value.execute.side_effect = api_error(UNDEFINED_TABLE)

    response = auth_client.get("/api/v1/students")

    assert response.status_code == 200
    assert response.json() == []


def test_add_student(auth_client, supabase_mock, role_query, api_error):
    # First lookup resolves the caller's role, the second checks the email is free
    role_query.side_effect = [MagicMock(data={"role": "teacher"}), api_error(NO_ROWS)]
    created = MagicMock()
    created.id = "s3"
    created.created_at = "2024-03-01T00:00:00+00:00"
    supabase_mock.auth.admin.create_user.return_value = MagicMock(user=created)

    response = auth_client.post("/api/v1/students", json={"email": "dee@example.com"})

    assert response.status_code == 201
    data = response.json()
    assert data["id"] == "s3"
    assert data["message"] == "Student added successfully"
    assert len(data["temporary_password"]) == 8
    args = supabase_mock.auth.admin.create_user.call_args[0][0]
    assert args["email"] == "dee@example.com"
    assert args["email_confirm"] is True
    assert args["password"] == data["temporary_password"]


def test_add_existing_student(auth_client, supabase_mock, role_query):
    role_query.side_effect = [MagicMock(data={"role": "teacher"}), MagicMock(data={"id": "s1"})]

    response = auth_client.post("/api/v1/students", json={"email": "cy@example.com"})

    assert response.status_code == 400
    assert response.json()["detail"] == "A user with this email already exists"
    supabase_mock.auth.admin.create_user.assert_not_called()


def test_add_student_rejects_bad_email(auth_client, role_query):
    role_query.return_value = MagicMock(data={"role": "teacher"})
    assert auth_client.post("/api/v1/students", json={"email": "not-an-email"}).status_code == 422
