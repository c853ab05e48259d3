import pytest
from fastapi import status
from fastapi.testclient import TestClient
from structlog.testing import capture_logs

from app.core.settings import Env, settings
from app.deps import get_student_repo


def test_root_welcome(client):
    response = client.get("/")
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "Welcome to School Management System API"}


def test_healthz_and_request_id(client):
    response = client.get("/healthz", headers={"X-Request-ID": "abc-123"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["status"] == "ok"
    assert response.headers["X-Request-ID"] == "abc-123"


def test_create_student(client, student_payload):
    response = client.post("/students", json=student_payload)

    assert response.status_code == status.HTTP_201_CREATED
    body = response.json()
    assert body["message"] == "Student created successfully"
    data = body["data"]
    assert data["registrationNo"] == "REG-2024-0001"
    assert data["name"] == "Asha"
    assert data["class"] == "10A"
    assert data["rollNo"] == 5
    assert data["contactNumber"] == "9876543210"
    assert data["status"] is True


def test_create_ignores_status_from_body(client, student_payload):
    response = client.post("/students", json={**student_payload, "status": False})
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["data"]["status"] is True


def test_create_then_get(client, student_payload):
    client.post("/students", json=student_payload)

    response = client.get("/students/REG-2024-0001")
    assert response.status_code == status.HTTP_200_OK
    data = response.json()["data"]
    for key in ("registrationNo", "name", "class", "rollNo", "contactNumber"):
        assert data[key] == student_payload[key]
    assert data["status"] is True


def test_create_duplicate_registration(client, student_payload):
    assert client.post("/students", json=student_payload).status_code == 201

    response = client.post("/students", json={**student_payload, "rollNo": 6})
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json() == {
        "error": "Student with this registration number already exists"
    }


def test_create_duplicate_roll_in_class(client, student_payload):
    client.post("/students", json=student_payload)

    response = client.post(
        "/students", json={**student_payload, "registrationNo": "REG-2024-0002"}
    )
    assert response.status_code == status.HTTP_409_CONFLICT
    assert response.json()["error"] == "Roll number 5 is already assigned in class 10A"


def test_create_missing_fields(client):
    response = client.post("/students", json={})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert len(response.json()["errors"]) == 5


def test_create_invalid_formats(client, student_payload):
    response = client.post(
        "/students",
        json={
            **student_payload,
            "registrationNo": "ABC-2024-0001",
            "rollNo": "abc",
            "contactNumber": "12345",
        },
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"] == [
        "Invalid registration number format. Expected: REG-YYYY-XXXX",
        "Roll number must be a positive integer",
        "Contact number must be a 10-digit number",
    ]


def test_create_wrong_types_reported_with_other_errors(client, student_payload):
    response = client.post(
        "/students",
        json={
            **student_payload,
            "registrationNo": 20240001,
            "name": "",
            "class": 10,
            "contactNumber": "1",
        },
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"] == [
        "Name is required",
        "Class must be a string",
        "Invalid registration number format. Expected: REG-YYYY-XXXX",
        "Contact number must be a 10-digit number",
    ]


def test_create_fractional_roll_no(client, student_payload):
    response = client.post("/students", json={**student_payload, "rollNo": 5.5})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"] == ["Roll number must be a positive integer"]


def test_create_non_object_body_is_bad_request(client):
    response = client.post("/students", json=["REG-2024-0001"])
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "errors" in response.json()


def test_list_students_pagination(client, student_payload):
    for i, name in enumerate(["Eva", "Bruno", "Asha"], start=1):
        client.post(
            "/students",
            json={
                **student_payload,
                "registrationNo": f"REG-2024-{i:04d}",
                "name": name,
                "rollNo": i,
            },
        )

    response = client.get("/students", params={"page": 1, "limit": 2})
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert [s["name"] for s in body["data"]] == ["Asha", "Bruno"]
    assert body["meta"] == {"total": 3, "page": 1, "limit": 2, "totalPages": 2}


def test_list_students_defaults(client, test_student):
    body = client.get("/students").json()
    assert body["meta"] == {"total": 1, "page": 1, "limit": 10, "totalPages": 1}
    assert body["data"][0]["registrationNo"] == test_student.registration_no


def test_list_students_status_filter(client, test_student):
    client.delete(f"/students/{test_student.registration_no}")

    assert client.get("/students", params={"status": "true"}).json()["meta"]["total"] == 0
    assert client.get("/students", params={"status": "false"}).json()["meta"]["total"] == 1


@pytest.mark.parametrize("params", [{"page": 0}, {"limit": 0}, {"page": "abc"}])
def test_list_students_bad_pagination(client, params):
    response = client.get("/students", params=params)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert "errors" in response.json()


def test_get_student_not_found(client):
    response = client.get("/students/REG-2024-9999")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"error": "Student not found"}


def test_get_student_bad_param(client):
    response = client.get("/students/REG-24-1")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json() == {
        "errors": ["Invalid registration number format. Expected: REG-YYYY-XXXX"]
    }


def test_update_student(client, student_payload):
    client.post("/students", json=student_payload)

    response = client.put(
        "/students/REG-2024-0001", json={"name": "Asha K", "class": "10B"}
    )
    assert response.status_code == status.HTTP_200_OK
    body = response.json()
    assert body["message"] == "Student updated successfully"
    assert body["data"]["name"] == "Asha K"
    assert body["data"]["class"] == "10B"
    assert body["data"]["rollNo"] == 5


def test_update_zero_roll_no_keeps_value(client, student_payload):
    client.post("/students", json=student_payload)

    response = client.put("/students/REG-2024-0001", json={"rollNo": 0})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["rollNo"] == 5


def test_update_status_string_is_truthy(client, student_payload):
    client.post("/students", json=student_payload)

    response = client.put("/students/REG-2024-0001", json={"status": "false"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json()["data"]["status"] is True

    response = client.put("/students/REG-2024-0001", json={"status": False})
    assert response.json()["data"]["status"] is False


def test_update_conflict(client, student_payload):
    client.post("/students", json=student_payload)
    client.post(
        "/students",
        json={**student_payload, "registrationNo": "REG-2024-0002", "rollNo": 6},
    )

    response = client.put("/students/REG-2024-0002", json={"rollNo": 5})
    assert response.status_code == status.HTTP_409_CONFLICT


def test_update_validation(client, student_payload):
    client.post("/students", json=student_payload)

    response = client.put(
        "/students/REG-2024-0001", json={"contactNumber": "98765432100"}
    )
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"] == ["Contact number must be a 10-digit number"]


def test_update_bad_param_checked_before_body(client):
    response = client.put("/students/bad", json={"contactNumber": "1"})
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["errors"] == [
        "Invalid registration number format. Expected: REG-YYYY-XXXX"
    ]


def test_update_not_found(client):
    response = client.put("/students/REG-2024-9999", json={"name": "X"})
    assert response.status_code == status.HTTP_404_NOT_FOUND


def test_soft_delete_is_idempotent(client, test_student):
    url = f"/students/{test_student.registration_no}"
    for _ in range(2):
        response = client.delete(url)
        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"message": "Student deactivated successfully"}

    data = client.get(url).json()["data"]
    assert data["status"] is False


def test_permanent_delete(client, test_student):
    url = f"/students/{test_student.registration_no}"
    response = client.delete(url, params={"permanent": "true"})
    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"message": "Student permanently deleted"}

    assert client.get(url).status_code == status.HTTP_404_NOT_FOUND
    assert client.delete(url).status_code == status.HTTP_404_NOT_FOUND


def test_unknown_route(client):
    response = client.get("/nope")
    assert response.status_code == status.HTTP_404_NOT_FOUND
    assert response.json() == {"detail": "Not Found"}


@pytest.fixture
def broken_client(override_get_db):
    """Client whose repository fails on the first lookup."""
    from app.db import get_db
    from app.main import app

    class BrokenRepo:
        def find_unique(self, registration_no):
            raise RuntimeError("database went away")

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_student_repo] = lambda: BrokenRepo()
    with TestClient(app, raise_server_exceptions=False) as client:
        yield client
    app.dependency_overrides.clear()


def test_unexpected_error_is_500(broken_client):
    response = broken_client.get("/students/REG-2024-0001")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {"error": "Server error", "message": "database went away"}


def test_unexpected_error_hides_details_outside_dev(broken_client, monkeypatch):
    monkeypatch.setattr(settings, "APP_ENV", Env.PROD)
    monkeypatch.setattr(settings, "DEBUG", False)

    response = broken_client.get("/students/REG-2024-0001")

    assert response.status_code == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert response.json() == {
        "error": "Server error",
        "message": "An unexpected error occurred",
    }


def test_unexpected_error_logged_once_with_request_end(broken_client):
    with capture_logs() as logs:
        broken_client.get("/students/REG-2024-0001")

    events = [entry["event"] for entry in logs]
    assert events.count("request.unhandled_error") == 1
    assert "request.error" not in events

    ends = [entry for entry in logs if entry["event"] == "request.end"]
    assert len(ends) == 1
    assert ends[0]["status_code"] == status.HTTP_500_INTERNAL_SERVER_ERROR
    assert "duration_ms" in ends[0]
