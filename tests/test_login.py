"""
Smoke tests for user login endpoint and the /me account view.
"""
import pytest

from conftest import auth_headers


@pytest.fixture
def test_user(make_user):
    return make_user(email="test_login@example.com", password="testpass123", plan="pro")


def test_login_success(client, test_user):
    response = client.post(
        "/auth/login",
        data={"username": "test_login@example.com", "password": "testpass123"},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["token_type"] == "bearer"
    assert len(data["access_token"]) > 0


def test_login_token_works_for_me(client, test_user):
    token = client.post(
        "/auth/login",
        data={"username": "Test_Login@example.com", "password": "testpass123"},
    ).json()["access_token"]

    response = client.get("/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 200
    assert response.json() == {
        "email": "test_login@example.com",
        "plan": "pro",
        "subscription_status": "incomplete",
    }


def test_login_wrong_password(client, test_user):
    response = client.post(
        "/auth/login",
        data={"username": "test_login@example.com", "password": "wrong_password_123"},
    )

    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid credentials"


def test_login_nonexistent_email(client):
    response = client.post(
        "/auth/login",
        data={"username": "nonexistent@example.com", "password": "somepassword123"},
    )
    assert response.status_code == 401


def test_login_missing_fields(client):
    response = client.post("/auth/login", data={"username": "test@example.com"})
    assert response.status_code == 422


def test_me_for_deleted_user(client, test_user, db_session):
    headers = auth_headers(test_user)
    db_session.delete(test_user)
    db_session.commit()

    response = client.get("/me", headers=headers)

    assert response.status_code == 401
