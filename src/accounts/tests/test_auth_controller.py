import pytest
from django.test.client import Client
from django.urls import reverse

pytestmark = pytest.mark.django_db


def test_register_then_me(client: Client) -> None:
    response = client.post(
        reverse("api:register"),
        data={"email": "ada@example.com", "password": "secret", "name": "Ada", "role": "host"},
        content_type="application/json",
    )

    assert response.status_code == 200, response.content
    user = response.json()
    assert user["role"] == "host"

    me = client.get(reverse("api:me"))
    assert me.status_code == 200
    assert me.json() == user


def test_register_defaults_to_attendee(client: Client) -> None:
    response = client.post(
        reverse("api:register"),
        data={"email": "bob@example.com", "password": "secret", "name": "Bob"},
        content_type="application/json",
    )

    assert response.json()["role"] == "attendee"


def test_register_rejects_invalid_email(client: Client) -> None:
    response = client.post(
        reverse("api:register"),
        data={"email": "bob", "password": "secret", "name": "Bob"},
        content_type="application/json",
    )

    assert response.status_code == 422


def test_login_with_blank_password(client: Client) -> None:
    response = client.post(
        reverse("api:login"), data={"email": "guest@example.com", "password": ""}, content_type="application/json"
    )

    assert response.status_code == 400
    assert response.json()["errors"] == {"email": ["Email and password are required"]}


def test_login_and_logout(client: Client) -> None:
    login = client.post(
        reverse("api:login"), data={"email": "host@example.com", "password": "pw"}, content_type="application/json"
    )
    assert login.status_code == 200
    assert login.json()["name"] == "host"
    assert login.json()["role"] == "host"

    assert client.post(reverse("api:logout")).json() == {"status": "ok"}
    assert client.get(reverse("api:me")).status_code == 401
