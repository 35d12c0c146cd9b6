from __future__ import annotations

from datetime import timedelta

from httpx import AsyncClient

from taskhub.app.core.config import get_settings
from taskhub.app.core.security import create_access_token, decode_token
from taskhub.app.models import User


async def test_signup_returns_token_user_and_cookie(client: AsyncClient) -> None:
    response = await client.post(
        "/api/auth/signup",
        json={"name": "Ada Lovelace", "email": "Ada@Example.com", "password": "secret1"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["message"]
    assert body["token"]
    assert body["user"]["name"] == "Ada Lovelace"
    assert body["user"]["email"] == "ada@example.com"
    assert body["user"]["createdAt"]
    assert "hashedPassword" not in body["user"]
    assert "password" not in response.text

    set_cookie = response.headers["set-cookie"]
    assert set_cookie.startswith("token=")
    assert "HttpOnly" in set_cookie
    assert "samesite=strict" in set_cookie.lower()


async def test_signup_then_login_with_same_credentials(client: AsyncClient, register_user) -> None:
    user = await register_user(email="grace@example.com", password="hopper42")

    response = await client.post(
        "/api/auth/login",
        json={"email": "GRACE@example.com", "password": "hopper42"},
    )

    assert response.status_code == 200
    body = response.json()
    assert body["user"]["id"] == user.id
    settings = get_settings()
    claims = decode_token(token=body["token"], secret=settings.jwt_secret_key, algorithm=settings.jwt_algorithm)
    assert claims["sub"] == user.id
    assert claims["email"] == "grace@example.com"


async def test_duplicate_signup_is_rejected_without_second_record(client: AsyncClient, register_user) -> None:
    await register_user(email="dup@example.com")

    response = await client.post(
        "/api/auth/signup",
        json={"name": "Someone Else", "email": "DUP@example.com", "password": "another1"},
    )

    assert response.status_code == 400
    payload = response.json()
    assert payload["code"] == "conflict"
    assert payload["message"] == "Email already registered."
    assert await User.find({"email": "dup@example.com"}).count() == 1


async def test_signup_validation_lists_field_errors(client: AsyncClient) -> None:
    response = await client.post(
        "/api/auth/signup",
        json={"name": "A", "email": "not-an-email", "password": "123"},
    )

    assert response.status_code == 400
    payload = response.json()
    assert payload["code"] == "validation_error"
    fields = {error["field"] for error in payload["details"]["errors"]}
    assert fields == {"name", "email", "password"}
    assert await User.find_all().count() == 0


async def test_login_failures_share_one_message(client: AsyncClient, register_user) -> None:
    await register_user(email="known@example.com", password="correct1")

    wrong_password = await client.post(
        "/api/auth/login",
        json={"email": "known@example.com", "password": "incorrect"},
    )
    unknown_email = await client.post(
        "/api/auth/login",
        json={"email": "nobody@example.com", "password": "correct1"},
    )

    for response in (wrong_password, unknown_email):
        assert response.status_code == 401
        assert response.json()["code"] == "authentication_error"
        assert response.json()["message"] == "Invalid email or password."


async def test_me_with_bearer_token(client: AsyncClient, register_user) -> None:
    user = await register_user(name="Bearer User")

    response = await client.get("/api/auth/me", headers=user.headers)

    assert response.status_code == 200
    assert response.json()["user"] == {
        "id": user.id,
        "name": "Bearer User",
        "email": user.email,
        "createdAt": response.json()["user"]["createdAt"],
    }


async def test_token_problems_have_distinct_messages(client: AsyncClient, register_user) -> None:
    user = await register_user()
    expired = create_access_token(
        subject=user.id,
        email=user.email,
        settings=get_settings(),
        expires_delta=timedelta(seconds=-5),
    )

    missing = await client.get("/api/auth/me")
    malformed = await client.get("/api/auth/me", headers={"Authorization": "Bearer not-a-jwt"})
    expired_response = await client.get("/api/auth/me", headers={"Authorization": f"Bearer {expired.token}"})

    assert missing.status_code == 401
    assert missing.json()["message"] == "Authentication required."
    assert missing.headers["WWW-Authenticate"] == "Bearer"
    assert malformed.status_code == 401
    assert malformed.json()["message"] == "Invalid token."
    assert expired_response.status_code == 401
    assert expired_response.json()["message"] == "Token expired."


async def test_token_signed_with_another_secret_is_invalid(client: AsyncClient, register_user) -> None:
    user = await register_user()
    forged = create_access_token(
        subject=user.id,
        email=user.email,
        settings=get_settings().model_copy(update={"jwt_secret_key": "someone-else"}),
    )

    response = await client.get("/api/projects", headers={"Authorization": f"Bearer {forged.token}"})

    assert response.status_code == 401
    assert response.json()["message"] == "Invalid token."


async def test_cookie_session_and_logout(client: AsyncClient) -> None:
    signup = await client.post(
        "/api/auth/signup",
        json={"name": "Cookie User", "email": "cookie@example.com", "password": "secret1"},
    )
    assert signup.status_code == 201

    me = await client.get("/api/auth/me")
    assert me.status_code == 200
    assert me.json()["user"]["email"] == "cookie@example.com"

    logout = await client.post("/api/auth/logout")
    assert logout.status_code == 200
    assert logout.json() == {"message": "Logged out successfully."}

    after = await client.get("/api/auth/me")
    assert after.status_code == 401
    assert after.json()["message"] == "Authentication required."


async def test_cookie_takes_precedence_over_header(client: AsyncClient, register_user) -> None:
    header_user = await register_user(name="Header User")
    await client.post(
        "/api/auth/signup",
        json={"name": "Cookie Owner", "email": "owner@example.com", "password": "secret1"},
    )

    response = await client.get("/api/auth/me", headers=header_user.headers)

    assert response.json()["user"]["email"] == "owner@example.com"


async def test_vanished_user(client: AsyncClient, register_user) -> None:
    user = await register_user()
    await User.get_motor_collection().delete_many({})

    me = await client.get("/api/auth/me", headers=user.headers)
    projects = await client.get("/api/projects", headers=user.headers)

    assert me.status_code == 404
    assert me.json()["message"] == "User not found."
    assert projects.status_code == 401
    assert projects.json()["message"] == "User not found."
