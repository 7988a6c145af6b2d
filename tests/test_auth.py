"""Tests for registration, login and bearer tokens."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from bookcircle.config import JWT_ALGORITHM, JWT_SECRET
from bookcircle.errors import Unauthorized
from bookcircle.security import decode_token, hash_password, issue_token, verify_password


def test_password_hash_round_trip():
    hashed = hash_password("hunter22")
    assert hashed != "hunter22"
    assert verify_password(hashed, "hunter22")
    assert not verify_password(hashed, "hunter23")


def test_token_carries_user_id():
    assert decode_token(issue_token(42)).user_id == 42


def test_expired_token_rejected():
    token = issue_token(42, now=datetime.now(UTC) - timedelta(days=1))
    with pytest.raises(Unauthorized):
        decode_token(token)


def test_token_with_wrong_secret_rejected():
    token = jwt.encode({"sub": "42"}, "some-other-secret", algorithm=JWT_ALGORITHM)
    with pytest.raises(Unauthorized):
        decode_token(token)


def test_token_without_subject_rejected():
    token = jwt.encode({"exp": datetime.now(UTC) + timedelta(minutes=5)}, JWT_SECRET, algorithm=JWT_ALGORITHM)
    with pytest.raises(Unauthorized):
        decode_token(token)


@pytest.mark.asyncio
async def test_register_and_login(client):
    resp = await client.post("/auth/register", json={"email": "Reader@Example.com ", "password": "pw123456"})
    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "User created"
    user_id = body["userId"]

    resp = await client.post("/auth/login", json={"email": "reader@example.com", "password": "pw123456"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["userId"] == user_id
    assert decode_token(data["token"]).user_id == user_id


@pytest.mark.asyncio
async def test_register_duplicate_email(client):
    await client.post("/auth/register", json={"email": "reader@example.com", "password": "pw123456"})
    resp = await client.post("/auth/register", json={"email": "reader@example.com", "password": "other"})
    assert resp.status_code == 400
    assert resp.json()["detail"][0]["field"] == "email"


@pytest.mark.asyncio
async def test_register_requires_fields(client):
    resp = await client.post("/auth/register", json={"email": "not-an-email"})
    assert resp.status_code == 400
    fields = {e["field"] for e in resp.json()["detail"]}
    assert fields == {"email", "password"}


@pytest.mark.asyncio
async def test_login_wrong_password(client):
    await client.post("/auth/register", json={"email": "reader@example.com", "password": "pw123456"})
    resp = await client.post("/auth/login", json={"email": "reader@example.com", "password": "nope"})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_login_unknown_user(client):
    resp = await client.post("/auth/login", json={"email": "ghost@example.com", "password": "nope"})
    assert resp.status_code == 401
