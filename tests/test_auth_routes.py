"""
HTTP-level tests for /auth/register, /auth/login and /auth/me.
"""

import pytest

from auth.dependencies import GATE_REJECTION
from auth.jwt import create_token

ALICE = {"username": "alice", "email": "alice@x.com", "password": "secret1"}


async def _register(client, **overrides):
    body = {**ALICE, **overrides}
    return await client.post("/auth/register", json=body)


class TestRegisterRoute:
    @pytest.mark.asyncio
    async def test_register_created(self, client):
        resp = await _register(client)
        assert resp.status_code == 201
        data = resp.json()
        assert data["user"]["username"] == "alice"
        assert data["user"]["email"] == "alice@x.com"
        assert set(data["user"]) == {"id", "username", "email"}
        assert data["token"]

    @pytest.mark.asyncio
    async def test_register_duplicate_is_400(self, client):
        await _register(client)
        resp = await _register(client, username="alice2")
        assert resp.status_code == 400
        assert resp.json()["code"] == "conflict_error"

    @pytest.mark.asyncio
    async def test_register_bad_email_is_400(self, client):
        resp = await _register(client, email="nope")
        assert resp.status_code == 400
        assert resp.json()["code"] == "validation_error"

    @pytest.mark.asyncio
    async def test_register_missing_field_is_400(self, client):
        resp = await client.post("/auth/register", json={"username": "alice"})
        assert resp.status_code == 400
        body = resp.json()
        assert body["code"] == "validation_error"
        assert "email" in body["detail"]


class TestLoginRoute:
    @pytest.mark.asyncio
    async def test_login_ok(self, client):
        registered = (await _register(client)).json()
        resp = await client.post(
            "/auth/login", json={"email": "alice@x.com", "password": "secret1"}
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["user"] == registered["user"]
        assert data["token"] != registered["token"]

    @pytest.mark.asyncio
    async def test_login_failures_look_identical(self, client):
        await _register(client)
        wrong = await client.post(
            "/auth/login", json={"email": "alice@x.com", "password": "wrong-pass"}
        )
        unknown = await client.post(
            "/auth/login", json={"email": "ghost@x.com", "password": "secret1"}
        )
        assert wrong.status_code == unknown.status_code == 401
        assert wrong.json() == unknown.json()


class TestMeRoute:
    @pytest.mark.asyncio
    async def test_me_with_token(self, client):
        token = (await _register(client)).json()["token"]
        resp = await client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
        assert resp.status_code == 200
        user = resp.json()["user"]
        assert user["username"] == "alice"
        assert "password_hash" not in user

    @pytest.mark.asyncio
    async def test_me_rejections_are_uniform(self, client):
        token = (await _register(client)).json()["token"]
        tampered = token[:-1] + ("0" if token[-1] != "0" else "1")
        ghost = create_token("00000000-0000-0000-0000-000000000000")

        responses = [
            await client.get("/auth/me"),
            await client.get("/auth/me", headers={"Authorization": f"Basic {token}"}),
            await client.get("/auth/me", headers={"Authorization": "Bearer "}),
            await client.get("/auth/me", headers={"Authorization": f"Bearer {tampered}"}),
            await client.get("/auth/me", headers={"Authorization": f"Bearer {ghost}"}),
        ]
        for resp in responses:
            assert resp.status_code == 401
            assert resp.json() == {"detail": GATE_REJECTION, "code": "auth_error"}

    @pytest.mark.asyncio
    async def test_bearer_scheme_in_openapi(self, client):
        schema = (await client.get("/openapi.json")).json()
        assert schema["components"]["securitySchemes"]["HTTPBearer"]["scheme"] == "bearer"
        assert {"HTTPBearer": []} in schema["paths"]["/auth/me"]["get"]["security"]


class TestMisc:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        assert resp.json() == {"status": "ok"}

    @pytest.mark.asyncio
    async def test_lifespan_creates_tables(self):
        from database.session import async_session_factory
        from main import create_app

        app = create_app()
        assert app.router.on_startup == []
        async with app.router.lifespan_context(app):
            store = app.state.user_store
            assert await store.find_by_email("nobody@x.com") is None
        assert store._session_factory is async_session_factory

    @pytest.mark.asyncio
    async def test_corrupt_hash_is_generic_500(self, client, store):
        await store.create("alice", "alice@x.com", "garbage")
        resp = await client.post(
            "/auth/login", json={"email": "alice@x.com", "password": "secret1"}
        )
        assert resp.status_code == 500
        assert resp.json() == {"detail": "Something went wrong!", "code": "internal_error"}
