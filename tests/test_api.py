"""REST API endpoint tests."""

from __future__ import annotations

import pytest
from httpx import ASGITransport, AsyncClient

from classic_snake.server.app import create_app
from classic_snake.server.session_manager import SessionManager

BASE = "http://test"


@pytest.fixture()
def app():
    application = create_app()
    application.state.session_manager = SessionManager()
    return application


@pytest.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c
    await app.state.session_manager.cleanup()


async def _create(client) -> str:
    resp = await client.post("/sessions")
    assert resp.status_code == 201
    return resp.json()["session_id"]


class TestCreateSession:
    @pytest.mark.asyncio
    async def test_create_default(self, client):
        resp = await client.post("/sessions")
        assert resp.status_code == 201
        data = resp.json()
        assert data["status"] == "not_started"
        assert data["score"] == 0
        assert data["interval_ms"] == 200

    @pytest.mark.asyncio
    async def test_list(self, client):
        assert (await client.get("/sessions")).json() == []
        await _create(client)
        data = (await client.get("/sessions")).json()
        assert len(data) == 1


class TestGetSession:
    @pytest.mark.asyncio
    async def test_get_existing(self, client):
        session_id = await _create(client)
        resp = await client.get(f"/sessions/{session_id}")
        assert resp.status_code == 200
        data = resp.json()
        assert data["session_id"] == session_id
        assert data["state"]["snake"] == [[10, 10]]
        assert data["frame"]["instruction"] == "Press Enter to start"

    @pytest.mark.asyncio
    async def test_get_not_found(self, client):
        resp = await client.get("/sessions/nonexistent")
        assert resp.status_code == 404


class TestLifecycle:
    @pytest.mark.asyncio
    async def test_start_invalid_name(self, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/start", json={"name": ""},
        )
        assert resp.status_code == 422
        assert "valid name" in resp.json()["detail"]
        state = (await client.get(f"/sessions/{session_id}")).json()["state"]
        assert state["status"] == "not_started"

    @pytest.mark.asyncio
    async def test_start_pause_resume_stop(self, client):
        session_id = await _create(client)
        resp = await client.post(
            f"/sessions/{session_id}/start", json={"name": "ann"},
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "running"

        resp = await client.post(f"/sessions/{session_id}/pause")
        assert resp.json()["status"] == "paused"
        resp = await client.post(f"/sessions/{session_id}/resume")
        assert resp.json()["status"] == "running"
        resp = await client.post(f"/sessions/{session_id}/stop")
        assert resp.json()["status"] == "not_started"

    @pytest.mark.asyncio
    async def test_pause_before_start_is_noop(self, client):
        session_id = await _create(client)
        resp = await client.post(f"/sessions/{session_id}/pause")
        assert resp.status_code == 200
        assert resp.json()["status"] == "not_started"

    @pytest.mark.asyncio
    async def test_unknown_session(self, client):
        for path in ("start", "pause", "resume", "stop"):
            resp = await client.post(
                f"/sessions/nope/{path}", json={"name": "ann"},
            )
            assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_delete(self, client):
        session_id = await _create(client)
        resp = await client.delete(f"/sessions/{session_id}")
        assert resp.status_code == 204
        assert (await client.get(f"/sessions/{session_id}")).status_code == 404
        assert (await client.delete(f"/sessions/{session_id}")).status_code == 404


class TestResults:
    @pytest.mark.asyncio
    async def test_results_empty(self, client):
        resp = await client.get("/results")
        assert resp.status_code == 200
        assert resp.json() == {"recent": []}

    @pytest.mark.asyncio
    async def test_results_after_collision(self, app, client):
        session_id = await _create(client)
        await client.post(f"/sessions/{session_id}/start", json={"name": "ann"})
        engine = app.state.session_manager.get_session(session_id).engine
        engine.snake.body.clear()
        engine.snake.body.extend([(20, 10), (19, 10)])
        engine.food = (1, 1)
        engine.tick()
        resp = await client.get("/results")
        assert resp.json() == {"recent": [1]}


class TestErrorSchema:
    @pytest.mark.asyncio
    async def test_error_model_documented(self, client):
        schema = (await client.get("/openapi.json")).json()
        start = schema["paths"]["/sessions/{session_id}/start"]["post"]
        for code in ("404", "422"):
            ref = start["responses"][code]["content"]["application/json"]
            assert ref["schema"]["$ref"].endswith("/ErrorResponse")
        pause = schema["paths"]["/sessions/{session_id}/pause"]["post"]
        assert "404" in pause["responses"]

    @pytest.mark.asyncio
    async def test_error_body_matches_model(self, client):
        resp = await client.post("/sessions/nope/stop")
        assert resp.status_code == 404
        assert resp.json() == {"detail": "Session not found."}
