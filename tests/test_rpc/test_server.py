"""Tests for the HTTP RPC server."""

import pytest
from httpx import AsyncClient, ASGITransport

from fsproc.procedures import make_stat_procedure
from fsproc_rpc.registry import ProcedureRegistry
from fsproc_rpc.server import app, create_app


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c


class TestListProcedures:
    async def test_lists_all(self, client):
        resp = await client.get("/procedures")
        assert resp.status_code == 200
        names = {p["name"] for p in resp.json()}
        assert "fs.read.json" in names
        assert len(names) == 11

    async def test_includes_schema(self, client):
        resp = await client.get("/procedures")
        readdir = next(p for p in resp.json() if p["name"] == "fs.readdir")
        assert "includeStats" in readdir["input_schema"]["properties"]
        assert readdir["shorts"] == {"recursive": "r", "includeStats": "s"}

    async def test_custom_registry(self):
        custom = create_app(ProcedureRegistry([make_stat_procedure()]))
        async with AsyncClient(transport=ASGITransport(app=custom), base_url="http://test") as c:
            resp = await c.get("/procedures")
        assert [p["name"] for p in resp.json()] == ["fs.stat"]


class TestRpc:
    async def test_write_and_read(self, client, tmp_path):
        p = str(tmp_path / "f.txt")
        resp = await client.post("/rpc", json={"path": "fs.write", "input": {"path": p, "content": "hey"}})
        assert resp.status_code == 200
        assert resp.json() == {"ok": True, "result": {"path": p, "bytesWritten": 3}}

        resp = await client.post("/rpc", json={"path": ["fs", "read"], "input": {"path": p}})
        assert resp.status_code == 200
        assert resp.json()["result"]["content"] == "hey"

    async def test_read_json_by_path_segments(self, client, tmp_path):
        (tmp_path / "d.json").write_text("[1, 2]")
        resp = await client.post(
            "/rpc", json={"path": ["fs", "read.json"], "input": {"path": str(tmp_path / "d.json")}}
        )
        assert resp.json()["result"]["data"] == [1, 2]

    async def test_input_defaults_to_empty(self, client):
        resp = await client.post("/rpc", json={"path": "fs.stat"})
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "validation_failure"

    async def test_malformed_envelope(self, client):
        resp = await client.post("/rpc", json={"input": {}})
        assert resp.status_code == 422


class TestErrorStatus:
    async def test_unknown_procedure(self, client):
        resp = await client.post("/rpc", json={"path": "fs.teleport", "input": {}})
        assert resp.status_code == 404
        assert resp.json()["error"]["code"] == "unknown_procedure"

    async def test_not_found(self, client, tmp_path):
        resp = await client.post("/rpc", json={"path": "fs.stat", "input": {"path": str(tmp_path / "x")}})
        assert resp.status_code == 404
        body = resp.json()
        assert body["ok"] is False
        assert body["error"]["code"] == "not_found"

    async def test_already_exists(self, client, tmp_path):
        (tmp_path / "a").write_text("a")
        (tmp_path / "b").write_text("b")
        resp = await client.post(
            "/rpc", json={"path": "fs.move", "input": {"src": str(tmp_path / "a"), "dest": str(tmp_path / "b")}}
        )
        assert resp.status_code == 409

    async def test_parse_error(self, client, tmp_path):
        (tmp_path / "bad.json").write_text("{")
        resp = await client.post("/rpc", json={"path": "fs.read.json", "input": {"path": str(tmp_path / "bad.json")}})
        assert resp.status_code == 422
        assert resp.json()["error"]["code"] == "parse_error"

    async def test_io_failure(self, client, tmp_path):
        resp = await client.post("/rpc", json={"path": "fs.read", "input": {"path": str(tmp_path)}})
        assert resp.status_code == 500
        assert resp.json()["error"]["code"] == "io_failure"
