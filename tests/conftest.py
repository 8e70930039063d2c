"""
Shared fixtures and helpers for the modextract test suite.
"""

import json
import socket
import zipfile
from contextlib import asynccontextmanager
from pathlib import Path

import pytest
from aiohttp import web
from aiohttp.test_utils import TestServer
from loguru import logger

DOWNLOAD_ROUTE = "/api/v1/mods/{project_id}/files/{file_id}/download"


def sample_manifest(**overrides) -> dict:
    data = {
        "minecraft": {
            "version": "1.12.2",
            "modLoaders": [{"id": "forge-14.23.5.2847", "primary": True}],
        },
        "manifestType": "minecraftModpack",
        "manifestVersion": 1,
        "name": "Test Pack",
        "version": "1.0",
        "author": "Someone",
        "projectID": 4242,
        "files": [{"projectID": 1, "fileID": 1, "required": True}],
        "overrides": "overrides",
    }
    data.update(overrides)
    return data


def write_manifest(directory: Path, data) -> Path:
    path = directory / "manifest.json"
    text = data if isinstance(data, str) else json.dumps(data)
    path.write_text(text, encoding="utf-8")
    return path


def make_pack(path: Path, manifest: dict, overrides=None) -> Path:
    """Build a CurseForge-style modpack zip at path."""
    overrides = {"config/test.cfg": "B:enabled=true\n"} if overrides is None else overrides
    path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(path, "w") as zf:
        zf.writestr("manifest.json", json.dumps(manifest))
        zf.writestr("modlist.html", "<ul></ul>")
        for member, data in overrides.items():
            zf.writestr(f"overrides/{member}", data)
    return path


def template_for(server: TestServer) -> str:
    return f"http://{server.host}:{server.port}{DOWNLOAD_ROUTE}"


def unused_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@asynccontextmanager
async def serve(app: web.Application):
    """Run an aiohttp application on a local port for the duration of the block."""
    server = TestServer(app)
    await server.start_server()
    try:
        yield server
    finally:
        await server.close()


def mod_app(routes: dict) -> web.Application:
    """
    Build a stub of the remote mod service.

    routes maps (project_id, file_id) to a callable returning a web.Response;
    unknown pairs answer 404.
    """

    async def download(request: web.Request) -> web.StreamResponse:
        key = (int(request.match_info["project_id"]), int(request.match_info["file_id"]))
        handler = routes.get(key)
        if handler is None:
            return web.Response(status=404, text="not found")
        result = handler(request)
        if hasattr(result, "__await__"):
            result = await result
        return result

    async def cdn_file(request: web.Request) -> web.StreamResponse:
        return web.Response(body=b"cdn:" + request.match_info["name"].encode())

    app = web.Application()
    app.router.add_get(DOWNLOAD_ROUTE, download)
    app.router.add_get("/files/{name}", cdn_file)
    return app


@pytest.fixture
def log_messages():
    """Collect loguru output as "LEVEL|message" strings."""
    messages = []
    handler_id = logger.add(
        lambda msg: messages.append(msg.rstrip("\n")), format="{level}|{message}", level="DEBUG"
    )
    yield messages
    logger.remove(handler_id)
