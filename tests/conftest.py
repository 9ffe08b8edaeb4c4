import json

import httpx
import pytest

from shipit.client import Client

NOT_FOUND = {"error": {"code": "not_found", "message": "Not Found"}}


class FakeAPI:
    """Answers client requests from a table of canned responses and records them."""

    def __init__(self):
        self.routes = {}
        self.requests = []

    def add(self, method, path, payload=None, status=200):
        self.routes[(method, path)] = (status, payload)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, payload = self.routes.get(
            (request.method, request.url.path), (404, NOT_FOUND)
        )
        return httpx.Response(status, json=payload)

    @property
    def calls(self):
        calls = []
        for request in self.requests:
            call = f"{request.method} {request.url.path}"
            if request.url.query:
                call += f"?{request.url.query.decode()}"
            calls.append(call)
        return calls


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SHIPIT_TOKEN", "SHIPIT_API_URL", "SHIPIT_GLOBAL_CONFIG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def api():
    api = FakeAPI()
    api.add(
        "GET",
        "/v2/user",
        {"user": {"id": "user_1", "username": "jane", "email": "jane@example.com"}},
    )
    return api


@pytest.fixture
def project_dir(tmp_path):
    path = tmp_path / "my-app"
    path.mkdir()
    return path


@pytest.fixture
def global_config_dir(tmp_path):
    path = tmp_path / "global"
    path.mkdir()
    (path / "auth.json").write_text(json.dumps({"token": "secret"}))
    return path


@pytest.fixture
def make_client(api, project_dir, global_config_dir, capsys):
    def _make(*args, **kwargs):
        kwargs.setdefault("cwd", project_dir)
        kwargs.setdefault("global_config_dir", global_config_dir)
        kwargs.setdefault("interactive", False)
        kwargs.setdefault("transport", httpx.MockTransport(api.handler))
        return Client(
            argv=["shipit", *args], api_url="https://api.shipit.test", **kwargs
        )

    return _make


@pytest.fixture
def client(make_client):
    return make_client()


@pytest.fixture
def link_project(api):
    """Link a directory to ``prj_1``, owned by ``org_id``."""

    def _link(path, org_id="user_1"):
        (path / ".shipit").mkdir()
        (path / ".shipit" / "project.json").write_text(
            json.dumps({"orgId": org_id, "projectId": "prj_1"})
        )
        api.add("GET", "/v9/projects/prj_1", {"id": "prj_1", "name": "my-app"})

    return _link
