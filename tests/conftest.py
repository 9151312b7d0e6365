import json

import pytest

import pushover_cli.client as client_mod

TOKEN = "a" * 30
USER = "u" * 30


class FakeResponse:
    def __init__(self, status_code=200, text='{"status":1,"request":"req-1"}'):
        self.status_code = status_code
        self.text = text

    @property
    def ok(self):
        return 200 <= self.status_code < 400


class FakePost:
    """Stands in for requests.post and records every call."""

    def __init__(self):
        self.calls = []
        self.response = FakeResponse()
        self.exc = None

    def reply(self, body, status_code=200):
        self.response = FakeResponse(status_code, body if isinstance(body, str) else json.dumps(body))

    def __call__(self, url, files=None, timeout=None):
        self.calls.append({"url": url, "files": files, "timeout": timeout})
        if self.exc is not None:
            raise self.exc
        return self.response

    @property
    def last_fields(self):
        return [(name, value) for name, (_, value) in self.calls[-1]["files"]]


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    for name in ("PUSHOVER_TOKEN", "PUSHOVER_USER", "PUSHOVER_API_URL"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("PUSHOVER_CLI_CONFIG", str(tmp_path / "missing.toml"))
    client_mod.reset()
    yield
    client_mod.reset()


@pytest.fixture
def fake_post(monkeypatch):
    fake = FakePost()
    monkeypatch.setattr(client_mod.requests, "post", fake)
    return fake
