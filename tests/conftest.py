import pytest

import main


class RecordingPost:
    """Stands in for requests.post and remembers every call it receives."""

    def __init__(self, response=None, error: Exception | None = None):
        self.response = response
        self.error = error
        self.calls = []

    def __call__(self, url, json=None, headers=None, timeout=None):
        self.calls.append({"url": url, "json": json, "headers": headers, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def client(monkeypatch):
    monkeypatch.setattr(main, "PRIVATE_API_URL", "http://backend.test:8000")
    main.app.config["TESTING"] = True
    with main.app.test_client() as test_client:
        yield test_client


@pytest.fixture
def fake_post(monkeypatch):
    def _install(response=None, error: Exception | None = None) -> RecordingPost:
        recorder = RecordingPost(response, error)
        monkeypatch.setattr("main.requests.post", recorder)
        return recorder

    return _install
