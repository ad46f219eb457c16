import json

import pytest
import requests


def make_response(status_code=200, payload=None, reason="OK", raw=None):
    response = requests.Response()
    response.status_code = status_code
    response.reason = reason
    if raw is not None:
        response._content = raw
    elif payload is not None:
        response._content = json.dumps(payload).encode("utf-8")
    else:
        response._content = b""
    return response


class FakeApi:
    """Stands in for requests.request, answering with queued responses."""

    def __init__(self):
        self.calls = []
        self.responses = []

    def queue(self, *args, **kwargs):
        self.responses.append(make_response(*args, **kwargs))

    def __call__(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.responses:
            raise AssertionError(f"Unexpected request: {method} {url}")
        response = self.responses.pop(0)
        if isinstance(response, Exception):
            raise response
        return response


@pytest.fixture
def fake_api(monkeypatch):
    api = FakeApi()
    monkeypatch.setattr(requests, "request", api)
    return api
