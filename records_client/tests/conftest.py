import json

import httpx
import pytest

from records_client.app.client import RecordsApiClient

BASE_URL = "http://records.test/medical_app"


class RecordingBackend:
    """
    A scripted backend for httpx.MockTransport. Every request is recorded, and
    each is answered with the next queued response (or {"success": True}).
    """

    def __init__(self):
        self.requests = []
        self.responses = []

    def reply(self, body=None, status_code=200, text=None):
        self.responses.append((body, status_code, text))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.responses:
            body, status_code, text = self.responses.pop(0)
        else:
            body, status_code, text = {"success": True}, 200, None
        if text is not None:
            return httpx.Response(status_code, text=text)
        return httpx.Response(status_code, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    def last_json(self):
        return json.loads(self.last.content)

    def last_params(self):
        return dict(self.last.url.params)


@pytest.fixture
def backend():
    return RecordingBackend()


@pytest.fixture
def api(backend):
    return RecordsApiClient(base_url=BASE_URL, transport=httpx.MockTransport(backend))


@pytest.fixture
def offline_api():
    """A client whose every request fails to connect."""
    def refuse(request):
        raise httpx.ConnectError("[Errno 111] Connection refused", request=request)
    return RecordsApiClient(base_url=BASE_URL, transport=httpx.MockTransport(refuse))
