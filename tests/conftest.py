import pytest
import requests

from fhirtemp.config import UploadConfig


class FakeSession:
    """
    Stand-in for `requests.Session` that prepares requests for real but never
    touches the network. `send` returns `status_code` or raises `error`.
    """

    def __init__(self, status_code: int = 201, error: Exception = None):
        self.status_code = status_code
        self.error = error
        self.sent = []
        self.closed = False

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.closed = True
        return False

    def prepare_request(self, request: requests.Request) -> requests.PreparedRequest:
        return request.prepare()

    def send(self, prepared, **kwargs):
        self.sent.append((prepared, kwargs))
        if self.error is not None:
            raise self.error
        response = requests.Response()
        response.status_code = self.status_code
        response._content = b'{"resourceType": "OperationOutcome"}'
        return response


@pytest.fixture
def config() -> UploadConfig:
    return UploadConfig(
        endpoint_url="https://fhir.example.org/baseR4/Observation",
        patient_id="PAT123",
        ca_bundle="test-ca-bundle.crt",
        timeout=5.0,
    )


@pytest.fixture
def fake_session_factory():
    """Returns a function building a FakeSession; patch it over requests.Session."""
    return FakeSession
