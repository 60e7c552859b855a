import inspect
import json

import pytest

try:
    from fastapi.testclient import TestClient
    from app.main import app
except ImportError:
    TestClient = None
    app = None


class RecordingBackend:
    """Stand-in generative backend that records every submit call.

    `response` may be a value returned as-is, or a callable taking the
    rendered prompt (sync or async) whose result is returned.
    """

    def __init__(self, response=None):
        self.response = response
        self.calls = []

    async def submit(self, prompt, output_model, safety_settings=None):
        self.calls.append({"prompt": prompt, "output_model": output_model, "safety_settings": safety_settings})
        if callable(self.response):
            result = self.response(prompt)
            if inspect.isawaitable(result):
                result = await result
            return result
        if isinstance(self.response, (dict, list)):
            return json.dumps(self.response)
        return self.response


@pytest.fixture
def make_backend():
    return RecordingBackend


@pytest.fixture
def client():
    """
    Create a TestClient instance for testing FastAPI endpoints.
    """
    if TestClient is None:
        pytest.skip("FastAPI not installed")
    with TestClient(app) as test_client:
        yield test_client
