from types import SimpleNamespace

import httpx
import openai
import pytest

from octane_nexus.main import app
from octane_nexus.modules.images.routes import get_image_service
from octane_nexus.modules.images.service import ImageService, polish_prompt


class FakeImages:
    def __init__(self, url="https://images.example.com/logo.png", error=None):
        self.url = url
        self.error = error
        self.calls = []

    def generate(self, **kwargs):
        self.calls.append(kwargs)
        if self.error:
            raise self.error
        return SimpleNamespace(data=[SimpleNamespace(url=self.url)] if self.url else [])


@pytest.fixture
def images(client):
    fake = FakeImages()
    app.dependency_overrides[get_image_service] = lambda: ImageService(SimpleNamespace(images=fake))
    return fake


def _status_error(cls, status):
    response = httpx.Response(status, request=httpx.Request("POST", "https://api.openai.com/v1/images/generations"))
    return cls("upstream said no", response=response, body=None)


def test_generate_logo(client, images):
    response = client.post("/api/generate-image", json={"prompt": " a fox ", "style": "logo"})

    assert response.status_code == 200
    assert response.json() == {"url": "https://images.example.com/logo.png"}
    call = images.calls[0]
    assert call["prompt"].startswith("A high-quality professional vector logo of a fox,")
    assert call["size"] == "1024x1024"
    assert call["quality"] == "standard"
    assert call["n"] == 1


def test_banner_style_and_unknown_style():
    assert "channel banner of waves" in polish_prompt("waves", "banner")
    assert polish_prompt("waves", "poster") == polish_prompt("waves", "logo")


def test_prompt_is_required(client, images):
    response = client.post("/api/generate-image", json={"prompt": "   "})
    assert response.status_code == 400
    assert response.json() == {"error": "Prompt is required and must be a string"}
    assert images.calls == []


def test_missing_api_key(client):
    response = client.post("/api/generate-image", json={"prompt": "a fox"})
    assert response.status_code == 500
    assert response.json() == {"error": "OpenAI API key is not configured"}


def test_invalid_key_maps_to_401(client, images):
    images.error = _status_error(openai.AuthenticationError, 401)
    response = client.post("/api/generate-image", json={"prompt": "a fox"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid API key"}


def test_rate_limit_maps_to_429(client, images):
    images.error = _status_error(openai.RateLimitError, 429)
    response = client.post("/api/generate-image", json={"prompt": "a fox"})
    assert response.status_code == 429


def test_missing_url_is_500(client, images):
    images.url = None
    response = client.post("/api/generate-image", json={"prompt": "a fox"})
    assert response.status_code == 500
    assert response.json() == {"error": "Failed to generate image"}
