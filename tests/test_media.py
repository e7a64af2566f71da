import asyncio
import base64

import httpx
import pytest

from aibuilder.core.config import DEMO_TOKEN
from aibuilder.core.errors import ProviderFailed, ProviderUnavailable, ValidationError
from aibuilder.services import image_service, voice_service

from conftest import auth_header


def mock_client(handler, seen):
    def factory():
        def record(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return handler(request)
        return httpx.AsyncClient(transport=httpx.MockTransport(record))
    return factory


def stability_ok(request):
    return httpx.Response(200, json={"artifacts": [{"base64": "U1RBQg=="}]})


# ---------------- image ----------------

def test_provider_order(monkeypatch):
    assert image_service.image_providers() == []

    monkeypatch.setenv("STABILITY_API_KEY", "sk")
    monkeypatch.setenv("HUGGINGFACE_API_KEY", "hf")
    assert [p.name for p in image_service.image_providers()] == ["stability", "huggingface"]
    assert [p.name for p in image_service.image_providers("huggingface")] == ["huggingface", "stability"]

    monkeypatch.setenv("STABILITY_API_KEY", "")
    assert [p.name for p in image_service.image_providers("stability")] == ["huggingface"]


def test_stability_image(monkeypatch):
    seen = []
    monkeypatch.setenv("STABILITY_API_KEY", "sk")
    monkeypatch.setattr(image_service, "_http_client", mock_client(stability_ok, seen))

    result = asyncio.run(image_service.generate_image("a cat", style="anime"))
    assert result.provider == "stability"
    assert result.image == "data:image/png;base64,U1RBQg=="
    assert seen[0].headers["Authorization"] == "Bearer sk"
    assert b'"style_preset":"anime"' in seen[0].content.replace(b" ", b"")


def test_falls_back_to_huggingface(monkeypatch):
    seen = []

    def handler(request):
        if "stability" in request.url.host:
            return httpx.Response(500, json={"message": "boom"})
        return httpx.Response(200, content=b"PNG")

    monkeypatch.setenv("STABILITY_API_KEY", "sk")
    monkeypatch.setenv("HUGGINGFACE_API_KEY", "hf")
    monkeypatch.setattr(image_service, "_http_client", mock_client(handler, seen))

    result = asyncio.run(image_service.generate_image("a cat"))
    assert result.provider == "huggingface"
    assert result.image == "data:image/png;base64," + base64.b64encode(b"PNG").decode()
    assert [r.url.host for r in seen] == ["api.stability.ai", "api-inference.huggingface.co"]


def test_all_image_vendors_fail(monkeypatch):
    monkeypatch.setenv("HUGGINGFACE_API_KEY", "hf")
    monkeypatch.setattr(
        image_service, "_http_client", mock_client(lambda r: httpx.Response(503), []),
    )
    with pytest.raises(ProviderFailed) as exc:
        asyncio.run(image_service.generate_image("a cat"))
    assert exc.value.message.startswith("Image generation failed:")


def test_no_image_vendor():
    with pytest.raises(ProviderUnavailable):
        asyncio.run(image_service.generate_image("a cat"))


# ---------------- voice ----------------

def test_tts_requires_key():
    with pytest.raises(ProviderUnavailable):
        asyncio.run(voice_service.text_to_speech("hello"))


def test_tts_returns_audio(monkeypatch):
    seen = []
    monkeypatch.setenv("ELEVENLABS_API_KEY", "el")
    monkeypatch.setattr(
        voice_service, "_http_client", mock_client(lambda r: httpx.Response(200, content=b"MP3"), seen),
    )
    assert asyncio.run(voice_service.text_to_speech("hello", "voice-1")) == b"MP3"
    assert seen[0].url.path.endswith("/text-to-speech/voice-1")
    assert seen[0].headers["xi-api-key"] == "el"


def test_tts_vendor_error(monkeypatch):
    monkeypatch.setenv("ELEVENLABS_API_KEY", "el")
    monkeypatch.setattr(voice_service, "_http_client", mock_client(lambda r: httpx.Response(401), []))
    with pytest.raises(ProviderFailed):
        asyncio.run(voice_service.text_to_speech("hello"))


def test_stt_checks_audio_before_key():
    with pytest.raises(ValidationError):
        asyncio.run(voice_service.speech_to_text(b""))
    with pytest.raises(ProviderUnavailable):
        asyncio.run(voice_service.speech_to_text(b"RIFF"))


def test_stt_transcript(monkeypatch):
    seen = []
    payload = {"results": {"channels": [{"alternatives": [{"transcript": "make a navbar"}]}]}}
    monkeypatch.setenv("DEEPGRAM_API_KEY", "dg")
    monkeypatch.setattr(voice_service, "_http_client", mock_client(lambda r: httpx.Response(200, json=payload), seen))

    assert asyncio.run(voice_service.speech_to_text(b"RIFF", "audio/webm")) == "make a navbar"
    assert seen[0].headers["Content-Type"] == "audio/webm"
    assert seen[0].url.params["model"] == "nova-2"


def test_stt_without_transcript(monkeypatch):
    monkeypatch.setenv("DEEPGRAM_API_KEY", "dg")
    monkeypatch.setattr(voice_service, "_http_client", mock_client(lambda r: httpx.Response(200, json={}), []))
    assert asyncio.run(voice_service.speech_to_text(b"RIFF")) == ""


def test_voices_empty_without_key():
    assert asyncio.run(voice_service.list_voices()) == []


# ---------------- routes ----------------

def test_media_routes(client):
    demo = auth_header(DEMO_TOKEN)

    styles = client.get("/api/image/styles").json()["data"]
    assert len(styles) == 10
    assert {"id": "anime", "name": "Anime"} in styles

    assert client.get("/api/voice/status").json()["data"] == {"tts": False, "stt": False}
    assert client.get("/api/voice/voices", headers=demo).json()["data"] == []

    res = client.post("/api/image/generate", json={"prompt": "a cat"}, headers=demo)
    assert res.status_code == 500
    assert res.json()["code"] == "PROVIDER_UNAVAILABLE"

    res = client.post("/api/image/generate", json={"prompt": "a cat", "provider": "dalle"}, headers=demo)
    assert res.status_code == 400

    res = client.post("/api/voice/stt", content=b"", headers=demo)
    assert res.status_code == 400
    assert res.json()["error"] == "Audio data required"

    res = client.post("/api/voice/tts", json={"text": "hi"}, headers=demo)
    assert res.status_code == 500


def test_tts_route_streams_audio(client, monkeypatch):
    monkeypatch.setenv("ELEVENLABS_API_KEY", "el")
    monkeypatch.setattr(voice_service, "_http_client", mock_client(lambda r: httpx.Response(200, content=b"MP3"), []))
    res = client.post("/api/voice/tts", json={"text": "hi", "voiceId": "v2"}, headers=auth_header(DEMO_TOKEN))
    assert res.status_code == 200
    assert res.headers["content-type"] == "audio/mpeg"
    assert res.content == b"MP3"
