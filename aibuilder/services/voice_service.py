# FILE: aibuilder/services/voice_service.py
import logging
from typing import Any, Dict, List, Optional

import httpx

from aibuilder.core.config import (
    DEEPGRAM_URL,
    ELEVENLABS_DEFAULT_VOICE,
    ELEVENLABS_URL,
    VENDOR_TIMEOUT_SECONDS,
    deepgram_key,
    elevenlabs_key,
)
from aibuilder.core.errors import ProviderFailed, ProviderUnavailable, ValidationError

logger = logging.getLogger("aibuilder.voice")

TTS_MODEL = "eleven_monolingual_v1"
STT_PARAMS = {"model": "nova-2", "smart_format": "true"}


def _http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=VENDOR_TIMEOUT_SECONDS)


async def text_to_speech(text: str, voice_id: Optional[str] = None) -> bytes:
    """Text-to-Speech using ElevenLabs; returns MPEG audio bytes."""
    key = elevenlabs_key()
    if not key:
        raise ProviderUnavailable("ElevenLabs API key not configured")

    logger.info(f"🎤 Converting text to speech: \"{text[:50]}...\"")
    voice = voice_id or ELEVENLABS_DEFAULT_VOICE
    try:
        async with _http_client() as client:
            resp = await client.post(
                f"{ELEVENLABS_URL}/text-to-speech/{voice}",
                json={
                    "text": text,
                    "model_id": TTS_MODEL,
                    "voice_settings": {"stability": 0.5, "similarity_boost": 0.75},
                },
                headers={"xi-api-key": key},
            )
            resp.raise_for_status()
            audio = resp.content
    except httpx.HTTPError as e:
        logger.error(f"❌ ElevenLabs error: {e}")
        raise ProviderFailed(f"Text-to-speech failed: {e}") from e

    logger.info("✅ Text-to-speech generated")
    return audio


async def list_voices() -> List[Dict[str, Any]]:
    """Voices available on ElevenLabs; empty when unconfigured."""
    key = elevenlabs_key()
    if not key:
        return []

    try:
        async with _http_client() as client:
            resp = await client.get(f"{ELEVENLABS_URL}/voices", headers={"xi-api-key": key})
            resp.raise_for_status()
            return list(resp.json().get("voices") or [])
    except httpx.HTTPError as e:
        logger.error(f"❌ ElevenLabs voices error: {e}")
        raise ProviderFailed(f"Failed to load voices: {e}") from e


async def speech_to_text(audio: bytes, mime_type: Optional[str] = None) -> str:
    """Speech-to-Text using Deepgram; best-effort transcript."""
    if not audio:
        raise ValidationError("Audio data required")

    key = deepgram_key()
    if not key:
        raise ProviderUnavailable("Deepgram API key not configured")

    logger.info("🎧 Converting speech to text...")
    try:
        async with _http_client() as client:
            resp = await client.post(
                DEEPGRAM_URL,
                params=STT_PARAMS,
                content=audio,
                headers={
                    "Authorization": f"Token {key}",
                    "Content-Type": mime_type or "audio/wav",
                },
            )
            resp.raise_for_status()
            data = resp.json()
    except httpx.HTTPError as e:
        logger.error(f"❌ Deepgram error: {e}")
        raise ProviderFailed(f"Speech-to-text failed: {e}") from e

    transcript = _first_transcript(data)
    logger.info(f"✅ Transcribed: \"{transcript[:50]}...\"")
    return transcript


def _first_transcript(data: Dict[str, Any]) -> str:
    try:
        channels = (data.get("results") or {}).get("channels") or []
        alternatives = channels[0].get("alternatives") or []
        return alternatives[0].get("transcript") or ""
    except (IndexError, AttributeError):
        return ""


def voice_status() -> Dict[str, bool]:
    return {
        "tts": bool(elevenlabs_key()),
        "stt": bool(deepgram_key()),
    }
