# FILE: aibuilder/services/image_service.py
import base64
import logging
from typing import Callable, Dict, List, Optional

import httpx

from aibuilder.core.config import (
    HUGGINGFACE_IMAGE_MODEL,
    HUGGINGFACE_URL,
    IMAGE_TIMEOUT_SECONDS,
    STABILITY_URL,
    huggingface_key,
    stability_key,
)
from aibuilder.core.errors import ProviderFailed, ProviderUnavailable
from aibuilder.schemas.media import ImageResult
from aibuilder.services.providers import Provider, run_in_order

logger = logging.getLogger("aibuilder.image")

DEFAULT_STYLE = "digital-art"
NEGATIVE_PROMPT = "blurry, bad quality, distorted"

IMAGE_STYLES = [
    {"id": "digital-art", "name": "Digital Art"},
    {"id": "photographic", "name": "Photographic"},
    {"id": "3d-model", "name": "3D Model"},
    {"id": "anime", "name": "Anime"},
    {"id": "cinematic", "name": "Cinematic"},
    {"id": "fantasy-art", "name": "Fantasy Art"},
    {"id": "neon-punk", "name": "Neon Punk"},
    {"id": "origami", "name": "Origami"},
    {"id": "pixel-art", "name": "Pixel Art"},
    {"id": "line-art", "name": "Line Art"},
]


def _http_client() -> httpx.AsyncClient:
    return httpx.AsyncClient(timeout=IMAGE_TIMEOUT_SECONDS)


def _data_url(b64: str) -> str:
    return f"data:image/png;base64,{b64}"


async def generate_with_stability(prompt: str, style: Optional[str] = None) -> str:
    """Generate image using Stability AI (SDXL text-to-image)."""
    key = stability_key()
    if not key:
        raise ProviderUnavailable("Stability API key not configured")

    logger.info(f"🎨 Generating image with Stability: \"{prompt[:50]}...\"")
    async with _http_client() as client:
        resp = await client.post(
            STABILITY_URL,
            json={
                "text_prompts": [
                    {"text": prompt, "weight": 1},
                    {"text": NEGATIVE_PROMPT, "weight": -1},
                ],
                "cfg_scale": 7,
                "height": 1024,
                "width": 1024,
                "steps": 30,
                "samples": 1,
                "style_preset": style or DEFAULT_STYLE,
            },
            headers={
                "Authorization": f"Bearer {key}",
                "Accept": "application/json",
            },
        )
        resp.raise_for_status()
        data = resp.json()

    artifacts = data.get("artifacts") or []
    if not artifacts or not artifacts[0].get("base64"):
        raise ValueError("Stability returned no image")

    logger.info("✅ Stability image generated")
    return _data_url(artifacts[0]["base64"])


async def generate_with_huggingface(prompt: str, model: Optional[str] = None) -> str:
    """Generate image using the HuggingFace inference API."""
    key = huggingface_key()
    if not key:
        raise ProviderUnavailable("HuggingFace API key not configured")

    model_id = model or HUGGINGFACE_IMAGE_MODEL
    logger.info(f"🎨 Generating image with HuggingFace: \"{prompt[:50]}...\"")
    async with _http_client() as client:
        resp = await client.post(
            f"{HUGGINGFACE_URL}/{model_id}",
            json={"inputs": prompt},
            headers={"Authorization": f"Bearer {key}"},
        )
        resp.raise_for_status()
        payload = resp.content

    logger.info("✅ HuggingFace image generated")
    return _data_url(base64.b64encode(payload).decode("ascii"))


async def _stability(prompt: str, style: Optional[str]) -> str:
    return await generate_with_stability(prompt, style)


async def _huggingface(prompt: str, style: Optional[str]) -> str:
    return await generate_with_huggingface(prompt)


IMAGE_VENDORS: Dict[str, Provider] = {
    "stability": Provider("stability", _stability),
    "huggingface": Provider("huggingface", _huggingface),
}

_CONFIGURED: Dict[str, Callable[[], Optional[str]]] = {
    "stability": stability_key,
    "huggingface": huggingface_key,
}


def image_providers(preferred: Optional[str] = None) -> List[Provider]:
    """Stability first unless the caller pins HuggingFace or Stability has no key."""
    if preferred == "huggingface" or not stability_key():
        order = ["huggingface", "stability"]
    else:
        order = ["stability", "huggingface"]
    return [IMAGE_VENDORS[name] for name in order if _CONFIGURED[name]()]


async def generate_image(
        prompt: str,
        style: Optional[str] = None,
        provider: Optional[str] = None,
) -> ImageResult:
    name, image = await run_in_order(
        image_providers(provider),
        prompt,
        style,
        label="Image generation",
        unavailable=ProviderUnavailable,
        failed=ProviderFailed,
    )
    return ImageResult(image=image, provider=name)
