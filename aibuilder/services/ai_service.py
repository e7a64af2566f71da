# FILE: aibuilder/services/ai_service.py

import asyncio
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from openai import OpenAI

from aibuilder.core.config import (
    GROQ_BASE_URL,
    GROQ_MODEL,
    LLM_TIMEOUT_SECONDS,
    OPENAI_MODEL,
    groq_key,
    openai_key,
)
from aibuilder.core.errors import GenerationFailed, GenerationUnavailable
from aibuilder.schemas.generate import GenerationResult, ProjectType
from aibuilder.services.code_cleanup import clean_code
from aibuilder.services.prompt_service import (
    EXPLAIN_SYSTEM_PROMPT,
    IMPROVE_SYSTEM_PROMPT,
    build_component_prompt,
    build_improve_user_prompt,
    build_system_prompt,
)
from aibuilder.services.providers import Provider, run_in_order

logger = logging.getLogger("aibuilder.ai")

GENERATION_TEMPERATURE = 0.8
GENERATION_MAX_TOKENS = 6000
IMPROVE_TEMPERATURE = 0.7
IMPROVE_MAX_TOKENS = 8000
EXPLAIN_MAX_TOKENS = 1000

# Lazy initialization - only create clients when needed, one per (vendor, key)
_clients: Dict[Tuple[str, str], OpenAI] = {}


@dataclass(frozen=True)
class Completion:
    text: str
    tokens_used: Optional[int] = None


def _get_client(vendor: str, api_key: Optional[str], base_url: Optional[str] = None) -> Optional[OpenAI]:
    if not api_key:
        return None
    cache_key = (vendor, api_key)
    if cache_key not in _clients:
        _clients[cache_key] = OpenAI(api_key=api_key, base_url=base_url, timeout=LLM_TIMEOUT_SECONDS)
        logger.info(f"✅ {vendor} client ready")
    return _clients[cache_key]


def get_openai_client() -> Optional[OpenAI]:
    return _get_client("openai", openai_key())


def get_groq_client() -> Optional[OpenAI]:
    # Groq serves an OpenAI-compatible chat completions API
    return _get_client("groq", groq_key(), GROQ_BASE_URL)


def _chat_provider(name: str, client: OpenAI, model: str) -> Provider:
    async def call(
            system_prompt: str,
            user_prompt: str,
            temperature: Optional[float] = None,
            max_tokens: Optional[int] = None,
    ) -> Completion:
        params = {
            "model": model,
            "messages": [
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        }
        if temperature is not None:
            params["temperature"] = temperature
        if max_tokens is not None:
            params["max_tokens"] = max_tokens

        def _call():
            return client.chat.completions.create(**params)

        resp = await asyncio.to_thread(_call)
        text = ""
        if resp.choices:
            text = resp.choices[0].message.content or ""
        usage = getattr(resp, "usage", None)
        return Completion(text=text, tokens_used=getattr(usage, "total_tokens", None))

    return Provider(name=name, call=call)


def llm_providers() -> List[Provider]:
    """Configured LLM vendors in preference order: OpenAI, then Groq."""
    providers: List[Provider] = []
    openai_client = get_openai_client()
    if openai_client is not None:
        providers.append(_chat_provider("openai", openai_client, OPENAI_MODEL))
    groq_client = get_groq_client()
    if groq_client is not None:
        providers.append(_chat_provider("groq", groq_client, GROQ_MODEL))
    return providers


async def _complete(
        providers: Optional[Sequence[Provider]],
        system_prompt: str,
        user_prompt: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
) -> Tuple[str, Completion]:
    if providers is None:
        providers = llm_providers()
    return await run_in_order(
        providers,
        system_prompt,
        user_prompt,
        temperature=temperature,
        max_tokens=max_tokens,
        label="AI generation",
        unavailable=GenerationUnavailable,
        failed=GenerationFailed,
    )


# =========================
# GENERATION
# =========================
async def generate_code(
        prompt: str,
        project_type: ProjectType = ProjectType.component,
        providers: Optional[Sequence[Provider]] = None,
) -> GenerationResult:
    project_type = ProjectType(project_type)
    logger.info(f"🎨 Generating {project_type.value}: \"{prompt[:60]}...\"")

    name, completion = await _complete(
        providers,
        build_system_prompt(project_type),
        prompt,
        temperature=GENERATION_TEMPERATURE,
        max_tokens=GENERATION_MAX_TOKENS,
    )
    code = clean_code(completion.text)
    logger.info(f"✅ {name} generated {len(code)} chars")

    return GenerationResult(code=code, provider=name, tokens_used=completion.tokens_used)


async def generate_landing_page(description: str, providers: Optional[Sequence[Provider]] = None) -> GenerationResult:
    return await generate_code(description, ProjectType.landing, providers)


async def generate_dashboard(description: str, providers: Optional[Sequence[Provider]] = None) -> GenerationResult:
    return await generate_code(description, ProjectType.dashboard, providers)


async def generate_component(name: str, description: str, providers: Optional[Sequence[Provider]] = None) -> str:
    result = await generate_code(build_component_prompt(name, description), ProjectType.component, providers)
    return result.code


async def improve_code(code: str, instructions: str, providers: Optional[Sequence[Provider]] = None) -> str:
    _, completion = await _complete(
        providers,
        IMPROVE_SYSTEM_PROMPT,
        build_improve_user_prompt(code, instructions),
        temperature=IMPROVE_TEMPERATURE,
        max_tokens=IMPROVE_MAX_TOKENS,
    )
    return clean_code(completion.text or code)


async def explain_code(code: str, providers: Optional[Sequence[Provider]] = None) -> str:
    _, completion = await _complete(
        providers,
        EXPLAIN_SYSTEM_PROMPT,
        code,
        max_tokens=EXPLAIN_MAX_TOKENS,
    )
    return completion.text
