import asyncio

import pytest

from aibuilder.core.errors import GenerationFailed, GenerationUnavailable
from aibuilder.schemas.generate import ProjectType
from aibuilder.services import ai_service
from aibuilder.services.ai_service import Completion
from aibuilder.services.prompt_service import TYPE_TEMPLATES, build_system_prompt
from aibuilder.services.providers import Provider


def fake(name, text=None, error=None, tokens=None, seen=None):
    async def call(system_prompt, user_prompt, temperature=None, max_tokens=None):
        if seen is not None:
            seen.append({"system": system_prompt, "user": user_prompt, "max_tokens": max_tokens})
        if error is not None:
            raise error
        return Completion(text=text, tokens_used=tokens)
    return Provider(name, call)


def test_fallback_to_second_vendor():
    result = asyncio.run(ai_service.generate_code(
        "a button",
        ProjectType.component,
        providers=[fake("A", error=RuntimeError("rate limited")), fake("B", text="hello")],
    ))
    assert result.code == "hello"
    assert result.provider == "B"


def test_generated_code_is_cleaned():
    raw = "Here you go\n```jsx\nfunction Hero() { return null }\n```"
    result = asyncio.run(ai_service.generate_code(
        "hero", ProjectType.landing, providers=[fake("openai", text=raw, tokens=42)],
    ))
    assert result.code == "function Hero() { return null }\n\nexport default Hero;"
    assert result.model_dump(by_alias=True)["tokensUsed"] == 42


def test_both_vendors_fail_reports_last_reason():
    with pytest.raises(GenerationFailed) as exc:
        asyncio.run(ai_service.generate_code(
            "x",
            providers=[fake("A", error=RuntimeError("first")), fake("B", error=RuntimeError("second"))],
        ))
    assert "second" in exc.value.message
    assert exc.value.status_code == 500


def test_no_vendor_configured():
    assert ai_service.llm_providers() == []
    with pytest.raises(GenerationUnavailable):
        asyncio.run(ai_service.generate_code("x"))


def test_system_prompt_follows_project_type():
    seen = []
    asyncio.run(ai_service.generate_dashboard("sales", providers=[fake("A", text="const D = 1;", seen=seen)]))
    assert seen[0]["system"] == build_system_prompt(ProjectType.dashboard)
    assert seen[0]["user"] == "sales"


def test_every_project_type_has_a_template():
    assert set(TYPE_TEMPLATES) == set(ProjectType)
    prompts = {build_system_prompt(t) for t in ProjectType}
    assert len(prompts) == len(ProjectType)


def test_improve_falls_back_to_original_code_on_empty_reply():
    code = "function Old() {}\n\nexport default Old;"
    out = asyncio.run(ai_service.improve_code(code, "make it blue", providers=[fake("A", text="")]))
    assert out == code


def test_explain_returns_raw_text():
    seen = []
    out = asyncio.run(ai_service.explain_code(
        "const a = 1;", providers=[fake("A", text="It declares a constant.", seen=seen)],
    ))
    assert out == "It declares a constant."
    assert seen[0]["max_tokens"] == ai_service.EXPLAIN_MAX_TOKENS


def test_component_prompt_mentions_name():
    seen = []
    code = asyncio.run(ai_service.generate_component(
        "PricingCard", "three tiers", providers=[fake("A", text="const PricingCard = () => null;", seen=seen)],
    ))
    assert "PricingCard" in seen[0]["user"]
    assert code.endswith("export default PricingCard;")


def test_configured_vendors_are_ordered(monkeypatch):
    monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
    monkeypatch.setenv("GROQ_API_KEY", "gsk-test")
    assert [p.name for p in ai_service.llm_providers()] == ["openai", "groq"]

    monkeypatch.setenv("OPENAI_API_KEY", "")
    assert [p.name for p in ai_service.llm_providers()] == ["groq"]
