# FILE: aibuilder/services/providers.py
#
# Ordered fallback across vendors: try each provider in turn, return the
# first success, collect every failure.

import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, List, Sequence, Tuple, Type

from aibuilder.core.errors import ProviderFailed, ProviderUnavailable

logger = logging.getLogger("aibuilder.providers")


@dataclass(frozen=True)
class Provider:
    name: str
    call: Callable[..., Awaitable[Any]] = field(compare=False)


@dataclass(frozen=True)
class ProviderAttempt:
    name: str
    error: BaseException

    @property
    def message(self) -> str:
        return str(self.error) or self.error.__class__.__name__


async def run_in_order(
        providers: Sequence[Provider],
        *args: Any,
        label: str = "Provider",
        unavailable: Type[ProviderUnavailable] = ProviderUnavailable,
        failed: Type[ProviderFailed] = ProviderFailed,
        **kwargs: Any,
) -> Tuple[str, Any]:
    if not providers:
        raise unavailable()

    attempts: List[ProviderAttempt] = []
    for index, provider in enumerate(providers):
        if index:
            logger.info(f"🔄 {label}: trying {provider.name} fallback...")
        try:
            result = await provider.call(*args, **kwargs)
        except Exception as e:
            attempt = ProviderAttempt(provider.name, e)
            attempts.append(attempt)
            logger.error(f"❌ {label} {provider.name} error: {attempt.message}")
            continue
        return provider.name, result

    last = attempts[-1]
    raise failed(f"{label} failed: {last.message}", attempts=attempts)
