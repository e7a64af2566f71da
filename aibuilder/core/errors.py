# FILE: aibuilder/core/errors.py
#
# Error taxonomy shared by services and routes. Services raise these; the
# exception handler in server.py renders them as the error envelope.

from typing import Any, List, Optional


class AppError(Exception):
    status_code: int = 500
    code: Optional[str] = None
    default_message: str = "Request failed"

    def __init__(self, message: Optional[str] = None, *, status_code: Optional[int] = None, code: Optional[str] = None):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        if code is not None:
            self.code = code
        super().__init__(self.message)


class ValidationError(AppError):
    status_code = 400
    code = "VALIDATION_ERROR"
    default_message = "Invalid request"


class AuthError(AppError):
    status_code = 401
    default_message = "Access token required"


class CreditError(AppError):
    status_code = 402
    code = "INSUFFICIENT_CREDITS"
    default_message = "Insufficient credits"


class LimitError(AppError):
    status_code = 403
    code = "LIMIT_REACHED"
    default_message = "Free plan limit reached. Upgrade to create more projects."


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class RateLimitError(AppError):
    status_code = 429
    code = "RATE_LIMITED"
    default_message = "Too many requests from this IP, please try again later."


class StoreError(AppError):
    status_code = 500
    code = "STORE_ERROR"
    default_message = "Storage request failed"


class ProviderUnavailable(AppError):
    status_code = 500
    code = "PROVIDER_UNAVAILABLE"
    default_message = "No provider available. Please check your API keys."


class ProviderFailed(AppError):
    status_code = 500
    code = "PROVIDER_FAILED"
    default_message = "All providers failed"

    def __init__(self, message: Optional[str] = None, attempts: Optional[List[Any]] = None):
        super().__init__(message)
        self.attempts = list(attempts or [])


class GenerationUnavailable(ProviderUnavailable):
    default_message = "No AI provider available. Please check your API keys."


class GenerationFailed(ProviderFailed):
    default_message = "AI generation failed"
