from .relay import (
    EditRequest,
    EditResponse,
    InspirationRequest,
    PromptResponse,
    HealthResponse,
    ErrorResponse,
)

__all__ = [
    "EditRequest",
    "EditResponse",
    "InspirationRequest",
    "PromptResponse",
    "HealthResponse",
    "ErrorResponse",
]
