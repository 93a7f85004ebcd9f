"""Typed generation failures.

Every failure carries a ``marker``: the literal text the engine stores in
place of a thought when that failure happens.
"""

from typing import Optional


class GenerationError(Exception):
    """Base class for text-generation failures."""

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail or self.marker)
        self.detail = detail

    @property
    def marker(self) -> str:
        return "(LLM Error: Unknown generation failure.)"


class UnauthorizedError(GenerationError):
    """The API token was rejected (HTTP 401)."""

    @property
    def marker(self) -> str:
        return (
            "(LLM Error: Hugging Face API Key Unauthorized (401). "
            "Please check your token and permissions.)"
        )


class ModelUnavailableError(GenerationError):
    """The model is loading or the service refused the request.

    ``status`` and ``error`` echo the HTTP status and the service's own
    error text; a 503 mentioning "loading" gets the canonical loading marker.
    """

    def __init__(self, status: int, error: Optional[str] = None):
        self.status = status
        self.error = error
        super().__init__(f"HTTP {status}: {error or 'Unknown error'}")

    @property
    def loading(self) -> bool:
        return self.status == 503 and "loading" in (self.error or "")

    @property
    def marker(self) -> str:
        if self.loading:
            return "(LLM Error: Hugging Face model is loading. Please wait a moment and try again.)"
        if self.error:
            return f"(LLM Error: {self.error})"
        return f"(LLM Error: HF API returned {self.status}: Unknown error)"


class MalformedResponseError(GenerationError):
    @property
    def marker(self) -> str:
        return "(LLM Error: HF API returned unexpected response structure.)"


class GenerationTransportError(GenerationError):
    @property
    def marker(self) -> str:
        return "(LLM Error: Network issue or API call failed.)"
