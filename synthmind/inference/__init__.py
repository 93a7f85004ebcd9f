"""Text generation collaborator."""
from synthmind.inference.errors import (
    GenerationError,
    GenerationTransportError,
    MalformedResponseError,
    ModelUnavailableError,
    UnauthorizedError,
)
from synthmind.inference.hf_client import HuggingFaceGenerator, TextGenerator

__all__ = [
    "GenerationError",
    "GenerationTransportError",
    "HuggingFaceGenerator",
    "MalformedResponseError",
    "ModelUnavailableError",
    "TextGenerator",
    "UnauthorizedError",
]
