"""Hugging Face inference API client.

Usage:
    from synthmind.inference.hf_client import HuggingFaceGenerator

    generator = HuggingFaceGenerator(settings)
    text = await generator.generate("think about memory")
    await generator.close()

``generate`` returns cleaned text or raises a ``GenerationError``
subclass; turning failures into marker strings is the caller's job.
"""

import asyncio
import json
import logging
import re
from typing import Any, List, Optional, Protocol

import aiohttp
from pydantic import BaseModel, TypeAdapter, ValidationError, field_validator

from config.settings import Settings, get_settings
from synthmind.inference.errors import (
    GenerationError,
    GenerationTransportError,
    MalformedResponseError,
    ModelUnavailableError,
    UnauthorizedError,
)

logger = logging.getLogger(__name__)

# Gemma instruction-tuned chat template
PROMPT_TEMPLATE = "<bos><start_of_turn>user\n{prompt}<end_of_turn>\n<start_of_turn>model\n"
SPECIAL_TOKENS = re.compile(r"<end_of_turn>|<eos>")


class TextGenerator(Protocol):
    """Anything that turns a prompt into text or raises GenerationError."""

    async def generate(self, prompt: str) -> str:
        ...


class GeneratedText(BaseModel):
    generated_text: str

    @field_validator("generated_text")
    @classmethod
    def _not_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("empty generation")
        return value


_RESPONSE_ADAPTER = TypeAdapter(List[GeneratedText])


def format_prompt(prompt: str) -> str:
    return PROMPT_TEMPLATE.format(prompt=prompt)


def clean_generation(text: str) -> str:
    return SPECIAL_TOKENS.sub("", text).strip()


def _error_text(payload: Any) -> Optional[str]:
    if isinstance(payload, dict) and payload.get("error"):
        error = payload["error"]
        return error if isinstance(error, str) else json.dumps(error)
    return None


def interpret_response(status: int, payload: Any) -> str:
    """Map an HTTP status and decoded JSON body to text or a typed error."""
    if status == 401:
        raise UnauthorizedError(_error_text(payload))
    if status >= 400:
        raise ModelUnavailableError(status, _error_text(payload))
    try:
        results = _RESPONSE_ADAPTER.validate_python(payload)
    except ValidationError as e:
        raise MalformedResponseError(str(e)) from e
    if not results:
        raise MalformedResponseError("empty result list")
    return clean_generation(results[0].generated_text)


class HuggingFaceGenerator:
    """Calls the hosted inference endpoint for one model.

    A session may be injected; otherwise one is created lazily and owned
    by the generator until ``close``.
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[aiohttp.ClientSession] = None):
        self.settings = settings or get_settings()
        self._session = session
        self._owns_session = session is None

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json"}
        token = self.settings.hf_api_token
        if token is not None:
            headers["Authorization"] = f"Bearer {token.get_secret_value()}"
        return headers

    def _body(self, prompt: str) -> dict:
        return {
            "inputs": format_prompt(prompt),
            "parameters": {
                "max_new_tokens": self.settings.max_new_tokens,
                "temperature": self.settings.temperature,
                "do_sample": True,
                "return_full_text": False,
            },
            "options": {"wait_for_model": True},
        }

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.settings.request_timeout)
            )
            self._owns_session = True
        return self._session

    async def generate(self, prompt: str) -> str:
        if self.settings.hf_api_token is None:
            logger.debug("No Hugging Face token configured; request will likely be rejected")
        session = self._get_session()
        try:
            async with session.post(
                self.settings.model_url,
                headers=self._headers(),
                json=self._body(prompt),
            ) as response:
                status = response.status
                try:
                    payload = await response.json(content_type=None)
                except (json.JSONDecodeError, aiohttp.ContentTypeError, ValueError):
                    payload = None
        except asyncio.TimeoutError as e:
            raise GenerationTransportError("request timed out") from e
        except aiohttp.ClientError as e:
            raise GenerationTransportError(str(e)) from e

        try:
            return interpret_response(status, payload)
        except GenerationError as e:
            logger.warning(f"Generation failed with HTTP {status}: {e}")
            raise

    async def close(self) -> None:
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None
