"""Tests for the Hugging Face client and its error markers."""
import asyncio
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from config.settings import Settings
from synthmind.inference.errors import (
    GenerationTransportError,
    MalformedResponseError,
    ModelUnavailableError,
    UnauthorizedError,
)
from synthmind.inference.hf_client import (
    HuggingFaceGenerator,
    clean_generation,
    format_prompt,
    interpret_response,
)


def mock_session(status=200, payload=None, error=None):
    """Session whose ``post`` yields a response with ``status`` and ``payload``."""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=payload)

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)

    session = MagicMock()
    session.closed = False
    session.close = AsyncMock()
    if error is not None:
        session.post = MagicMock(side_effect=error)
    else:
        session.post = MagicMock(return_value=context)
    return session


class TestInterpretResponse:
    """Test status and payload mapping."""

    def test_success_strips_special_tokens(self):
        assert interpret_response(200, [{"generated_text": " hi there<end_of_turn>"}]) == "hi there"

    def test_unauthorized(self):
        with pytest.raises(UnauthorizedError) as exc:
            interpret_response(401, {"error": "Invalid token"})
        assert exc.value.marker == (
            "(LLM Error: Hugging Face API Key Unauthorized (401). "
            "Please check your token and permissions.)"
        )

    def test_model_loading(self):
        with pytest.raises(ModelUnavailableError) as exc:
            interpret_response(503, {"error": "Model google/gemma-2b-it is currently loading"})
        assert exc.value.loading
        assert exc.value.marker == (
            "(LLM Error: Hugging Face model is loading. Please wait a moment and try again.)"
        )

    def test_service_error_text_echoed(self):
        with pytest.raises(ModelUnavailableError) as exc:
            interpret_response(500, {"error": "boom"})
        assert exc.value.marker == "(LLM Error: boom)"

    def test_service_error_without_text(self):
        with pytest.raises(ModelUnavailableError) as exc:
            interpret_response(500, None)
        assert exc.value.marker == "(LLM Error: HF API returned 500: Unknown error)"

    @pytest.mark.parametrize("payload", [{"foo": 1}, [], [{"generated_text": ""}], None])
    def test_malformed(self, payload):
        with pytest.raises(MalformedResponseError) as exc:
            interpret_response(200, payload)
        assert exc.value.marker == "(LLM Error: HF API returned unexpected response structure.)"


class TestPromptFormatting:
    def test_format_prompt_wraps_in_chat_template(self):
        formatted = format_prompt("think")
        assert formatted.startswith("<bos><start_of_turn>user\nthink<end_of_turn>")
        assert formatted.endswith("<start_of_turn>model\n")

    def test_clean_generation(self):
        assert clean_generation("a<eos>b<end_of_turn> ") == "ab"


class TestHuggingFaceGenerator:
    """Test the HTTP client against a mocked session."""

    @pytest.mark.asyncio
    async def test_generate_posts_to_model_url(self):
        settings = Settings(_env_file=None, hf_api_token="abc", hf_model_id="org/model")
        session = mock_session(payload=[{"generated_text": "a thought"}])
        generator = HuggingFaceGenerator(settings, session=session)

        text = await generator.generate("prompt")

        assert text == "a thought"
        args, kwargs = session.post.call_args
        assert args[0] == "https://api-inference.huggingface.co/models/org/model"
        assert kwargs["headers"]["Authorization"] == "Bearer abc"
        assert kwargs["json"]["parameters"]["max_new_tokens"] == 150
        assert kwargs["json"]["parameters"]["return_full_text"] is False

    @pytest.mark.asyncio
    async def test_http_error_raises_typed_error(self, settings):
        generator = HuggingFaceGenerator(settings, session=mock_session(status=401, payload={}))
        with pytest.raises(UnauthorizedError):
            await generator.generate("prompt")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [aiohttp.ClientConnectionError("down"), asyncio.TimeoutError()])
    async def test_transport_failures(self, settings, error):
        generator = HuggingFaceGenerator(settings, session=mock_session(error=error))
        with pytest.raises(GenerationTransportError) as exc:
            await generator.generate("prompt")
        assert exc.value.marker == "(LLM Error: Network issue or API call failed.)"

    @pytest.mark.asyncio
    async def test_close_leaves_injected_session_open(self, settings):
        session = mock_session()
        generator = HuggingFaceGenerator(settings, session=session)
        await generator.close()
        session.close.assert_not_called()
