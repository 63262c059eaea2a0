"""Unit tests for AIGateway and GatewayConfig.

Tests configuration validation, routing, persona selection and error
normalization with the Agno and google-genai backends mocked out.
"""

import base64
from types import SimpleNamespace
from typing import Any
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import pytest_check as check
from pydantic import ValidationError

from yuvai.agent.config import GatewayConfig
from yuvai.agent.gateway import (
    CHILD_PERSONA,
    DEFAULT_PERSONA,
    IMAGE_CAPTION,
    AIGateway,
    GatewayError,
    image_generation_prompt,
    is_image_request,
    persona_for_age,
)
from yuvai.models.schemas import MessageRole


class TestGatewayConfig:
    """Tests for GatewayConfig validation."""

    def test_valid_config_with_all_fields(self) -> None:
        config = GatewayConfig(
            api_key="test-key-12345",
            text_model="gemini-2.5-pro",
            image_model="imagen-4.0-fast-generate-001",
            temperature=0.5,
            max_tokens=2048,
        )

        check.equal(config.api_key, "test-key-12345")
        check.equal(config.text_model, "gemini-2.5-pro")
        check.equal(config.image_model, "imagen-4.0-fast-generate-001")
        check.equal(config.temperature, 0.5)
        check.equal(config.max_tokens, 2048)

    def test_config_with_default_values(self) -> None:
        with patch.dict("os.environ", {}, clear=True):
            config = GatewayConfig(api_key="test-key")

        check.equal(config.text_model, "gemini-2.5-flash")
        check.equal(config.image_model, "imagen-4.0-generate-001")
        check.equal(config.temperature, 0.7)
        check.equal(config.max_tokens, 1024)

    @pytest.mark.parametrize("key", ["", "   "])
    def test_config_fails_without_api_key(self, key: str) -> None:
        with pytest.raises(ValidationError) as exc_info:
            GatewayConfig(api_key=key)

        assert "API key required" in str(exc_info.value)

    def test_config_strips_api_key_whitespace(self) -> None:
        config = GatewayConfig(api_key="  test-key  ")

        assert config.api_key == "test-key"

    def test_config_reads_environment(self) -> None:
        env = {"GEMINI_API_KEY": "env-key", "GEMINI_TEXT_MODEL": "gemini-custom"}
        with patch.dict("os.environ", env, clear=True):
            config = GatewayConfig()

        check.equal(config.api_key, "env-key")
        check.equal(config.text_model, "gemini-custom")

    def test_config_falls_back_to_api_key_variable(self) -> None:
        with patch.dict("os.environ", {"API_KEY": "fallback-key"}, clear=True):
            config = GatewayConfig()

        assert config.api_key == "fallback-key"

    @pytest.mark.parametrize("temperature", [-0.1, 2.5])
    def test_config_rejects_temperature_out_of_range(self, temperature: float) -> None:
        with pytest.raises(ValidationError) as exc_info:
            GatewayConfig(api_key="k", temperature=temperature)

        assert "temperature" in str(exc_info.value).lower()


class TestRouting:
    """Tests for the pure routing helpers."""

    @pytest.mark.parametrize(
        "prompt",
        ["draw a cat", "  Draw a cat", "GENERATE a unicorn", "create an image of a fox",
         "make a picture of my dog"],
    )
    def test_image_requests(self, prompt: str) -> None:
        assert is_image_request(prompt)

    @pytest.mark.parametrize("prompt", ["can you draw?", "what is a cat", "", "please draw a cat"])
    def test_not_image_requests(self, prompt: str) -> None:
        assert not is_image_request(prompt)

    @pytest.mark.parametrize(
        ("prompt", "subject"),
        [
            ("draw a cat", "a cat"),
            ("  Draw   a Cat ", "a cat"),
            ("create an image of a rainbow", "a rainbow"),
            ("make a picture of two ducks", "two ducks"),
            ("generate", ""),
        ],
    )
    def test_generation_prompt_strips_trigger(self, prompt: str, subject: str) -> None:
        assert image_generation_prompt(prompt) == f"Cute, kawaii, adorable, pastel colors, {subject}"

    @pytest.mark.parametrize(
        ("age", "persona"),
        [
            (3, DEFAULT_PERSONA),
            (4, CHILD_PERSONA),
            (9, CHILD_PERSONA),
            (14, CHILD_PERSONA),
            (15, DEFAULT_PERSONA),
            (40, DEFAULT_PERSONA),
        ],
    )
    def test_persona_boundaries(self, age: int, persona: str) -> None:
        """Ages 4 to 14 inclusive get the child persona."""
        assert persona_for_age(age) == persona


def _make_agent(**kwargs: Any) -> MagicMock:
    agent = MagicMock()
    agent.instructions = kwargs["instructions"]
    agent.arun = AsyncMock(return_value=SimpleNamespace(content="Hello friend! 🐥"))
    return agent


@pytest.fixture
def client() -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_images = AsyncMock()
    return client


@pytest.fixture
def gateway_under_test(client: MagicMock) -> AIGateway:
    with (
        patch("yuvai.agent.gateway.Gemini") as mock_gemini,
        patch("yuvai.agent.gateway.Agent", side_effect=_make_agent),
    ):
        gateway = AIGateway(config=GatewayConfig(api_key="test-key"), client=client)
        mock_gemini.assert_called_with(
            id="gemini-2.5-flash",
            api_key="test-key",
            temperature=0.7,
            max_output_tokens=1024,
        )
    return gateway


class TestTextAndVision:
    """Tests for the Gemini agent path."""

    async def test_text_reply(self, gateway_under_test: AIGateway, client: MagicMock) -> None:
        message = await gateway_under_test.generate_response("hi there", None, 30)

        check.equal(message.role, MessageRole.MODEL)
        check.equal(message.text, "Hello friend! 🐥")
        check.is_none(message.image)
        client.aio.models.generate_images.assert_not_called()

    async def test_child_age_uses_child_agent(self, gateway_under_test: AIGateway) -> None:
        await gateway_under_test.generate_response("hi", None, 9)

        gateway_under_test._agents[CHILD_PERSONA].arun.assert_awaited_once_with("hi", images=None)
        gateway_under_test._agents[DEFAULT_PERSONA].arun.assert_not_awaited()

    async def test_adult_age_uses_default_agent(self, gateway_under_test: AIGateway) -> None:
        await gateway_under_test.generate_response("hi", None, 25)

        gateway_under_test._agents[DEFAULT_PERSONA].arun.assert_awaited_once()
        gateway_under_test._agents[CHILD_PERSONA].arun.assert_not_awaited()

    async def test_vision_passes_decoded_image(
        self, gateway_under_test: AIGateway, png_bytes: bytes, png_data_url: str
    ) -> None:
        with patch("yuvai.agent.gateway.Image") as mock_image:
            message = await gateway_under_test.generate_response("what is this?", png_data_url, 9)

        mock_image.assert_called_once_with(content=png_bytes, mime_type="image/png")
        agent = gateway_under_test._agents[CHILD_PERSONA]
        check.equal(agent.arun.call_args.kwargs["images"], [mock_image.return_value])
        check.equal(message.text, "Hello friend! 🐥")
        check.is_none(message.image)

    async def test_bad_image_reference_is_gateway_error(self, gateway_under_test: AIGateway) -> None:
        with pytest.raises(GatewayError, match="data URL"):
            await gateway_under_test.generate_response("look", "not-a-data-url", 9)

    async def test_empty_reply_is_gateway_error(self, gateway_under_test: AIGateway) -> None:
        agent = gateway_under_test._agents[DEFAULT_PERSONA]
        agent.arun.return_value = SimpleNamespace(content="")

        with pytest.raises(GatewayError, match="Failed to get a response"):
            await gateway_under_test.generate_response("hi", None, 30)

    async def test_backend_exception_is_gateway_error(self, gateway_under_test: AIGateway) -> None:
        agent = gateway_under_test._agents[DEFAULT_PERSONA]
        agent.arun.side_effect = RuntimeError("quota exceeded")

        with pytest.raises(GatewayError, match="quota exceeded"):
            await gateway_under_test.generate_response("hi", None, 30)


class TestImageGeneration:
    """Tests for the Imagen path."""

    async def test_draw_a_cat(
        self, gateway_under_test: AIGateway, client: MagicMock, png_bytes: bytes
    ) -> None:
        """'draw a cat' goes to image generation with the stripped, styled prompt."""
        image = SimpleNamespace(image_bytes=png_bytes)
        client.aio.models.generate_images.return_value = SimpleNamespace(
            generated_images=[SimpleNamespace(image=image)]
        )

        message = await gateway_under_test.generate_response("draw a cat", None, 9)

        kwargs = client.aio.models.generate_images.call_args.kwargs
        check.equal(kwargs["prompt"], "Cute, kawaii, adorable, pastel colors, a cat")
        check.equal(kwargs["model"], "imagen-4.0-generate-001")
        check.equal(kwargs["config"].number_of_images, 1)
        check.equal(kwargs["config"].aspect_ratio, "1:1")
        check.equal(message.text, IMAGE_CAPTION)
        check.equal(
            message.image, "data:image/png;base64," + base64.b64encode(png_bytes).decode()
        )
        for agent in gateway_under_test._agents.values():
            agent.arun.assert_not_awaited()

    async def test_image_request_wins_over_attached_image(
        self, gateway_under_test: AIGateway, client: MagicMock, png_bytes: bytes, png_data_url: str
    ) -> None:
        client.aio.models.generate_images.return_value = SimpleNamespace(
            generated_images=[SimpleNamespace(image=SimpleNamespace(image_bytes=png_bytes))]
        )

        message = await gateway_under_test.generate_response("draw this", png_data_url, 9)

        check.equal(message.text, IMAGE_CAPTION)
        client.aio.models.generate_images.assert_awaited_once()

    @pytest.mark.parametrize("generated", [None, []])
    async def test_zero_images_is_gateway_error(
        self, gateway_under_test: AIGateway, client: MagicMock, generated: list | None
    ) -> None:
        client.aio.models.generate_images.return_value = SimpleNamespace(generated_images=generated)

        with pytest.raises(GatewayError, match="failed to produce an image"):
            await gateway_under_test.generate_response("draw a cat", None, 9)

    async def test_transport_failure_is_gateway_error(
        self, gateway_under_test: AIGateway, client: MagicMock
    ) -> None:
        client.aio.models.generate_images.side_effect = ConnectionError("network down")

        with pytest.raises(GatewayError, match="network down"):
            await gateway_under_test.generate_response("draw a cat", None, 9)


class TestGetGateway:
    """Tests for the get_gateway singleton."""

    def test_singleton_returns_same_instance(self) -> None:
        import yuvai.agent.gateway as gateway_module

        gateway_module._gateway = None

        with patch.object(gateway_module, "AIGateway") as mock_gateway:
            mock_gateway.return_value = MagicMock()

            first = gateway_module.get_gateway()
            second = gateway_module.get_gateway()

            assert first is second
            mock_gateway.assert_called_once()

        gateway_module._gateway = None
