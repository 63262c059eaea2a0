"""Gateway to the hosted generative-AI service.

Translates a (prompt, optional image, age) request into one of three
backend operations and normalizes the result into a ChatMessage:

1. **Image generation** - prompts starting with a drawing phrase ("draw",
   "generate", ...) go to Imagen through the google-genai client.
2. **Vision** - prompts that come with an uploaded picture go to the Gemini
   agent together with the image.
3. **Text** - everything else goes to the Gemini agent as plain text.

Text and vision share an Agno agent per persona. The persona depends only
on the user's age. Every failure surfaces as a single GatewayError carrying
a readable message; nothing is retried.
"""

import base64
import logging
import re
from typing import Protocol

from agno.agent import Agent
from agno.media import Image
from agno.models.google import Gemini
from google import genai
from google.genai import types

from yuvai.agent.config import GatewayConfig, get_gateway_config
from yuvai.media.images import ImageParseError, parse_data_url
from yuvai.models.schemas import ChatMessage, MessageRole

logger = logging.getLogger(__name__)

IMAGE_GENERATION_KEYWORDS = ("generate", "draw", "create an image of", "make a picture of")
IMAGE_STYLE_PREFIX = "Cute, kawaii, adorable, pastel colors, "
IMAGE_CAPTION = "Here's the cute picture you asked for! Isn't it adorable?"

DEFAULT_PERSONA = (
    "You are a very cute, friendly, and cheerful chatbot. You love using emojis "
    "and making people happy. Keep your responses sweet and concise."
)
CHILD_PERSONA = (
    "You are a very cute, friendly, and cheerful chatbot talking to a child. "
    "You love using emojis. Your answers must be very simple, short, and easy "
    "for a child to understand. Do not use complex words or long sentences."
)

CHILD_MIN_AGE = 4
CHILD_MAX_AGE = 14

_KEYWORD_PATTERN = re.compile(
    r"^(?:" + "|".join(re.escape(k) for k in IMAGE_GENERATION_KEYWORDS) + r")\s*"
)


class GatewayError(Exception):
    """Raised when the AI service fails to produce a reply."""

    pass


class ResponseGenerator(Protocol):
    """Anything that can answer a chat turn."""

    async def generate_response(self, prompt: str, image: str | None, age: int) -> ChatMessage: ...


def is_image_request(prompt: str) -> bool:
    """Check whether a prompt asks for a picture to be drawn."""
    normalized = prompt.lower().strip()
    return any(normalized.startswith(keyword) for keyword in IMAGE_GENERATION_KEYWORDS)


def image_generation_prompt(prompt: str) -> str:
    """Strip the drawing phrase and apply the house style."""
    subject = _KEYWORD_PATTERN.sub("", prompt.lower().strip(), count=1)
    return f"{IMAGE_STYLE_PREFIX}{subject}"


def persona_for_age(age: int) -> str:
    """Pick the system instruction for a user's age.

    Ages 4 to 14 (inclusive) get the simplified child persona.
    """
    if CHILD_MIN_AGE <= age <= CHILD_MAX_AGE:
        return CHILD_PERSONA
    return DEFAULT_PERSONA


class AIGateway:
    """Stateless adapter over Gemini and Imagen.

    Wraps the backends with:
    - One Agno agent per persona for text and vision replies
    - A google-genai client for image generation
    - Routing between the three operations
    - Normalization of every failure into GatewayError
    """

    def __init__(
        self,
        config: GatewayConfig | None = None,
        client: genai.Client | None = None,
    ) -> None:
        """Initialize the gateway.

        Args:
            config: Optional gateway configuration.
                    Loads from environment if not provided.
            client: Optional google-genai client, created from config if omitted.
        """
        self._config = config or get_gateway_config()
        self._client = client or genai.Client(api_key=self._config.api_key)
        self._agents: dict[str, Agent] = {
            persona: self._create_agent(persona) for persona in (DEFAULT_PERSONA, CHILD_PERSONA)
        }

    def _create_agent(self, persona: str) -> Agent:
        """Create a stateless Agno agent for one persona.

        Returns:
            Agent configured with the Gemini model and the persona instruction.
        """
        model = Gemini(
            id=self._config.text_model,
            api_key=self._config.api_key,
            temperature=self._config.temperature,
            max_output_tokens=self._config.max_tokens,
        )

        return Agent(
            model=model,
            instructions=[persona],
            markdown=False,
        )

    async def generate_response(self, prompt: str, image: str | None, age: int) -> ChatMessage:
        """Answer one chat turn.

        Args:
            prompt: The user's text.
            image: Optional picture attached by the user, as a data URL.
            age: The user's age, used to pick the persona.

        Returns:
            The model's reply message.

        Raises:
            GatewayError: If the service fails or returns nothing usable.
        """
        try:
            if is_image_request(prompt):
                return await self._generate_image(prompt)
            return await self._generate_text(prompt, image, age)
        except GatewayError:
            raise
        except Exception as e:
            logger.error(f"Gemini API error: {e}")
            raise GatewayError(str(e) or "Failed to get a response from the model.") from e

    async def _generate_image(self, prompt: str) -> ChatMessage:
        generation_prompt = image_generation_prompt(prompt)
        logger.info(f"Generating image for prompt: {generation_prompt!r}")

        response = await self._client.aio.models.generate_images(
            model=self._config.image_model,
            prompt=generation_prompt,
            config=types.GenerateImagesConfig(
                number_of_images=1,
                output_mime_type="image/png",
                aspect_ratio="1:1",
            ),
        )

        generated = response.generated_images or []
        if not generated or generated[0].image is None or not generated[0].image.image_bytes:
            raise GatewayError("Image generation failed to produce an image.")

        encoded = base64.b64encode(generated[0].image.image_bytes).decode("ascii")
        return ChatMessage(
            role=MessageRole.MODEL,
            text=IMAGE_CAPTION,
            image=f"data:image/png;base64,{encoded}",
        )

    async def _generate_text(self, prompt: str, image: str | None, age: int) -> ChatMessage:
        agent = self._agents[persona_for_age(age)]

        images = None
        if image:
            try:
                data, mime_type = parse_data_url(image)
            except ImageParseError as e:
                raise GatewayError(str(e)) from e
            images = [Image(content=data, mime_type=mime_type)]

        response = await agent.arun(prompt, images=images)
        text = response.content if isinstance(response.content, str) else ""
        if not text.strip():
            raise GatewayError("Failed to get a response from the model.")

        return ChatMessage(role=MessageRole.MODEL, text=text)


# Module-level singleton instance
_gateway: AIGateway | None = None


def get_gateway() -> AIGateway:
    """Get or create the global gateway.

    Returns:
        The AIGateway instance.
    """
    global _gateway
    if _gateway is None:
        _gateway = AIGateway()
    return _gateway
