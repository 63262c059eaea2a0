"""Gateway configuration with environment variable loading.

Pydantic-based configuration for the Gemini text, vision and image models.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field, field_validator

# Load environment variables from .env file
load_dotenv()


class GatewayConfig(BaseModel):
    """Configuration for the AI gateway.

    Attributes:
        api_key: Gemini API key.
        text_model: Model used for text and vision replies.
        image_model: Model used for picture generation.
        temperature: Sampling temperature (0.0 = deterministic, 2.0 = creative).
        max_tokens: Maximum tokens in a generated reply.
    """

    api_key: str = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY", os.getenv("API_KEY", "")),
        description="API key for the Gemini API",
    )
    text_model: str = Field(
        default_factory=lambda: os.getenv("GEMINI_TEXT_MODEL", "gemini-2.5-flash"),
        description="Model for text and vision replies",
    )
    image_model: str = Field(
        default_factory=lambda: os.getenv("GEMINI_IMAGE_MODEL", "imagen-4.0-generate-001"),
        description="Model for image generation",
    )
    temperature: float = Field(
        default=0.7,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for reply generation",
    )
    max_tokens: int = Field(
        default=1024,
        ge=1,
        le=65536,
        description="Maximum tokens in a generated reply",
    )

    @field_validator("api_key")
    @classmethod
    def validate_api_key(cls, v: str) -> str:
        """Validate that API key is provided and non-empty."""
        if not v or not v.strip():
            raise ValueError("API key required. Set GEMINI_API_KEY or API_KEY in .env")
        return v.strip()


def get_gateway_config() -> GatewayConfig:
    """Create gateway configuration from environment.

    Returns:
        Configured GatewayConfig instance.

    Raises:
        ValueError: If no API key is set.
    """
    return GatewayConfig()
