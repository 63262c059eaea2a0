"""Gateway to the hosted generative-AI service.

Responsibilities:
    - Routing prompts to text, vision, or image generation
    - Age-conditioned persona selection
    - Normalizing replies and failures for the chat session

Leverages Agno for the Gemini text/vision agent and google-genai for Imagen.
Maintains clean separation from the UI layer.
"""

from yuvai.agent.config import GatewayConfig, get_gateway_config
from yuvai.agent.gateway import AIGateway, GatewayError, ResponseGenerator, get_gateway

__all__ = [
    "AIGateway",
    "GatewayConfig",
    "GatewayError",
    "ResponseGenerator",
    "get_gateway",
    "get_gateway_config",
]
