"""
GD&T symbol image generation.

The inspection form can illustrate a parameter's GD&T callout with a
generated image. Generation is delegated to an external image service that
may be slow or fail, so the interface is asynchronous.

- GdtImageGenerator: the interface the inspection session depends on
- HttpGdtImageGenerator: posts the symbol to an HTTP endpoint with httpx
  and expects {"image": "<data url>"} back
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

import httpx

from ..exceptions import ImageGenerationError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 60.0


class GdtImageGenerator(ABC):
    """Asynchronous GD&T image generator."""

    @abstractmethod
    async def generate(self, symbol_name: str, symbol_code: str) -> str:
        """
        Generate an illustration of a GD&T symbol.

        Args:
            symbol_name: Human-readable name (e.g., "Flatness")
            symbol_code: Symbol character (e.g., "⏥")

        Returns:
            Image data (typically a data URL)

        Raises:
            ImageGenerationError: If generation fails
        """
        pass


class HttpGdtImageGenerator(GdtImageGenerator):
    """
    Image generator backed by an HTTP image service.

    Request: POST {endpoint} with JSON {"prompt", "symbol_name", "symbol_code"}
    Response: JSON {"image": "<data url>"}
    """

    def __init__(
        self,
        endpoint: str,
        api_key: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None
    ):
        """
        Args:
            endpoint: URL of the image generation endpoint
            api_key: Optional bearer token
            timeout: Request timeout in seconds
            client: Optional pre-configured client (tests pass one with a
                    mock transport); otherwise one is created lazily
        """
        self.endpoint = endpoint
        self.api_key = api_key
        self.timeout = timeout
        self._client = client

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    @staticmethod
    def build_prompt(symbol_name: str, symbol_code: str) -> str:
        return (
            f"A clean technical illustration of the GD&T '{symbol_name}' symbol ({symbol_code}) "
            f"shown in a feature control frame, black lines on a white background"
        )

    async def generate(self, symbol_name: str, symbol_code: str) -> str:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        payload = {
            "prompt": self.build_prompt(symbol_name, symbol_code),
            "symbol_name": symbol_name,
            "symbol_code": symbol_code,
        }

        try:
            response = await self._get_client().post(self.endpoint, json=payload, headers=headers)
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise ImageGenerationError(f"Image generation timed out for {symbol_name}") from e
        except httpx.HTTPError as e:
            raise ImageGenerationError(f"Image generation failed for {symbol_name}: {e}") from e
        except ValueError as e:
            raise ImageGenerationError(f"Image service returned invalid JSON: {e}") from e

        image = data.get("image") if isinstance(data, dict) else None
        if not image:
            raise ImageGenerationError(f"Image service returned no image for {symbol_name}")

        logger.debug(f"Generated GD&T image for {symbol_name}")
        return image

    async def aclose(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
