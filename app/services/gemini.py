import asyncio
from typing import Any

from google import genai
from google.genai import types
from loguru import logger

from app.core.config import settings
from app.core.exceptions import UpstreamError


class GeminiService:
    """
    Thin wrapper around the google-genai async client.
    Every call is bounded by ``timeout`` seconds; failures surface as UpstreamError.
    """

    def __init__(
        self,
        api_key: str | None = settings.GEMINI_API_KEY,
        model: str = settings.DEFAULT_GEMINI_MODEL,
        timeout: float = settings.GEMINI_TIMEOUT_SECONDS,
        client: Any = None,
    ):
        self.model = model
        self.timeout = timeout
        self.client = client
        if self.client is not None:
            return
        if api_key:
            try:
                self.client = genai.Client(api_key=api_key)
            except Exception as e:
                logger.warning(f"Failed to initialize Gemini client: {e}")
        else:
            logger.warning("GEMINI_API_KEY not set. Topic extraction and replies will fail.")

    def _require_client(self):
        if not self.client:
            raise UpstreamError("Gemini client not initialized")
        return self.client

    async def _bounded(self, coro, what: str):
        try:
            response = await asyncio.wait_for(coro, timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.warning(f"Gemini {what} timed out after {self.timeout}s")
            raise UpstreamError(f"Gemini {what} timed out") from e
        except Exception as e:
            logger.exception(f"Error during Gemini {what}: {e}")
            raise UpstreamError(f"Gemini {what} failed: {e}") from e

        text = getattr(response, "text", None)
        if text is None:
            raise UpstreamError(f"Gemini {what} returned no text")
        return text

    async def generate_content(self, prompt: str, system_instruction: str) -> str:
        """Single-turn completion with a fixed system instruction."""
        client = self._require_client()
        coro = client.aio.models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(system_instruction=system_instruction),
        )
        return await self._bounded(coro, "completion")

    def start_chat(self, system_instruction: str, max_output_tokens: int = settings.CHAT_MAX_OUTPUT_TOKENS):
        """Create a multi-turn chat handle with an empty history."""
        client = self._require_client()
        return client.aio.chats.create(
            model=self.model,
            config=types.GenerateContentConfig(
                system_instruction=system_instruction,
                max_output_tokens=max_output_tokens,
            ),
            history=[],
        )

    async def send_message(self, chat, message: str) -> str:
        """Send one message on an existing chat handle and return the reply text."""
        return await self._bounded(chat.send_message(message), "chat")
