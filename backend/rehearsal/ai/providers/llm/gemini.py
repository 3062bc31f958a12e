"""Google Gemini provider for talking points, flows and document reading."""

import logging
import time
from typing import Any

from rehearsal.ai.providers.base import LLMMessage, LLMProvider, LLMResponse
from rehearsal.ai.providers.registry import register_llm_provider
from rehearsal.exceptions import ProviderError

logger = logging.getLogger("providers.gemini")


@register_llm_provider
class GeminiProvider(LLMProvider):
    """LLM provider using Google's Gemini API."""

    DEFAULT_MODEL = "gemini-2.0-flash-exp"

    @classmethod
    def resolve_model(cls, model: str | None) -> str | None:
        m = (model or "").strip()
        if not m or not m.startswith("gemini-"):
            return cls.DEFAULT_MODEL
        return m

    def __init__(self, api_key: str, model: str | None = None, timeout: float = 60.0):
        self._api_key = api_key
        self._model = type(self).resolve_model(model)
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "gemini"

    def _genai(self):
        """Import and configure the SDK on first use."""
        try:
            import google.generativeai as genai
        except ImportError as e:
            raise ImportError(
                "google-generativeai package not installed. "
                "Install with: pip install google-generativeai"
            ) from e
        genai.configure(api_key=self._api_key)
        return genai

    def _convert_messages(self, messages: list[LLMMessage]) -> tuple[str | None, list[dict]]:
        """Split messages into Gemini's system instruction and user/model history."""
        system_instruction = None
        history = []

        for msg in messages:
            if msg.role == "system":
                system_instruction = msg.content
            elif msg.role == "user":
                history.append({"role": "user", "parts": [msg.content]})
            elif msg.role == "assistant":
                history.append({"role": "model", "parts": [msg.content]})

        return system_instruction, history

    @staticmethod
    def _usage(response: Any) -> tuple[int, int]:
        usage = getattr(response, "usage_metadata", None)
        if usage is None:
            return 0, 0
        tokens_in = int(getattr(usage, "prompt_token_count", 0) or 0)
        tokens_out = int(getattr(usage, "candidates_token_count", 0) or 0)
        return tokens_in, tokens_out

    async def generate(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 2048,
        **kwargs: Any,
    ) -> LLMResponse:
        """Generate a response using Gemini."""
        genai = self._genai()
        model_id = model or self._model
        system_instruction, history = self._convert_messages(messages)
        start_time = time.time()

        logger.info(
            "Gemini generate started",
            extra={
                "service": "providers.gemini",
                "provider": self.name,
                "model_id": model_id,
                "operation": "generate",
            },
        )

        gen_model = genai.GenerativeModel(
            model_name=model_id,
            system_instruction=system_instruction,
            generation_config=genai.GenerationConfig(
                temperature=temperature,
                max_output_tokens=max_tokens,
            ),
        )

        try:
            if len(history) > 1:
                chat = gen_model.start_chat(history=history[:-1])
                response = await chat.send_message_async(
                    history[-1]["parts"][0],
                    request_options={"timeout": self._timeout},
                )
            else:
                prompt = history[0]["parts"][0] if history else ""
                response = await gen_model.generate_content_async(
                    prompt,
                    request_options={"timeout": self._timeout},
                )
            text = response.text or ""
        except Exception as exc:
            logger.error(
                "Gemini generate failed",
                extra={
                    "service": "providers.gemini",
                    "provider": self.name,
                    "model_id": model_id,
                    "error": str(exc),
                },
            )
            raise ProviderError(self.name, f"Gemini request failed: {exc}") from exc

        tokens_in, tokens_out = self._usage(response)
        if tokens_in <= 0:
            tokens_in = sum(len(m.content) for m in messages) // 4
        if tokens_out <= 0:
            tokens_out = len(text) // 4

        logger.info(
            "Gemini generate complete",
            extra={
                "service": "providers.gemini",
                "provider": self.name,
                "model_id": model_id,
                "latency_ms": int((time.time() - start_time) * 1000),
            },
        )

        return LLMResponse(
            content=text,
            model=model_id,
            tokens_in=tokens_in,
            tokens_out=tokens_out,
            finish_reason="stop",
        )

    async def extract_document_text(
        self,
        data: bytes,
        mime_type: str,
        prompt: str,
        model: str | None = None,
    ) -> LLMResponse:
        """Send the document inline alongside the extraction prompt."""
        genai = self._genai()
        model_id = model or self._model
        start_time = time.time()

        logger.info(
            "Gemini document extraction started",
            extra={
                "service": "providers.gemini",
                "provider": self.name,
                "model_id": model_id,
                "operation": "extract_document_text",
                "metadata": {"mime_type": mime_type, "bytes": len(data)},
            },
        )

        gen_model = genai.GenerativeModel(model_name=model_id)
        try:
            response = await gen_model.generate_content_async(
                [{"mime_type": mime_type, "data": data}, prompt],
                request_options={"timeout": self._timeout},
            )
            text = response.text or ""
        except Exception as exc:
            logger.error(
                "Gemini document extraction failed",
                extra={
                    "service": "providers.gemini",
                    "provider": self.name,
                    "model_id": model_id,
                    "error": str(exc),
                },
            )
            raise ProviderError(self.name, f"Gemini request failed: {exc}") from exc

        tokens_in, tokens_out = self._usage(response)

        logger.info(
            "Gemini document extraction complete",
            extra={
                "service": "providers.gemini",
                "provider": self.name,
                "model_id": model_id,
                "latency_ms": int((time.time() - start_time) * 1000),
            },
        )

        return LLMResponse(
            content=text,
            model=model_id,
            tokens_in=tokens_in,
            tokens_out=tokens_out or len(text) // 4,
            finish_reason="stop",
        )
