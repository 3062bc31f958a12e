"""Stub generative provider for tests and keyless development."""

import json

from rehearsal.ai.providers.base import LLMMessage, LLMProvider, LLMResponse
from rehearsal.ai.providers.registry import register_llm_provider

STUB_POINTS = [
    {"text": "State the main objective up front", "importance": 5},
    {"text": "Introduce yourself and your role", "importance": 4},
    {"text": "Explain the key problem", "importance": 4},
    {"text": "Share one concrete example", "importance": 3},
    {"text": "Describe the expected outcome", "importance": 3},
    {"text": "Address likely objections", "importance": 3},
    {"text": "Summarize the main takeaways", "importance": 2},
    {"text": "Invite questions from the audience", "importance": 2},
]

STUB_FLOW = {
    "intro": {
        "title": "Introduction",
        "goals": ["State the objective", "Set audience expectations"],
    },
    "sections": [
        {"title": "Background", "goals": ["Explain the context", "Frame the problem"]},
        {"title": "Proposal", "goals": ["Present the plan", "Give one example"]},
    ],
    "conclusion": {"title": "Conclusion", "goals": ["Recap key points", "Call to action"]},
    "qa": {"title": "Q&A", "goals": ["Invite questions", "Address concerns"]},
}


@register_llm_provider
class StubLLMProvider(LLMProvider):
    """Stub provider returning canned, well-formed output.

    Prompts that ask for a presentation flow or talking points get minimal
    JSON so downstream parsers succeed; anything else is echoed back.
    """

    @property
    def name(self) -> str:
        return "stub"

    async def generate(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        _temperature: float = 0.7,
        _max_tokens: int = 2048,
        **_kwargs,
    ) -> LLMResponse:
        prompt = "\n".join(m.content for m in messages)
        lowered = prompt.lower()

        if "presentation flow" in lowered:
            content = json.dumps({"flow": STUB_FLOW})
        elif "talking points" in lowered:
            content = json.dumps({"points": STUB_POINTS})
        else:
            last_user = next((m.content for m in reversed(messages) if m.role == "user"), "")
            content = f"[stub] {last_user}"

        return LLMResponse(
            content=content,
            model=model or "stub",
            tokens_in=len(prompt) // 4,
            tokens_out=len(content) // 4,
            finish_reason="stop",
        )

    async def extract_document_text(
        self,
        data: bytes,
        mime_type: str,
        prompt: str,
        model: str | None = None,
    ) -> LLMResponse:
        content = f"Stub extracted text from {mime_type} ({len(data)} bytes)"
        return LLMResponse(
            content=content,
            model=model or "stub",
            tokens_in=0,
            tokens_out=len(content) // 4,
            finish_reason="stop",
        )
