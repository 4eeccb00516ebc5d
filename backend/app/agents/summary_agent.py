"""Summary agents - investor-focused article summaries from Claude or Gemini."""

import logging
import re
from typing import Protocol

import anthropic
import httpx
from google import genai
from google.genai import errors as genai_errors
from google.genai import types

from app.config import Settings, get_settings

logger = logging.getLogger(__name__)

INVESTOR_SUMMARY_PROMPT = """You are a senior Dubai real estate investment analyst writing for property investors.

Write a 150-200 word investor-focused analysis of the article you are given:
- Open with a one-sentence key takeaway.
- Explain the implication for the Dubai property market.
- Name the opportunities and risks for investors.
- Include relevant figures (prices, yields, volumes, dates) from the article.

Even if the article is not directly about real estate, connect it to property values,
rental demand or investment timing in Dubai.

Write plain prose paragraphs. Do not use markdown headers, bullet lists or code blocks."""

_CODE_FENCE_RE = re.compile(r"```(?:markdown)?\n?")


def build_user_message(title: str, content: str, max_chars: int) -> str:
    return f"Article Title: {title}\n\nArticle Content:\n{content[:max_chars]}"


def clean_summary(text: str) -> str | None:
    """Remove stray code fences; empty output counts as no summary."""
    cleaned = _CODE_FENCE_RE.sub("", text or "").strip()
    return cleaned or None


class SummaryAgent(Protocol):
    async def summarize(self, title: str, content: str) -> str | None: ...

    async def close(self) -> None: ...


class ClaudeSummaryAgent:
    """Summarizer backed by the Anthropic Messages API."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_input_chars: int = 4000,
    ) -> None:
        settings = get_settings()
        self.client = anthropic.AsyncAnthropic(api_key=api_key or settings.anthropic_api_key)
        self.model = model or settings.anthropic_model
        self.max_input_chars = max_input_chars

    async def summarize(self, title: str, content: str) -> str | None:
        logger.debug("[AI] Generating investor summary for: %s", title[:50])
        try:
            response = await self.client.messages.create(
                model=self.model,
                max_tokens=1024,
                system=INVESTOR_SUMMARY_PROMPT,
                messages=[
                    {
                        "role": "user",
                        "content": build_user_message(title, content, self.max_input_chars),
                    }
                ],
            )
        except anthropic.APIError as e:
            logger.warning("[AI] Claude summary failed for %s: %s", title[:50], e)
            return None

        text = "".join(getattr(block, "text", "") for block in response.content)
        return clean_summary(text)

    async def close(self) -> None:
        await self.client.close()


class GeminiSummaryAgent:
    """Summarizer backed by Google's Gemini models."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        max_input_chars: int = 4000,
    ) -> None:
        settings = get_settings()
        self.client = genai.Client(api_key=api_key or settings.gemini_api_key)
        self.model = model or settings.gemini_model
        self.max_input_chars = max_input_chars

    async def summarize(self, title: str, content: str) -> str | None:
        logger.debug("[AI] Generating investor summary for: %s", title[:50])
        try:
            response = await self.client.aio.models.generate_content(
                model=self.model,
                contents=build_user_message(title, content, self.max_input_chars),
                config=types.GenerateContentConfig(
                    system_instruction=INVESTOR_SUMMARY_PROMPT,
                    temperature=0.3,
                    max_output_tokens=1024,
                ),
            )
        except (genai_errors.APIError, httpx.HTTPError) as e:
            logger.warning("[AI] Gemini summary failed for %s: %s", title[:50], e)
            return None

        return clean_summary(response.text or "")

    async def close(self) -> None:
        pass


def get_summary_agent(settings: Settings | None = None, max_input_chars: int = 4000) -> SummaryAgent:
    """Get summary agent based on configured LLM provider."""
    settings = settings or get_settings()

    if settings.llm_provider == "gemini":
        return GeminiSummaryAgent(
            api_key=settings.gemini_api_key,
            model=settings.gemini_model,
            max_input_chars=max_input_chars,
        )
    # Default to Claude
    return ClaudeSummaryAgent(
        api_key=settings.anthropic_api_key,
        model=settings.anthropic_model,
        max_input_chars=max_input_chars,
    )
