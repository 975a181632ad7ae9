"""Full production-script expansion using Claude API.

Takes a templated ScriptConcept plus the analyzed report and asks Claude for
a complete, section-by-section video ad script in English or Hindi.
"""

from __future__ import annotations

import asyncio
import os
from pathlib import Path
from typing import Any, Optional

import anthropic
from jinja2 import Template

from ad_insight.models import FullScript, ParsedData, ScriptConcept, ScriptLanguage
from ad_insight.utils.logging import get_logger

logger = get_logger(__name__)

PROMPT_PATH = Path(__file__).parent.parent / "prompts" / "full_script.txt"

LANGUAGE_INSTRUCTIONS = {
    ScriptLanguage.ENGLISH: "Write the script in English.",
    ScriptLanguage.HINDI: (
        "Write the ENTIRE script in HINDI language (Devanagari script). All voiceovers, "
        "on-screen text, and dialogues must be in Hindi. You can use Hinglish for brand "
        "names if needed."
    ),
}

BUSY_MESSAGE = (
    "⏳ The AI service is currently busy. This usually resolves in a few seconds.\n\n"
    "🔄 Please request the full production script again in a moment.\n\n"
    "The service automatically retries, but sometimes it needs an extra attempt "
    "during peak usage."
)

ERROR_MESSAGE = (
    "❌ Error generating script:\n\n{error}\n\n"
    "Please check:\n"
    "• Your API key is configured correctly\n"
    "• You have internet connection\n"
    "• Try again in a moment"
)


def is_overloaded(error: str) -> bool:
    return "overloaded" in error.lower() or "503" in error or "529" in error


def failure_message(error: str) -> str:
    """User-facing text shown in place of a script that could not be generated."""
    if is_overloaded(error):
        return BUSY_MESSAGE
    return ERROR_MESSAGE.format(error=error)


def _response_text(response: Any) -> str:
    """Text of the first content block; empty when there is no text block."""
    if not response.content:
        return ""
    return getattr(response.content[0], "text", None) or ""


class ScriptWriter:
    """Expand script concepts into production-ready scripts with Claude."""

    def __init__(self, config: dict[str, Any], client: Optional[anthropic.AsyncAnthropic] = None):
        g_cfg = config.get("generator", {})
        self.model = g_cfg.get("model", "claude-sonnet-4-20250514")
        self.temperature = g_cfg.get("temperature", 0.7)
        self.max_tokens = g_cfg.get("max_tokens", 4096)
        self.max_retries = g_cfg.get("max_retries", 3)
        self.default_language = ScriptLanguage(g_cfg.get("default_language", "English"))
        self._client = client
        self._prompt_template = self._load_prompt()

    def _load_prompt(self) -> str:
        if PROMPT_PATH.exists():
            return PROMPT_PATH.read_text(encoding="utf-8")
        raise FileNotFoundError(f"Script prompt not found: {PROMPT_PATH}")

    @property
    def client(self) -> anthropic.AsyncAnthropic:
        if self._client is None:
            self._client = anthropic.AsyncAnthropic()
        return self._client

    def build_prompt(
        self,
        concept: ScriptConcept,
        parsed: ParsedData,
        topic: str,
        language: ScriptLanguage = ScriptLanguage.ENGLISH,
    ) -> str:
        template = Template(self._prompt_template)
        return template.render(
            title=concept.title,
            format=concept.format,
            hook=concept.hook,
            themes=parsed.top_themes[:3],
            keywords=parsed.top_keywords[:5],
            topic=topic,
            language_instruction=LANGUAGE_INSTRUCTIONS[language],
            optimize_for="Instagram Reels" if "Reel" in concept.format else "video ads",
        )

    async def expand(
        self,
        concept: ScriptConcept,
        parsed: ParsedData,
        topic: str,
        language: Optional[ScriptLanguage] = None,
    ) -> FullScript:
        """Generate the full script, retrying transient API failures.

        Never raises for API errors: a failed expansion comes back with
        ok=False and a message the user can act on in place of the script.
        Without an explicit language the configured default_language is used.
        """
        language = language or self.default_language
        if self._client is None and not os.environ.get("ANTHROPIC_API_KEY"):
            error = "ANTHROPIC_API_KEY environment variable is not set."
            logger.error(error)
            return self._failed(concept, language, error)

        prompt = self.build_prompt(concept, parsed, topic, language)
        logger.info(f"Expanding '{concept.title}' ({language.value}) with {self.model}")

        last_error = "Unknown error occurred"
        for attempt in range(self.max_retries):
            try:
                response = await self.client.messages.create(
                    model=self.model,
                    max_tokens=self.max_tokens,
                    temperature=self.temperature,
                    messages=[{"role": "user", "content": prompt}],
                )

                text = _response_text(response)
                if text.strip():
                    logger.info(f"Generated script for '{concept.title}': {len(text)} chars")
                    return FullScript(concept=concept, language=language, text=text)

                last_error = "Empty response from model"
                logger.warning(f"Empty script response, attempt {attempt + 1}")

            except anthropic.RateLimitError as e:
                last_error = str(e)
                if attempt < self.max_retries - 1:
                    wait = 2 ** (attempt + 1)
                    logger.warning(f"Rate limited, waiting {wait}s before retry")
                    await asyncio.sleep(wait)
            except anthropic.APIStatusError as e:
                last_error = f"{e.status_code}: {e.message}"
                logger.error(f"API error expanding '{concept.title}': {last_error}")
                if e.status_code < 500:
                    break
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(2 ** attempt)
            except anthropic.APIError as e:
                last_error = str(e)
                logger.error(f"API error expanding '{concept.title}': {e}")
                if attempt < self.max_retries - 1:
                    await asyncio.sleep(2 ** attempt)

        logger.error(f"Script expansion failed after {self.max_retries} attempts")
        return self._failed(concept, language, last_error)

    @staticmethod
    def _failed(concept: ScriptConcept, language: ScriptLanguage, error: str) -> FullScript:
        return FullScript(
            concept=concept,
            language=language,
            text=failure_message(error),
            ok=False,
            error=error,
        )
