"""Gemini-backed generative recommender.

Asks a Gemini model for up to five titles matching the user's request and
parses its JSON answer into ``CandidateTitle`` objects. Transport errors and
unusable answers come back as a failed ``GenerationResult``; only a missing
API key raises (``ConfigurationError``) so misconfiguration is not mistaken
for "no recommendations".
"""

import asyncio
import json
import logging
import re
from typing import Any

from google import genai
from google.genai import types

from vibematch.config import get_settings
from vibematch.constants import API_TIMEOUT_GENERATIVE, MAX_AI_CANDIDATES
from vibematch.exceptions import ConfigurationError, GenerationError, GenerationParseError
from vibematch.models.recommendation import CandidateTitle, MediaKind
from vibematch.models.results import GenerationResult
from vibematch.utils.events import EventRecorder, default_recorder
from vibematch.utils.rate_limiter import RateLimiter, rate_limiter

COMPONENT = "generative"

MEDIA_KIND_DESCRIPTIONS = {
    MediaKind.MOVIE: "movies",
    MediaKind.TV: "TV series/shows",
    MediaKind.ANIME: "anime series or anime movies",
}

HIDDEN_GEMS_INSTRUCTION = (
    "Prioritize lesser-known, underrated, or hidden gem titles over mainstream popular ones. "
    "Focus on critically acclaimed but not widely seen content."
)
MAINSTREAM_INSTRUCTION = "You may include popular mainstream titles if they fit well."

_FENCE_START = re.compile(r"^```(?:json)?\s*\n?", re.IGNORECASE)
_FENCE_END = re.compile(r"\n?```\s*$")


def build_instructions(
    media_kind: MediaKind,
    hidden_gems: bool,
    recent_titles: list[str] | None = None,
) -> str:
    """Build the system instruction sent with every request."""
    noun = MEDIA_KIND_DESCRIPTIONS[media_kind]

    context_section = ""
    if recent_titles:
        numbered = "\n".join(f"{i}. {title}" for i, title in enumerate(recent_titles, start=1))
        context_section = (
            "Here are some recent releases you may consider if relevant to the user's request:\n"
            f"{numbered}\n"
        )

    gems_instruction = HIDDEN_GEMS_INSTRUCTION if hidden_gems else MAINSTREAM_INSTRUCTION

    return f"""You are an expert {noun} recommender with encyclopedic knowledge.

The user will describe what they're looking for. Your job is to recommend exactly {MAX_AI_CANDIDATES} {noun} that match their request.

{gems_instruction}

{context_section}
IMPORTANT RULES:
1. Return ONLY a valid JSON array with exactly {MAX_AI_CANDIDATES} objects.
2. Each object must have: "title" (string), "year" (number), "explanation" (string - 1-2 sentences explaining WHY this matches the user's request).
3. Do NOT include any markdown, code blocks, or extra text. Just the raw JSON array.
4. Be specific in your explanations - reference the user's actual request.
5. For regional content (Indian, Bengali, Korean, etc.), include those if relevant.

Example response format:
[{{"title": "Movie Name", "year": 2023, "explanation": "This matches because..."}}]"""


def strip_code_fence(text: str) -> str:
    """Remove a surrounding ``` or ```json fence, if present."""
    text = text.strip()
    if text.startswith("```"):
        text = _FENCE_END.sub("", _FENCE_START.sub("", text, count=1))
    return text.strip()


def _coerce_year(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str) and value.strip()[:4].isdigit():
        return int(value.strip()[:4])
    return None


def parse_candidates(text: str | None) -> list[CandidateTitle]:
    """Parse the model's answer into at most five candidates.

    Raises:
        GenerationParseError: if the answer is empty, not JSON, not a
            non-empty list, or contains an entry without a usable title
    """
    if not text or not text.strip():
        raise GenerationParseError("Empty response from AI")

    try:
        parsed = json.loads(strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise GenerationParseError(f"Invalid JSON from AI: {e.msg}") from e

    if not isinstance(parsed, list) or not parsed:
        raise GenerationParseError("Invalid response format from AI")

    candidates = []
    for item in parsed[:MAX_AI_CANDIDATES]:
        if not isinstance(item, dict):
            raise GenerationParseError("Recommendation entry is not an object")
        title = item.get("title")
        if not isinstance(title, str) or not title.strip():
            raise GenerationParseError("Recommendation entry has no title")
        explanation = item.get("explanation", "")
        if not isinstance(explanation, str):
            raise GenerationParseError("Recommendation explanation is not a string")
        candidates.append(
            CandidateTitle(
                title=title.strip(),
                year=_coerce_year(item.get("year")),
                explanation=explanation.strip(),
            )
        )
    return candidates


class GeminiRecommender:
    """Generative recommender using the Google Gen AI SDK."""

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        client: Any | None = None,
        recorder: EventRecorder | None = None,
        limiter: RateLimiter | None = rate_limiter,
        timeout: float = API_TIMEOUT_GENERATIVE,
    ) -> None:
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.gemini_model
        self._client = client
        self.recorder = recorder or default_recorder
        self.limiter = limiter
        self.timeout = timeout

    def _get_client(self) -> Any:
        """Create the SDK client on first use.

        Raises:
            ConfigurationError: if no Gemini API key is configured
        """
        if self._client is None:
            if not self.api_key:
                raise ConfigurationError("GEMINI_API_KEY")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def _complete(self, client: Any, instructions: str, prompt: str) -> str | None:
        if self.limiter is not None:
            await self.limiter.acquire("gemini")
        response = await asyncio.wait_for(
            client.aio.models.generate_content(
                model=self.model,
                contents=f'User request: "{prompt}"',
                config=types.GenerateContentConfig(
                    system_instruction=instructions,
                    response_mime_type="application/json",
                    temperature=0.7,
                ),
            ),
            timeout=self.timeout,
        )
        return response.text

    async def generate(
        self,
        prompt: str,
        media_kind: MediaKind = MediaKind.MOVIE,
        hidden_gems: bool = False,
        recent_titles: list[str] | None = None,
    ) -> GenerationResult:
        """Ask the model for candidate titles.

        Raises:
            ConfigurationError: if no Gemini API key is configured
        """
        client = self._get_client()
        instructions = build_instructions(media_kind, hidden_gems, recent_titles)

        try:
            text = await self._complete(client, instructions, prompt)
            candidates = parse_candidates(text)
        except GenerationError as e:
            self.recorder.record(COMPONENT, "parse_failed", logging.WARNING, error=str(e))
            return GenerationResult.failure(str(e))
        except asyncio.TimeoutError:
            self.recorder.record(COMPONENT, "timeout", logging.WARNING, timeout=self.timeout)
            return GenerationResult.failure(f"Gemini did not answer within {self.timeout:.0f}s")
        except Exception as e:
            self.recorder.record(
                COMPONENT, "request_failed", logging.ERROR, error=f"{type(e).__name__}: {e}"
            )
            return GenerationResult.failure(str(e) or type(e).__name__)

        self.recorder.record(COMPONENT, "generated", count=len(candidates), model=self.model)
        return GenerationResult.ok(candidates)


gemini_recommender = GeminiRecommender()
