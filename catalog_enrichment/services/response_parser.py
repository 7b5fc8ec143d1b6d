import json
import logging
import re
from typing import Any, Callable, Dict, List, NamedTuple, Optional, Tuple

logger = logging.getLogger(__name__)

JSON_FENCE_PATTERN = re.compile(r"```json\s*([\s\S]*?)\s*```", re.IGNORECASE)
ANY_FENCE_PATTERN = re.compile(r"```\s*([\s\S]*?)\s*```")
BRACE_SPAN_PATTERN = re.compile(r"\{[\s\S]*\}")
CONTROL_CHARS_PATTERN = re.compile(r"[\x00-\x1f\x7f-\x9f]")


class ParseAttempt(NamedTuple):
    strategy: str
    value: Optional[Dict[str, Any]]

    @property
    def ok(self) -> bool:
        return self.value is not None


def _loads_object(candidate: Optional[str]) -> Optional[Dict[str, Any]]:
    if candidate is None:
        return None
    try:
        parsed = json.loads(candidate)
    except (ValueError, TypeError):
        return None
    return parsed if isinstance(parsed, dict) else None


def _group(pattern: re.Pattern, group: int) -> Callable[[str], Optional[str]]:
    def extract(text: str) -> Optional[str]:
        match = pattern.search(text)
        return match.group(group) if match else None

    return extract


# Tried in order; the first candidate that parses into a JSON object wins.
STRATEGIES: List[Tuple[str, Callable[[str], Optional[str]]]] = [
    ("direct", lambda text: text),
    ("json_fence", _group(JSON_FENCE_PATTERN, 1)),
    ("any_fence", _group(ANY_FENCE_PATTERN, 1)),
    ("brace_span", _group(BRACE_SPAN_PATTERN, 0)),
    ("strip_control_chars", lambda text: CONTROL_CHARS_PATTERN.sub("", text).strip()),
]


def _attempt(name: str, extract: Callable[[str], Optional[str]], text: str) -> ParseAttempt:
    return ParseAttempt(strategy=name, value=_loads_object(extract(text)))


def parse_ai_response(content: Optional[str]) -> Optional[Dict[str, Any]]:
    """Recover a JSON object from a completion that may wrap it in prose or fences.

    Returns None when no strategy yields an object; never raises.
    """
    if not content or not content.strip():
        logger.warning("Empty AI response content")
        return None

    for name, extract in STRATEGIES:
        attempt = _attempt(name, extract, content)
        if attempt.ok:
            if name != "direct":
                logger.info("Recovered JSON from AI response using %s", attempt.strategy)
            return attempt.value

    logger.error("All parsing attempts failed. Raw content: %s", content[:200])
    return None
