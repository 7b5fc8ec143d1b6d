import logging
import re
from typing import NamedTuple, Optional

logger = logging.getLogger(__name__)

TAG_PATTERN = re.compile(r"<[^>]*>")
WHITESPACE_PATTERN = re.compile(r"\s+")

# Packaging and multiplicity phrases, English and French
QUANTITY_PATTERNS = [
    re.compile(r"\b(?:lot|set|pack|bundle|ensemble|coffret)\s+(?:(?:of|de)\s+)?\d+\s*", re.IGNORECASE),
    re.compile(r"\b\d+\s+(?:pi[eè]ces?|pieces?|items?|unit[eé]s?|units?)\b\s*", re.IGNORECASE),
    re.compile(r"\b(?:quantit[eé]|quantity)\s*:\s*\d+\s*", re.IGNORECASE),
]

_NUMBER = r"\d+(?:[.,]\d+)?"
_UNIT = r"(?:cm|mm|m|inches|inch|in)\b"

DIMENSION_PATTERNS = [
    re.compile(rf"{_NUMBER}\s*x\s*{_NUMBER}(?:\s*x\s*{_NUMBER})?\s*{_UNIT}"),
    re.compile(
        rf"\b(?:height|width|length|depth|diameter|hauteur|largeur|longueur|profondeur|diam[eè]tre)"
        rf"\s*:?\s*{_NUMBER}\s*{_UNIT}"
    ),
    re.compile(rf"ø\s*{_NUMBER}\s*{_UNIT}"),
]


class DimensionMatch(NamedTuple):
    text: str
    source: str


def sanitize_description(description: Optional[str]) -> str:
    """Strip markup and quantity phrases so the text describes a single unit."""
    if not description:
        return ""

    text = TAG_PATTERN.sub(" ", description)
    text = WHITESPACE_PATTERN.sub(" ", text).strip()

    for pattern in QUANTITY_PATTERNS:
        text = pattern.sub("", text)

    return WHITESPACE_PATTERN.sub(" ", text).strip()


def extract_dimensions(title: Optional[str], description: Optional[str]) -> Optional[DimensionMatch]:
    """Find dimension mentions in the title and description.

    Matches are deduplicated in order of discovery and joined with ", ".
    The source is "title" when the first match appears in the title.
    """
    title_lower = (title or "").lower()
    combined = f"{title_lower} {(description or '').lower()}"

    found = []
    for pattern in DIMENSION_PATTERNS:
        for match in pattern.finditer(combined):
            found.append(match.group(0).strip())

    if not found:
        logger.info("No dimensions found in title or description")
        return None

    unique = list(dict.fromkeys(found))
    source = "title" if found[0] in title_lower else "description"
    logger.info("Dimensions found (%s): %s", source, unique)
    return DimensionMatch(text=", ".join(unique), source=source)


def truncate(text: Optional[str], limit: int) -> str:
    return (text or "")[:limit]
