"""
Intent Extractor — free text to Priority Vector.

Turns requests like "I want fast and cheap servers" into a vector the
rest of the kernel can act on, by scoring each priority dimension against
a keyword vocabulary.

Behavioral Contract:
- Case-insensitive, whitespace-trimmed substring matching
- A dimension's score is its strongest matched keyword, plus a small
  bonus per additional match, capped at 1.0
- Empty input yields the balanced default vector
- Input that matches nothing yields a moderate default, never all zeros
- Never raises
"""

import logging
from typing import Dict, List, Mapping, Optional

from intent_kernel.models.priority import PriorityVector
from intent_kernel.models.vocabulary import DEFAULT_VOCABULARY, KeywordVocabulary

logger = logging.getLogger(__name__)

MULTI_MATCH_BONUS = 0.05

# Used when text is present but nothing in it matched
MODERATE_DEFAULT = {"cost": 0.5, "latency": 0.5, "security": 0.3, "carbon": 0.2}


def _dimension_score(text: str, keywords: Mapping[str, float]) -> float:
    """How strongly the text matches one keyword table."""
    max_score = 0.0
    match_count = 0

    for keyword, weight in keywords.items():
        if keyword in text:
            max_score = max(max_score, weight)
            match_count += 1

    if match_count > 1:
        # Rounded so 0.9 + 0.05 is exactly 0.95
        bonus = MULTI_MATCH_BONUS * (match_count - 1)
        max_score = min(1.0, round(max_score + bonus, 10))

    return max_score


class IntentExtractor:
    """Keyword-scoring extractor. The vocabulary is swappable per instance."""

    def __init__(self, vocabulary: Optional[KeywordVocabulary] = None):
        self.vocabulary = vocabulary or DEFAULT_VOCABULARY

    def extract(self, text: Optional[str]) -> PriorityVector:
        """Parse a natural-language request into a Priority Vector."""
        normalized = self._normalize(text)
        if not normalized:
            logger.debug("Empty intent text, returning balanced default")
            return PriorityVector.default()

        scores = {
            dimension: _dimension_score(normalized, keywords)
            for dimension, keywords in self.vocabulary.tables()
        }

        if all(score == 0 for score in scores.values()):
            logger.debug("No intent keywords matched in %r, using moderate default", text)
            scores = dict(MODERATE_DEFAULT)

        vector = PriorityVector(**scores)
        logger.info("Extracted %s from %r", vector, text)
        return vector

    def match(self, text: Optional[str]) -> Dict[str, List[str]]:
        """Keywords found in the text, per dimension."""
        normalized = self._normalize(text)
        return {
            dimension: sorted(k for k in keywords if normalized and k in normalized)
            for dimension, keywords in self.vocabulary.tables()
        }

    def explain(self, text: Optional[str]) -> str:
        """Human-readable breakdown of how the text was scored."""
        vector = self.extract(text)
        matches = self.match(text)

        lines = [
            "=== Intent Extraction ===",
            f'Input: "{text or ""}"',
        ]
        for dimension in ("cost", "latency", "security", "carbon"):
            found = ", ".join(matches[dimension]) or "-"
            lines.append(
                f"{dimension.capitalize()} priority: "
                f"{getattr(vector, dimension) * 100:.0f}% (matched: {found})"
            )
        return "\n".join(lines)

    @staticmethod
    def _normalize(text: Optional[str]) -> str:
        if text is None:
            return ""
        return text.lower().strip()
