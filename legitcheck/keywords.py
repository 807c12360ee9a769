import re
from typing import Dict, Iterable, Optional, Pattern, Sequence

from legitcheck.utils.logging import get_logger

logger = get_logger(__name__)

# Terms that vote for an authentic item
LEGIT_KEYWORDS = [
    "legit",
    "real",
    "authentic",
    "retail",
    "gl",
    "green light",
    "good to go",
    "looks good",
    "✓",
    "✅",
    "lgt",
    "verified",
    "genuine",
    "original",
    "on point",
    "100% real",
    "legit check passed",
]

# Terms that vote for a counterfeit item
FAKE_KEYWORDS = [
    "fake",
    "rep",
    "replica",
    "red light",
    "sus",
    "off",
    "dhgate",
    "✗",
    "❌",
    "bad",
    "terrible",
    "counterfeit",
    "knockoff",
    "fufu",
    "low quality",
    "looks off",
    "not legit",
]


class KeywordMatcher:
    """Counts whole-word keyword occurrences in comment text.

    Keywords are treated as literal text, so punctuation such as ``%`` or
    ``?`` carries no regex meaning. Each keyword is bounded by ``\\b`` on both
    ends, which means "legit" does not match inside "legitimate" and a phrase
    like "green light" only matches as a whole.
    """

    def __init__(self):
        self._patterns: Dict[str, Pattern] = {}

    def _pattern(self, keyword: str) -> Pattern:
        pattern = self._patterns.get(keyword)
        if pattern is None:
            pattern = re.compile(rf"\b{re.escape(keyword)}\b", re.IGNORECASE)
            self._patterns[keyword] = pattern
        return pattern

    def count(self, text: Optional[str], keywords: Iterable[str]) -> int:
        """Return the total number of matches of all keywords in text."""
        if not text:
            return 0
        lowered = text.lower()
        return sum(len(self._pattern(kw).findall(lowered)) for kw in keywords)


class KeywordTables:
    """The pair of term lists a CommentAnalyzer scores against."""

    def __init__(
        self,
        legit: Optional[Sequence[str]] = None,
        fake: Optional[Sequence[str]] = None,
    ):
        self.legit = tuple(legit) if legit is not None else tuple(LEGIT_KEYWORDS)
        self.fake = tuple(fake) if fake is not None else tuple(FAKE_KEYWORDS)
        if not self.legit or not self.fake:
            raise ValueError("Both legit and fake keyword lists must be non-empty")
        logger.debug_with_context(
            f"Keyword tables ready: {len(self.legit)} legit terms, {len(self.fake)} fake terms"
        )
