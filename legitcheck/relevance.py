from typing import Optional, Sequence

from legitcheck.utils.analysis import RawPost

# Matched as plain substrings: "qc" must hit titles like "QC?" or "w2c/qc"
LC_KEYWORDS = ["lc", "legit check", "legit?", "real?", "fake?", "qc", "quality check"]

MIN_COMMENTS = 3


class PostRelevanceFilter:
    """Decides whether a listing entry is a legit-check request worth scoring."""

    def __init__(self, indicators: Optional[Sequence[str]] = None, min_comments: int = MIN_COMMENTS):
        self.indicators = tuple(kw.lower() for kw in (indicators if indicators is not None else LC_KEYWORDS))
        self.min_comments = min_comments

    def matches_category(self, title: Optional[str], flair: Optional[str]) -> bool:
        """Check whether the title or flair carries a legit-check indicator."""
        if not title:
            return False
        lower_title = title.lower()
        if any(kw in lower_title for kw in self.indicators):
            return True
        if isinstance(flair, str):
            lower_flair = flair.lower()
            return any(kw in lower_flair for kw in self.indicators)
        return False

    def is_relevant(self, post: RawPost) -> bool:
        if post.is_self or post.removed_by_category or post.locked:
            return False
        if not post.num_comments or post.num_comments < self.min_comments:
            return False
        return self.matches_category(post.title, post.link_flair_text)
