from typing import Iterable, List, Optional

from legitcheck.keywords import KeywordMatcher, KeywordTables
from legitcheck.utils.analysis import (
    RawComment,
    ScoredComment,
    VerdictAnalysis,
    VerifiedCheckerRegistry,
    VERDICT_FAKE,
    VERDICT_LEGIT,
    VERDICT_UNKNOWN,
)
from legitcheck.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_VERIFIED_CHECKERS: VerifiedCheckerRegistry = frozenset({"Tight-Purpose5316"})


class CommentAnalyzer:
    """Scores a thread's comments and derives the community verdict.

    Each opinionated comment contributes ``matches * weight`` to its side,
    where the weight starts at ``max(ups, 1)`` and is doubled for the top
    comment and multiplied by ten for verified checkers. Comments that hit
    both term lists are left out of both tallies.
    """

    TOP_COMMENT_MULTIPLIER = 2
    VERIFIED_MULTIPLIER = 10
    SPLIT_RATIO = 0.8

    def __init__(
        self,
        verified_checkers: Optional[VerifiedCheckerRegistry] = None,
        keywords: Optional[KeywordTables] = None,
        matcher: Optional[KeywordMatcher] = None,
    ):
        self.verified_checkers = frozenset(
            DEFAULT_VERIFIED_CHECKERS if verified_checkers is None else verified_checkers
        )
        self.keywords = keywords or KeywordTables()
        self.matcher = matcher or KeywordMatcher()

    @staticmethod
    def _qualifies(comment: RawComment) -> bool:
        return bool(comment.body) and comment.ups is not None and not comment.stickied

    def analyze(self, comments: Iterable[RawComment]) -> VerdictAnalysis:
        """Analyze one post's comments.

        :param comments: raw comments in thread order.
        :return: a fresh VerdictAnalysis.
        """
        filtered = [c for c in comments if self._qualifies(c)]
        if not filtered:
            logger.debug_with_context("No qualifying comments, verdict unknown")
            return VerdictAnalysis()

        top_comment = filtered[0]
        for comment in filtered[1:]:
            if comment.ups > top_comment.ups:
                top_comment = comment

        legit_score = 0
        fake_score = 0
        legit_comments: List[ScoredComment] = []
        fake_comments: List[ScoredComment] = []

        for comment in filtered:
            legit_matches = self.matcher.count(comment.body, self.keywords.legit)
            fake_matches = self.matcher.count(comment.body, self.keywords.fake)

            if legit_matches == 0 and fake_matches == 0:
                continue
            if legit_matches > 0 and fake_matches > 0:
                logger.debug_with_context(f"Comment {comment.id} matches both sides, ignored")
                continue

            weight = self.weight_for(comment, comment is top_comment)
            if legit_matches:
                legit_score += legit_matches * weight
                legit_comments.append(ScoredComment(comment, weight, legit_matches))
            else:
                fake_score += fake_matches * weight
                fake_comments.append(ScoredComment(comment, weight, fake_matches))

        verdict, community_split = self.decide(legit_score, fake_score)
        logger.debug_with_context(
            f"Scored {len(filtered)} comments: legit={legit_score}, fake={fake_score}, "
            f"verdict={verdict}, split={community_split}"
        )
        return VerdictAnalysis(
            verdict=verdict,
            legit_score=legit_score,
            fake_score=fake_score,
            consensus=None if verdict == VERDICT_UNKNOWN else verdict,
            top_comment=top_comment,
            legit_comments=legit_comments,
            fake_comments=fake_comments,
            community_split=community_split,
        )

    def weight_for(self, comment: RawComment, is_top: bool) -> float:
        """Return the vote weight of a comment."""
        weight = max(comment.ups, 1)
        if is_top:
            weight *= self.TOP_COMMENT_MULTIPLIER
        if comment.author in self.verified_checkers:
            weight *= self.VERIFIED_MULTIPLIER
        return weight

    @classmethod
    def decide(cls, legit_score: float, fake_score: float):
        """Return ``(verdict, community_split)`` for a pair of scores."""
        if legit_score == 0 and fake_score == 0:
            return VERDICT_UNKNOWN, False
        if legit_score > fake_score:
            return VERDICT_LEGIT, fake_score / legit_score >= cls.SPLIT_RATIO
        if fake_score > legit_score:
            return VERDICT_FAKE, legit_score / fake_score >= cls.SPLIT_RATIO
        return VERDICT_UNKNOWN, False
