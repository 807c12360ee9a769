#!/usr/bin/env python
# -*- coding: utf-8 -*-

# Standard library
from concurrent.futures import ThreadPoolExecutor
from contextlib import nullcontext
from typing import List, Optional, Tuple

# Third-party
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn

# Local
from legitcheck.api.api import API
from legitcheck.api.scraper import Scraper
from legitcheck.images import ImageExtractor
from legitcheck.relevance import PostRelevanceFilter
from legitcheck.utils.analysis import (
    AnalyzedPost,
    DropStats,
    RawComment,
    RawPost,
    VerdictAnalysis,
    VERDICT_UNKNOWN,
)
from legitcheck.utils.exceptions import CommentFetchError
from legitcheck.utils.logging import get_logger, with_logging
from legitcheck.verdict import CommentAnalyzer

logger = get_logger(__name__)

DEFAULT_SUBREDDIT = "bapeheads"
DEFAULT_COMMENT_LIMIT = 20
PERMALINK_BASE = "https://reddit.com"

# Outcome of evaluating one screened post: the record, or the stage that dropped it
Outcome = Tuple[Optional[AnalyzedPost], Optional[str]]


class PostFetcher:
    """Runs the listing -> screen -> comments -> verdict pipeline for a subreddit."""

    def __init__(
        self,
        api: Optional[API] = None,
        analyzer: Optional[CommentAnalyzer] = None,
        relevance: Optional[PostRelevanceFilter] = None,
        extractor: Optional[ImageExtractor] = None,
        subreddit: str = DEFAULT_SUBREDDIT,
        comment_limit: int = DEFAULT_COMMENT_LIMIT,
        max_workers: int = 1,
        show_progress: bool = False,
    ):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.api = api or Scraper()
        self.analyzer = analyzer or CommentAnalyzer()
        self.relevance = relevance or PostRelevanceFilter()
        self.extractor = extractor or ImageExtractor()
        self.subreddit = subreddit
        self.comment_limit = comment_limit
        self.max_workers = max_workers
        self.show_progress = show_progress
        self.last_stats = DropStats()
        logger.debug_with_context(
            f"PostFetcher ready: subreddit={subreddit}, comment_limit={comment_limit}, "
            f"max_workers={max_workers}"
        )

    @with_logging(logger)
    def fetch_posts(self, time_filter: str = "week", limit: int = 100) -> List[AnalyzedPost]:
        """Fetch the newest posts and keep the ones with a clear community verdict.

        A listing failure raises ListingFetchError. Every other failure drops
        only the post concerned. Results follow listing order.

        :param time_filter: one of hour, day, week, month, year, all
        :param limit: maximum number of listing entries to request
        :return: list of AnalyzedPost
        """
        stats = DropStats()
        self.last_stats = stats
        raw_posts = self.api.parse_listing(self.subreddit, time_filter=time_filter, limit=limit)

        candidates: List[Tuple[RawPost, List[str]]] = []
        for data in raw_posts:
            stats.seen += 1
            post = RawPost.from_json(data)
            if not self.relevance.is_relevant(post):
                stats.irrelevant += 1
                continue
            images = self.extractor.extract(post)
            if not images:
                stats.no_images += 1
                continue
            candidates.append((post, images))

        logger.debug_with_context(
            f"{len(candidates)} of {stats.seen} listing entries passed screening"
        )
        outcomes = self._evaluate_all(candidates)

        posts = []
        for analyzed, dropped_at in outcomes:
            if analyzed is None:
                setattr(stats, dropped_at, getattr(stats, dropped_at) + 1)
                continue
            posts.append(analyzed)
        stats.kept = len(posts)
        logger.info_with_context(f"Kept {stats.kept} posts, drop counts: {stats.as_dict()}")
        return posts

    def _evaluate_all(self, candidates: List[Tuple[RawPost, List[str]]]) -> List[Outcome]:
        progress = (
            Progress(
                SpinnerColumn(spinner_name="dots"),
                TextColumn("[bold blue]{task.description}"),
                TimeElapsedColumn(),
                transient=True,
            )
            if self.show_progress
            else None
        )
        with progress if progress is not None else nullcontext():
            task = (
                progress.add_task(f"Reading {len(candidates)} comment threads...", total=len(candidates))
                if progress is not None
                else None
            )

            def evaluate(candidate: Tuple[RawPost, List[str]]) -> Outcome:
                outcome = self.evaluate_post(*candidate)
                if progress is not None:
                    progress.update(task, advance=1)
                return outcome

            if self.max_workers == 1 or len(candidates) < 2:
                return [evaluate(c) for c in candidates]
            # map() yields in submission order, so listing order is preserved
            with ThreadPoolExecutor(max_workers=min(self.max_workers, len(candidates))) as pool:
                return list(pool.map(evaluate, candidates))

    def evaluate_post(self, post: RawPost, images: List[str]) -> Outcome:
        """Fetch and score one screened post's thread."""
        try:
            comments = self.fetch_comments(post.id)
        except CommentFetchError as e:
            logger.debug_with_context(f"Dropping post {post.id}: {e}")
            return None, "comment_fetch_failed"

        if not comments:
            return None, "no_comments"

        analysis = self.analyzer.analyze(comments)
        if analysis.verdict == VERDICT_UNKNOWN or (analysis.legit_score == 0 and analysis.fake_score == 0):
            return None, "undetermined"
        if analysis.community_split:
            return None, "community_split"

        return (
            AnalyzedPost(
                id=post.id,
                title=post.title,
                created_utc=post.created_utc,
                num_comments=post.num_comments,
                permalink=f"{PERMALINK_BASE}{post.permalink}",
                images=images,
                analysis=analysis,
            ),
            None,
        )

    def fetch_comments(self, post_id: str) -> List[RawComment]:
        """Return the thread's comments that carry a body.

        Entries that are not comment objects are skipped.
        """
        raw = self.api.parse_comments(post_id, limit=self.comment_limit)
        return [RawComment.from_json(c) for c in raw if isinstance(c, dict) and c.get("body")]

    @with_logging(logger)
    def analyze_thread(self, post_id: str) -> VerdictAnalysis:
        """Score a single thread regardless of listing screening.

        Unlike fetch_posts, a failed comment fetch propagates as CommentFetchError.
        """
        return self.analyzer.analyze(self.fetch_comments(post_id))
