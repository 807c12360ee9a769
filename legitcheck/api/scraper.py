from typing import Any, Dict, List, Optional

import requests

from legitcheck.api import api
from legitcheck.utils.exceptions import CommentFetchError, ListingFetchError
from legitcheck.utils.logging import get_logger, with_logging

logger = get_logger(__name__)

REDDIT_BASE_URL = "https://www.reddit.com"
DEFAULT_USER_AGENT = "BAPE-LC-Trainer/1.0 (by u/Tight-Purpose5316)"
DEFAULT_TIMEOUT = 10
VALID_TIME_OPTIONS = ["hour", "day", "week", "month", "year", "all"]


class Scraper(api.API):
    """Obtains listing and comment data by reading the public Reddit json
    endpoints.

    No authentication is performed. Listing failures raise
    ListingFetchError, comment thread failures raise CommentFetchError.
    """

    def __init__(self, user_agent: str = DEFAULT_USER_AGENT, timeout: Optional[float] = DEFAULT_TIMEOUT):
        self.headers = {"User-Agent": user_agent}
        self.timeout = timeout

    def _get_json(self, url: str, headers: Optional[Dict[str, str]] = None) -> Any:
        logger.debug_with_context(f"Request URL: {url}")
        response = requests.get(url, headers=headers or self.headers, timeout=self.timeout)
        logger.debug_with_context(f"Response status code: {response.status_code}")
        if not response.ok:
            raise requests.HTTPError(f"Reddit API error: {response.status_code}", response=response)
        return response.json()

    @with_logging(logger)
    def parse_listing(self, subreddit, time_filter="week", limit=100, **kwargs):
        """Fetches the newest posts of a subreddit.

        :param subreddit: a subreddit
        :param time_filter: one of hour, day, week, month, year, all
        :param limit: maximum number of posts to request
        :return: the post objects of the listing, in listing order.
        """
        if time_filter not in VALID_TIME_OPTIONS:
            raise ValueError(f"Invalid time filter '{time_filter}', expected one of {VALID_TIME_OPTIONS}")
        # The new listing has no hour window; day is the closest it accepts
        t_param = "day" if time_filter == "hour" else time_filter
        url = f"{REDDIT_BASE_URL}/r/{subreddit}/new.json?limit={limit}&t={t_param}"

        try:
            json_resp = self._get_json(url, kwargs.get("headers"))
        except (requests.RequestException, ValueError) as e:
            raise ListingFetchError(f"Failed to fetch Reddit posts: {e}") from e

        data = json_resp.get("data") if isinstance(json_resp, dict) else None
        children = data.get("children") if isinstance(data, dict) else None
        if not isinstance(children, list):
            raise ListingFetchError("Failed to fetch Reddit posts: Invalid Reddit response format")

        posts = [
            child["data"]
            for child in children
            if isinstance(child, dict) and isinstance(child.get("data"), dict) and child["data"]
        ]
        logger.debug_with_context(f"Listing r/{subreddit} returned {len(posts)} posts")
        return posts

    def parse_comments(self, post_id, limit=20, **kwargs):
        """Fetches a post's comment thread and extracts the top-level comments.

        Failures raise CommentFetchError without being reported here, since
        the caller treats them as a per-post drop.

        :param post_id: id of the post
        :param limit: maximum number of comments to request
        :return: comment objects that carry a body.
        """
        url = f"{REDDIT_BASE_URL}/comments/{post_id}.json?limit={limit}"

        try:
            json_resp = self._get_json(url, kwargs.get("headers"))
        except (requests.RequestException, ValueError) as e:
            raise CommentFetchError(f"Error obtaining comments for post {post_id}: {e}") from e

        # [0] is the post itself, [1] is the comment listing
        if not isinstance(json_resp, list) or len(json_resp) < 2:
            raise CommentFetchError(f"Unexpected comment thread format for post {post_id}")
        data = json_resp[1].get("data") if isinstance(json_resp[1], dict) else None
        children = data.get("children") if isinstance(data, dict) else None
        if not isinstance(children, list):
            raise CommentFetchError(f"Unexpected comment thread format for post {post_id}")

        comments = []
        for child in children:
            comment = child.get("data") if isinstance(child, dict) else None
            if isinstance(comment, dict) and comment.get("body"):
                comments.append(comment)
        logger.debug_with_context(f"Returning {len(comments)} comments for post {post_id}")
        return comments
