import abc
from typing import Any, Dict, List


class API(abc.ABC):
    """Base API Interface

    The API is responsible for gathering the listing and comment data
    that the verdict pipeline runs on.
    """

    @abc.abstractmethod
    def parse_listing(self, subreddit: str, time_filter: str = "week", limit: int = 100, **kwargs) -> List[Dict[str, Any]]:
        """Returns the post objects of a subreddit's newest listing.

        Args:
            subreddit: Subreddit to read
            time_filter: One of hour, day, week, month, year, all
            limit: Maximum number of posts to request
        """
        pass

    @abc.abstractmethod
    def parse_comments(self, post_id: str, limit: int = 20, **kwargs) -> List[Dict[str, Any]]:
        """Returns the top-level comment objects of a post.

        Args:
            post_id: Post ID to read the thread of
            limit: Maximum number of comments to request
        """
        pass
