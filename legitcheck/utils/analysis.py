from dataclasses import asdict, dataclass, field
from numbers import Number
from typing import List, Dict, Any, Optional, FrozenSet

VERDICT_LEGIT = "legit"
VERDICT_FAKE = "fake"
VERDICT_UNKNOWN = "unknown"

VerifiedCheckerRegistry = FrozenSet[str]


def _numeric_or_none(value: Any) -> Optional[float]:
    if isinstance(value, bool) or not isinstance(value, Number):
        return None
    return value


@dataclass(frozen=True)
class RawComment:
    """A single comment from a post's thread, as returned by the JSON endpoint."""

    id: Optional[str]
    author: Optional[str]
    body: Optional[str]
    ups: Optional[float]
    stickied: bool = False

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "RawComment":
        return cls(
            id=data.get("id"),
            author=data.get("author"),
            body=data.get("body") or None,
            ups=_numeric_or_none(data.get("ups")),
            stickied=bool(data.get("stickied", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "author": self.author,
            "body": self.body,
            "ups": self.ups,
            "stickied": self.stickied,
        }


@dataclass(frozen=True)
class RawPost:
    """A listing entry. Field names follow the listing JSON."""

    id: str
    title: Optional[str]
    link_flair_text: Optional[str] = None
    created_utc: Optional[float] = None
    num_comments: int = 0
    permalink: str = ""
    is_self: bool = False
    locked: bool = False
    removed_by_category: Optional[str] = None
    url: Optional[str] = None
    is_gallery: bool = False
    gallery_data: Optional[Dict[str, Any]] = None
    media_metadata: Optional[Dict[str, Any]] = None
    preview: Optional[Dict[str, Any]] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "RawPost":
        return cls(
            id=data.get("id"),
            title=data.get("title"),
            link_flair_text=data.get("link_flair_text"),
            created_utc=data.get("created_utc"),
            num_comments=data.get("num_comments") or 0,
            permalink=data.get("permalink") or "",
            is_self=bool(data.get("is_self", False)),
            locked=bool(data.get("locked", False)),
            removed_by_category=data.get("removed_by_category"),
            url=data.get("url"),
            is_gallery=bool(data.get("is_gallery", False)),
            gallery_data=data.get("gallery_data"),
            media_metadata=data.get("media_metadata"),
            preview=data.get("preview"),
        )


@dataclass(frozen=True)
class ScoredComment:
    """A comment that counted toward one side of the verdict."""

    comment: RawComment
    weight: float
    matches: int

    def to_dict(self) -> Dict[str, Any]:
        data = self.comment.to_dict()
        data.update({"weight": self.weight, "matches": self.matches})
        return data


@dataclass
class VerdictAnalysis:
    """Holds the outcome of scoring one thread's comments."""

    verdict: str = VERDICT_UNKNOWN
    legit_score: float = 0
    fake_score: float = 0
    consensus: Optional[str] = None
    top_comment: Optional[RawComment] = None
    legit_comments: List[ScoredComment] = field(default_factory=list)
    fake_comments: List[ScoredComment] = field(default_factory=list)
    community_split: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "verdict": self.verdict,
            "legitScore": self.legit_score,
            "fakeScore": self.fake_score,
            "consensus": self.consensus,
            "topComment": self.top_comment.to_dict() if self.top_comment else None,
            "legitComments": [c.to_dict() for c in self.legit_comments],
            "fakeComments": [c.to_dict() for c in self.fake_comments],
            "communitySplit": self.community_split,
        }


@dataclass
class AnalyzedPost:
    """A legit-check post that survived every screening stage."""

    id: str
    title: str
    created_utc: Optional[float]
    num_comments: int
    permalink: str
    images: List[str]
    analysis: VerdictAnalysis

    def __post_init__(self):
        if not self.images:
            raise ValueError(f"Post {self.id} has no images")
        if self.analysis.verdict not in (VERDICT_LEGIT, VERDICT_FAKE):
            raise ValueError(f"Post {self.id} has undetermined verdict '{self.analysis.verdict}'")
        if self.analysis.community_split:
            raise ValueError(f"Post {self.id} has a contested verdict")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "created_utc": self.created_utc,
            "num_comments": self.num_comments,
            "permalink": self.permalink,
            "images": list(self.images),
            "analysis": self.analysis.to_dict(),
        }


@dataclass
class DropStats:
    """Counts of posts dropped at each screening stage of one fetch."""

    seen: int = 0
    irrelevant: int = 0
    no_images: int = 0
    comment_fetch_failed: int = 0
    no_comments: int = 0
    undetermined: int = 0
    community_split: int = 0
    kept: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)
