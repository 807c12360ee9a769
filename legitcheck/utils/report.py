"""
Report Generator Module

Writes the posts kept by the verdict pipeline to disk, either as a JSON
list of records or as a markdown report.
"""

import json
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from legitcheck.utils.analysis import AnalyzedPost, DropStats, VERDICT_FAKE, VERDICT_LEGIT

__all__ = [
    "write_report",
    "write_json_report",
    "generate_verdict_report",
]


def write_json_report(filename: str, posts: List[AnalyzedPost]) -> None:
    """Writes the posts as a JSON array of records."""
    with open(filename, "w", encoding="utf-8") as target:
        json.dump([post.to_dict() for post in posts], target, indent=2, ensure_ascii=False)


def _format_timestamp(created_utc: Optional[float]) -> str:
    if created_utc is None:
        return "unknown"
    return datetime.fromtimestamp(created_utc, tz=timezone.utc).strftime("%Y-%m-%d %H:%M UTC")


def write_report_header(target, subreddit: str, time_filter: str, stats: Optional[DropStats]) -> None:
    """
    Writes the header section of the verdict report.
    """
    target.write(f"# Legit Check Report for r/{subreddit} ({time_filter})\n\n")
    if stats is not None:
        target.write(f"- **Posts Seen**: {stats.seen}\n")
        target.write(f"- **Posts Kept**: {stats.kept}\n")
        dropped = {k: v for k, v in stats.as_dict().items() if k not in ("seen", "kept") and v}
        for stage, count in dropped.items():
            target.write(f"- **Dropped ({stage.replace('_', ' ')})**: {count}\n")
    target.write("\n---\n\n")


def write_post_details(target, post: AnalyzedPost, index: int) -> None:
    """
    Writes the section for a single post.
    """
    analysis = post.analysis
    target.write(f"## {index}. {post.title}\n\n")
    target.write(f"- **Verdict**: {analysis.verdict.upper()}\n")
    target.write(f"- **Scores**: legit {analysis.legit_score} / fake {analysis.fake_score}\n")
    target.write(f"- **Posted**: {_format_timestamp(post.created_utc)}\n")
    target.write(f"- **Comments**: {post.num_comments}\n")
    target.write(f"- **Link**: {post.permalink}\n\n")
    target.write("### Images\n\n")
    for url in post.images:
        target.write(f"- {url}\n")
    if analysis.top_comment is not None:
        top = analysis.top_comment
        target.write(f"\n### Top Comment ({top.ups} upvotes, u/{top.author})\n\n")
        target.write(f"> {top.body}\n")
    target.write("\n---\n\n")


def generate_verdict_report(
    filename: str,
    posts: List[AnalyzedPost],
    subreddit: str,
    time_filter: str,
    stats: Optional[DropStats] = None,
) -> Dict[str, Any]:
    """
    Generates the markdown report and returns summary counts.
    """
    with open(filename, "w", encoding="utf-8") as target:
        write_report_header(target, subreddit, time_filter, stats)
        for i, post in enumerate(posts, 1):
            write_post_details(target, post, i)
    return {
        "total_posts": len(posts),
        "legit_posts": sum(1 for p in posts if p.analysis.verdict == VERDICT_LEGIT),
        "fake_posts": sum(1 for p in posts if p.analysis.verdict == VERDICT_FAKE),
    }


def write_report(
    filename: str,
    posts: List[AnalyzedPost],
    subreddit: str,
    time_filter: str,
    stats: Optional[DropStats] = None,
) -> None:
    """Picks the report format from the file extension."""
    if filename.lower().endswith(".json"):
        write_json_report(filename, posts)
    else:
        generate_verdict_report(filename, posts, subreddit, time_filter, stats)
