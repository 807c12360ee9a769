from datetime import datetime, timezone
from typing import List

from rich.table import Table
from rich.text import Text

from legitcheck.utils.base import BaseFormatter
from legitcheck.utils.analysis import AnalyzedPost, DropStats, ScoredComment, VerdictAnalysis, VerifiedCheckerRegistry


class TableFormatter(BaseFormatter):
    """Handles creation and formatting of tables."""

    def generate_posts_table(self, posts: List[AnalyzedPost]) -> Table:
        """Generates a summary table of the kept posts."""
        table = Table(header_style="bold magenta", box=None, padding=(0, 1), collapse_padding=True)
        table.add_column("Verdict", justify="center", style="bold", width=8)
        table.add_column("Legit", justify="right", width=7)
        table.add_column("Fake", justify="right", width=7)
        table.add_column("Title", justify="left", width=60)
        table.add_column("Images", justify="center", width=6)
        table.add_column("Posted", justify="center", width=16)

        for post in posts:
            title = (post.title[:57] + "...") if len(post.title) > 60 else post.title
            posted = (
                datetime.fromtimestamp(post.created_utc, tz=timezone.utc).strftime("%Y-%m-%d %H:%M")
                if post.created_utc is not None
                else "-"
            )
            table.add_row(
                self._format_verdict(post.analysis.verdict),
                f"{post.analysis.legit_score:g}",
                f"{post.analysis.fake_score:g}",
                Text(title, style=f"link {post.permalink}"),
                str(len(post.images)),
                posted,
            )

        return table

    def create_stats_table(self, stats: DropStats) -> Table:
        """Creates a table with the per-stage drop counts of a fetch."""
        table = Table(show_header=False, box=None, padding=(0, 2), collapse_padding=True)
        table.add_column("Stage", style="cyan")
        table.add_column("Count", justify="right")
        for stage, count in stats.as_dict().items():
            table.add_row(stage.replace("_", " ").capitalize(), str(count))
        return table

    def create_breakdown_table(
        self, analysis: VerdictAnalysis, verified_checkers: VerifiedCheckerRegistry
    ) -> Table:
        """Lists the comments that voted on each side, with their weights."""
        table = Table(header_style="bold magenta", box=None, padding=(0, 1), collapse_padding=True)
        table.add_column("Vote", justify="center", width=6)
        table.add_column("Author", width=22)
        table.add_column("Ups", justify="right", width=5)
        table.add_column("Weight", justify="right", width=7)
        table.add_column("Hits", justify="right", width=4)
        table.add_column("Comment", width=70)

        def add_rows(comments: List[ScoredComment], vote: Text) -> None:
            for scored in comments:
                comment = scored.comment
                author = Text(comment.author or "[deleted]")
                if comment.author in verified_checkers:
                    author.append(" ✔ verified", style="bold green")
                body = " ".join((comment.body or "").split())
                preview = (body[:67] + "...") if len(body) > 70 else body
                table.add_row(
                    vote,
                    author,
                    f"{comment.ups:g}",
                    f"{scored.weight:g}",
                    str(scored.matches),
                    Text(preview),
                )

        add_rows(analysis.legit_comments, Text("LEGIT", style="green"))
        add_rows(analysis.fake_comments, Text("FAKE", style="red"))
        return table
