from rich.text import Text

from legitcheck.utils.analysis import VERDICT_FAKE, VERDICT_LEGIT


class BaseFormatter:
    """Base class for formatters with shared utilities."""

    def _get_verdict_style(self, verdict: str) -> str:
        """Determines text style based on the verdict."""
        if verdict == VERDICT_LEGIT:
            return "green"
        elif verdict == VERDICT_FAKE:
            return "red"
        else:
            return "yellow"

    def _format_verdict(self, verdict: str) -> Text:
        return Text(verdict.upper(), style=f"bold {self._get_verdict_style(verdict)}")
