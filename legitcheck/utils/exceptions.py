import logging
from types import TracebackType
from typing import List, Optional
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.text import Text
from rich.traceback import Traceback

console = Console(stderr=True)
logger = logging.getLogger(__name__)


class LegitCheckError(Exception):
    """Base class for errors raised by the legit-check pipeline"""

    pass


class ListingFetchError(LegitCheckError):
    """Raised when the subreddit listing cannot be retrieved or has an unexpected shape"""

    pass


class CommentFetchError(LegitCheckError):
    """Raised when a post's comment thread cannot be retrieved or parsed"""

    pass


def _exception_chain(exc: BaseException) -> List[BaseException]:
    """Return the exception and its causes, outermost first."""
    chain = []
    current: Optional[BaseException] = exc
    while current is not None and current not in chain:
        chain.append(current)
        current = current.__cause__ or current.__context__
    return chain


def _raise_site(tb: Optional[TracebackType]) -> str:
    """Describe the innermost frame of a traceback as module.function(), line N."""
    if tb is None:
        return "unknown location"
    while tb.tb_next is not None:
        tb = tb.tb_next
    code = tb.tb_frame.f_code
    module_name = tb.tb_frame.f_globals.get("__name__", "unknown")
    return f"{module_name}.{code.co_name}(), line {tb.tb_lineno}"


def format_exception(exc: Exception, include_trace: bool = False) -> str:
    """Render an exception and its causes as rich markup.

    Args:
        exc: The exception to format
        include_trace: Whether to append the rich traceback

    Returns:
        Markup with the error, each cause and where it was raised

    Raises:
        TypeError: If exc is not an Exception instance
    """
    if not isinstance(exc, Exception):
        raise TypeError("exc must be an Exception instance")

    lines = []
    for depth, error in enumerate(reversed(_exception_chain(exc))):
        text = f"{error.__class__.__name__}: {escape(str(error))}"
        lines.append(f"[bold red]{text}[/]" if depth == 0 else f"[dim]Caused by: {text}[/]")

    tb = exc.__traceback__
    lines.append(f"[dim]Location: {_raise_site(tb)}[/]")

    if include_trace and tb is not None:
        trace = Traceback.extract(exc_type=type(exc), exc_value=exc, traceback=tb)
        lines.extend(["", str(trace)])
    return "\n".join(lines)


def handle_exception(exc: Exception, context: Optional[str] = None, debug: bool = False) -> None:
    """Log an exception and print it as a red panel on stderr.

    Args:
        exc: The exception to handle
        context: Optional context about what was happening
        debug: Whether to include full traceback
    """
    logger.error(context or "Unhandled error", exc_info=exc if debug else False)

    error_msg = format_exception(exc, include_trace=debug)
    if context:
        error_msg = f"{escape(context)}\n{error_msg}"

    console.print(
        Panel(Text.from_markup(error_msg), title="[bold red]Error[/]", border_style="red")
    )
