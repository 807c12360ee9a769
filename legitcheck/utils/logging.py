import logging
import sys
from functools import wraps
from typing import Callable, Any, Optional, Union, TypeVar
from legitcheck.utils.exceptions import handle_exception

T = TypeVar("T")
LoggerType = logging.Logger
LogLevel = Union[int, str]

LOG_FILE = "legitcheck.log"
NOISY_LOGGERS = ("urllib3", "requests")

# Set by setup_logging; with_logging only renders failures in debug runs
_debug_reporting = False


def setup_logging(initial_level: LogLevel = logging.INFO, log_file: Optional[str] = LOG_FILE) -> None:
    """Configure root logger with file and console handlers."""
    global _debug_reporting
    _debug_reporting = initial_level == logging.DEBUG

    root_logger = logging.getLogger()
    # Root captures everything, handlers control output level
    root_logger.setLevel(logging.DEBUG)

    if root_logger.hasHandlers():
        root_logger.handlers.clear()

    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(name)s:%(lineno)d - %(message)s')

    if log_file:
        try:
            file_handler = logging.FileHandler(log_file, mode='a')
            file_handler.setLevel(initial_level)
            file_handler.setFormatter(formatter)
            root_logger.addHandler(file_handler)
        except OSError as e:
            sys.stderr.write(f"Error setting up file logger: {e}\n")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if initial_level == logging.DEBUG else logging.WARNING)
    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    _quiet_noisy_loggers(initial_level)


def _quiet_noisy_loggers(level: int) -> None:
    noisy_level = logging.WARNING if level > logging.DEBUG else logging.DEBUG
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(noisy_level)


def get_logger(name: str) -> LoggerType:
    """Get or create a logger with contextual logging methods.

    Args:
        name: The name of the logger, typically __name__

    Returns:
        A Logger instance with additional ``*_with_context`` methods

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info_with_context("Fetching listing")
    """
    logger = logging.getLogger(name)

    if not hasattr(logger, "debug_with_context"):
        def make_log_method(log_level: int) -> Callable[[str, Optional[Callable]], None]:
            def log_method(msg: str, func: Optional[Callable] = None) -> None:
                log_with_context(logger, log_level, msg, func, depth=2)

            return log_method

        setattr(logger, "debug_with_context", make_log_method(logging.DEBUG))
        setattr(logger, "info_with_context", make_log_method(logging.INFO))
        setattr(logger, "warning_with_context", make_log_method(logging.WARNING))
        setattr(logger, "error_with_context", make_log_method(logging.ERROR))
        setattr(logger, "critical_with_context", make_log_method(logging.CRITICAL))

    return logger


def get_log_context(func: Callable[..., Any], frame: Optional[Any] = None) -> str:
    """Get standardized logging context with module, function, and line number.

    Args:
        func: The function from which the log was called
        frame: Optional stack frame, will get caller's frame if None

    Returns:
        A formatted string with module, function and line information
    """
    if frame is None:
        frame = sys._getframe(2)
    return f"[{func.__module__}:{func.__name__}:{frame.f_lineno}]"


def with_logging(logger: LoggerType) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Decorator that adds logging context and exception reporting to functions.

    Exceptions are reported through :func:`handle_exception` only when
    :func:`setup_logging` was called with DEBUG, and only by the innermost
    decorated function, then re-raised unchanged so callers decide whether a
    failure is fatal.

    Example:
        >>> @with_logging(logger)
        >>> def fetch_listing(subreddit: str) -> dict:
        >>>     ...
    """

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args: Any, **kwargs: Any) -> T:
            frame = sys._getframe(1)
            context = get_log_context(func, frame)

            try:
                logger.debug(f"{context} Starting {func.__name__}")
                result = func(*args, **kwargs)
                logger.debug(f"{context} Completed {func.__name__}")
                return result
            except Exception as e:
                if _debug_reporting and not getattr(e, "_legitcheck_reported", False):
                    handle_exception(e, f"Error in {func.__name__}", debug=True)
                    e._legitcheck_reported = True
                raise

        return wrapper

    return decorator


def log_with_context(
    logger: LoggerType,
    level: int,
    msg: str,
    func: Optional[Callable[..., Any]] = None,
    depth: int = 1,
) -> None:
    """Log a message prefixed with ``[module:function:line]`` of the caller.

    Args:
        logger: The logger instance to use
        level: The logging level for this message
        msg: The message to log
        func: Optional function to use for context, defaults to caller
        depth: Stack depth of the caller relative to this function
    """
    if not logger.isEnabledFor(level):
        return
    frame = sys._getframe(depth)
    if func is None:
        func_name = frame.f_code.co_name
        module_name = frame.f_globals["__name__"]
        context = f"[{module_name}:{func_name}:{frame.f_lineno}]"
    else:
        context = get_log_context(func, frame)
    logger.log(level, f"{context} {msg}")
