import logging

import pytest
from unittest.mock import patch

from legitcheck.utils.exceptions import format_exception, ListingFetchError
from legitcheck.utils.logging import get_logger, setup_logging, with_logging


def test_get_logger_adds_context_methods(caplog):
    logger = get_logger("legitcheck.tests.context")
    with caplog.at_level(logging.DEBUG, logger="legitcheck.tests.context"):
        logger.debug_with_context("screening listing")
    assert ":test_get_logger_adds_context_methods:" in caplog.text
    assert "screening listing" in caplog.text
    assert get_logger("legitcheck.tests.context") is logger


def test_with_logging_reraises():
    logger = get_logger("legitcheck.tests.decorator")

    @with_logging(logger)
    def explode():
        raise ListingFetchError("listing down")

    with pytest.raises(ListingFetchError):
        explode()


def test_with_logging_preserves_result_and_name():
    logger = get_logger("legitcheck.tests.decorator")

    @with_logging(logger)
    def add(a, b):
        return a + b

    assert add(2, 3) == 5
    assert add.__name__ == "add"


def test_format_exception_includes_cause():
    try:
        try:
            raise ValueError("bad json")
        except ValueError as e:
            raise ListingFetchError("Failed to fetch Reddit posts") from e
    except ListingFetchError as exc:
        message = format_exception(exc)
    assert "ListingFetchError" in message
    assert "Caused by: ValueError: bad json" in message
    assert ".test_format_exception_includes_cause(), line " in message


def _nested_failure(logger):
    @with_logging(logger)
    def inner():
        raise ListingFetchError("listing down")

    @with_logging(logger)
    def outer():
        return inner()

    return outer


def test_with_logging_is_quiet_outside_debug_runs(capsys, restore_logging):
    setup_logging(logging.INFO, log_file=None)
    outer = _nested_failure(get_logger("legitcheck.tests.quiet"))

    with patch("legitcheck.utils.logging.handle_exception") as handle:
        with pytest.raises(ListingFetchError):
            outer()

    handle.assert_not_called()
    assert capsys.readouterr().err == ""


def test_with_logging_reports_once_in_debug_runs(restore_logging):
    setup_logging(logging.DEBUG, log_file=None)
    outer = _nested_failure(get_logger("legitcheck.tests.debug"))

    with patch("legitcheck.utils.logging.handle_exception") as handle:
        with pytest.raises(ListingFetchError):
            outer()

    handle.assert_called_once()
    assert handle.call_args[0][1] == "Error in inner"
