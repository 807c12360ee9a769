from unittest.mock import MagicMock, patch

import pytest

from legitcheck import cli
from legitcheck.utils.analysis import DropStats, RawComment
from legitcheck.utils.exceptions import ListingFetchError
from legitcheck.verdict import CommentAnalyzer


@pytest.fixture(autouse=True)
def no_logging_setup():
    with patch("legitcheck.cli.setup_logging") as setup:
        yield setup


@pytest.fixture
def config_path(tmp_path):
    return str(tmp_path / "absent.json")


@pytest.fixture
def fetcher():
    mock_fetcher = MagicMock(name="fetcher")
    mock_fetcher.fetch_posts.return_value = []
    mock_fetcher.last_stats = DropStats(seen=3, irrelevant=3)
    with patch("legitcheck.cli.build_fetcher", return_value=mock_fetcher) as build:
        mock_fetcher.build = build
        yield mock_fetcher


def test_posts_command(fetcher, config_path):
    code = cli.main(["--config", config_path, "--max-workers", "3", "posts", "--time", "day", "--limit", "40"])
    assert code == 0
    fetcher.fetch_posts.assert_called_once_with(time_filter="day", limit=40)
    config = fetcher.build.call_args[0][0]
    assert config["max_workers"] == 3
    assert config["subreddit"] == "bapeheads"


def test_posts_command_writes_report(fetcher, config_path, tmp_path):
    output = tmp_path / "posts.json"
    with patch("legitcheck.cli.write_report") as write_report:
        code = cli.main(["--config", config_path, "posts", "--output-file", str(output)])
    assert code == 0
    write_report.assert_called_once_with(str(output), [], "bapeheads", "week", fetcher.last_stats)


def test_listing_failure_returns_error_code(fetcher, config_path):
    fetcher.fetch_posts.side_effect = ListingFetchError("Failed to fetch Reddit posts: Reddit API error: 500")
    assert cli.main(["--config", config_path, "posts"]) == 1


def test_thread_command(fetcher, config_path):
    analyzer = CommentAnalyzer()
    fetcher.analyzer = analyzer
    fetcher.analyze_thread.return_value = analyzer.analyze(
        [RawComment(id="c1", author="Tight-Purpose5316", body="legit", ups=2)]
    )
    assert cli.main(["--config", config_path, "thread", "abc123"]) == 0
    fetcher.analyze_thread.assert_called_once_with("abc123")


def test_build_fetcher_uses_config():
    config = cli.merge_config(
        {"subreddit": "streetwear", "verified_checkers": ["alice"], "max_workers": 2, "timeout": 4}
    )
    fetcher = cli.build_fetcher(config)
    assert fetcher.subreddit == "streetwear"
    assert fetcher.max_workers == 2
    assert fetcher.api.timeout == 4
    assert fetcher.analyzer.verified_checkers == frozenset({"alice"})
