import json

import pytest

from legitcheck.cli_config import (
    DEFAULT_CONFIG,
    build_keyword_tables,
    build_registry,
    load_config_from_file,
    load_env_config,
    merge_config,
)


def test_missing_config_file(tmp_path):
    values, notification = load_config_from_file(str(tmp_path / "missing.json"))
    assert values == {}
    assert "No configuration file found" in notification


def test_invalid_config_file(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    values, notification = load_config_from_file(str(path))
    assert values == {}
    assert "Error decoding" in notification


def test_non_object_config_file(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]")
    values, notification = load_config_from_file(str(path))
    assert values == {}
    assert "JSON object" in notification


def test_valid_config_file(tmp_path):
    path = tmp_path / "legitcheck.json"
    path.write_text(json.dumps({"subreddit": "streetwear", "verified_checkers": ["alice"]}))
    values, notification = load_config_from_file(str(path))
    assert values == {"subreddit": "streetwear", "verified_checkers": ["alice"]}
    assert "loaded" in notification


def test_env_config():
    env = {
        "LEGITCHECK_SUBREDDIT": "sneakers",
        "LEGITCHECK_VERIFIED_CHECKERS": "alice, bob,,",
        "UNRELATED": "x",
    }
    assert load_env_config(env) == {"subreddit": "sneakers", "verified_checkers": ["alice", "bob"]}
    assert load_env_config({}) == {}


def test_merge_precedence():
    merged = merge_config(
        {"subreddit": "from_file", "limit": 25},
        {"subreddit": "from_env"},
        {"limit": None, "time": "day"},
    )
    assert merged["subreddit"] == "from_env"
    assert merged["limit"] == 25
    assert merged["time"] == "day"
    assert merged["max_workers"] == DEFAULT_CONFIG["max_workers"]


@pytest.mark.parametrize(
    "override",
    [
        {"time": "decade"},
        {"limit": 0},
        {"max_workers": -1},
        {"comment_limit": "20"},
        {"timeout": 0},
        {"verified_checkers": "alice"},
    ],
)
def test_merge_rejects_invalid_values(override):
    with pytest.raises(ValueError):
        merge_config(override)


def test_builders():
    config = merge_config({"verified_checkers": ["alice"], "legit_keywords": ["pass"]})
    assert build_registry(config) == frozenset({"alice"})
    tables = build_keyword_tables(config)
    assert tables.legit == ("pass",)
    assert "fake" in tables.fake
