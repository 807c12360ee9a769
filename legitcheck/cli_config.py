import json
import os
import os.path
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from legitcheck.api.scraper import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, VALID_TIME_OPTIONS
from legitcheck.fetcher import DEFAULT_COMMENT_LIMIT, DEFAULT_SUBREDDIT
from legitcheck.keywords import KeywordTables
from legitcheck.utils.analysis import VerifiedCheckerRegistry
from legitcheck.verdict import DEFAULT_VERIFIED_CHECKERS

# --- Constants ---
CONFIG_FILE = "legitcheck.json"

DEFAULT_CONFIG: Dict[str, Any] = {
    "subreddit": DEFAULT_SUBREDDIT,
    "time": "week",
    "limit": 100,
    "comment_limit": DEFAULT_COMMENT_LIMIT,
    "user_agent": DEFAULT_USER_AGENT,
    "timeout": DEFAULT_TIMEOUT,
    "max_workers": 1,
    "verified_checkers": sorted(DEFAULT_VERIFIED_CHECKERS),
    "legit_keywords": None,
    "fake_keywords": None,
}

ENV_VARS_MAP = {
    "LEGITCHECK_SUBREDDIT": "subreddit",
    "LEGITCHECK_USER_AGENT": "user_agent",
    "LEGITCHECK_VERIFIED_CHECKERS": "verified_checkers",
}

# --- Configuration File I/O ---

def load_config_from_file(filepath: str) -> Tuple[Dict[str, Any], Optional[str]]:
    """
    Loads configuration from a JSON file.

    Args:
        filepath: The path to the configuration file.

    Returns:
        A tuple containing:
            - A dictionary with the loaded configuration values (empty if file not found or error).
            - An optional notification message (string) for success or error.
    """
    config_values: Dict[str, Any] = {}
    if not os.path.exists(filepath):
        return config_values, f"No configuration file found at '{filepath}'. Using defaults."
    try:
        with open(filepath, "r", encoding="utf-8") as f:
            loaded = json.load(f)
    except json.JSONDecodeError:
        return config_values, f"Error decoding '{filepath}'. Using defaults."
    except OSError as e:
        return config_values, f"Error loading config file '{filepath}': {e}"
    if not isinstance(loaded, dict):
        return config_values, f"Configuration in '{filepath}' must be a JSON object. Using defaults."
    return loaded, f"Configuration loaded from '{filepath}'."


def load_env_config(environ: Optional[Mapping[str, str]] = None) -> Dict[str, Any]:
    """Collects configuration values set through environment variables."""
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    for env_var, config_key in ENV_VARS_MAP.items():
        value = environ.get(env_var)
        if not value:
            continue
        if config_key == "verified_checkers":
            values[config_key] = [name.strip() for name in value.split(",") if name.strip()]
        else:
            values[config_key] = value
    return values

# --- Configuration Merging & Processing ---

def merge_config(*layers: Optional[Mapping[str, Any]]) -> Dict[str, Any]:
    """
    Merges configuration layers on top of the defaults, later layers winning.
    ``None`` values in a layer never override an earlier value.
    """
    merged = dict(DEFAULT_CONFIG)
    for layer in layers:
        if not layer:
            continue
        for key, value in layer.items():
            if value is not None:
                merged[key] = value
    validate_config(merged)
    return merged


def validate_config(config: Mapping[str, Any]) -> None:
    """Raises ValueError for settings the pipeline cannot run with."""
    if config["time"] not in VALID_TIME_OPTIONS:
        raise ValueError(f"Invalid time filter '{config['time']}', expected one of {VALID_TIME_OPTIONS}")
    for key in ("limit", "comment_limit", "max_workers"):
        if not isinstance(config[key], int) or config[key] < 1:
            raise ValueError(f"'{key}' must be a positive integer, got {config[key]!r}")
    if config["timeout"] is not None and config["timeout"] <= 0:
        raise ValueError(f"'timeout' must be positive, got {config['timeout']!r}")
    if isinstance(config["verified_checkers"], str):
        raise ValueError("'verified_checkers' must be a list of usernames")


def build_registry(config: Mapping[str, Any]) -> VerifiedCheckerRegistry:
    checkers: Iterable[str] = config.get("verified_checkers") or ()
    return frozenset(checkers)


def build_keyword_tables(config: Mapping[str, Any]) -> KeywordTables:
    return KeywordTables(legit=config.get("legit_keywords"), fake=config.get("fake_keywords"))
