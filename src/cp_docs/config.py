"""Runtime settings for the cp-docs command line tool.

Values come from the defaults below, overridden by ``CP_DOCS_*`` environment
variables. Command line flags take precedence over both.
"""

import os
from typing import Dict, Mapping, Optional

from cp_docs.walker import DEFAULT_IGNORE_PATTERNS, DOCS_DIR_NAME

DEFAULT_CONFIG = {
    "docs_name": DOCS_DIR_NAME,
    "ignore_patterns": list(DEFAULT_IGNORE_PATTERNS),
    "ignore_case": False,
    "skip_hidden": True,
    "log_level": "INFO",
    "log_file": None,
}

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def parse_bool(value: str) -> bool:
    normalized = value.strip().lower()
    if normalized in _TRUE:
        return True
    if normalized in _FALSE:
        return False
    raise ValueError(f"Invalid boolean value: {value!r}")


def parse_list(value: str) -> list:
    """Comma separated list; blank items are dropped."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(environ: Optional[Mapping[str, str]] = None) -> Dict:
    """Build a fresh config dict from defaults and environment overrides."""
    env = os.environ if environ is None else environ
    config = dict(DEFAULT_CONFIG)
    config["ignore_patterns"] = list(DEFAULT_CONFIG["ignore_patterns"])

    if env.get("CP_DOCS_NAME"):
        config["docs_name"] = env["CP_DOCS_NAME"].strip()
    if "CP_DOCS_IGNORE" in env:
        config["ignore_patterns"] = parse_list(env["CP_DOCS_IGNORE"])
    if env.get("CP_DOCS_IGNORE_CASE"):
        config["ignore_case"] = parse_bool(env["CP_DOCS_IGNORE_CASE"])
    if env.get("CP_DOCS_SKIP_HIDDEN"):
        config["skip_hidden"] = parse_bool(env["CP_DOCS_SKIP_HIDDEN"])
    if env.get("CP_DOCS_LOG_LEVEL"):
        config["log_level"] = env["CP_DOCS_LOG_LEVEL"].strip().upper()
    if env.get("CP_DOCS_LOG_FILE"):
        config["log_file"] = env["CP_DOCS_LOG_FILE"]

    return config
