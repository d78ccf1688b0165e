import os
from pathlib import Path

import yaml

CONFIG_PATH = Path(__file__).resolve().parents[2] / "config" / "gedcom_codec.yml"
CONFIG_ENV_VAR = "GEDCOM_CODEC_CONFIG"

DEFAULT_READER = {
    "max_reported_errors": 20,
    "warn_unmapped_tags": True,
    "ignore_missing_references": False,
}

DEFAULT_WRITER = {
    "source_program": "gedcom_codec",
    "max_line_length": 255,
    "line_terminator": "\n",
    "version": "5.5.1",
}


class CodecConfig:
    def __init__(self, data):
        self.paths = data.get("paths", {}) or {}
        self.logging = data.get("logging", {}) or {}
        self.reader = {**DEFAULT_READER, **(data.get("reader", {}) or {})}
        self.writer = {**DEFAULT_WRITER, **(data.get("writer", {}) or {})}
        self.debug = bool(data.get("debug", False))


def config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_PATH


def load_config(path: Path | None = None) -> CodecConfig:
    path = path or config_path()

    if not path.exists():
        # Installed without the repository config directory: run on defaults.
        if os.environ.get(CONFIG_ENV_VAR):
            raise FileNotFoundError(f"Config file not found: {path}")
        return CodecConfig({})

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return CodecConfig(data)


_config_cache = None


def get_config() -> CodecConfig:
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def reset_config() -> None:
    """Drop the cached configuration (used by tests and the CLI)."""
    global _config_cache
    _config_cache = None
