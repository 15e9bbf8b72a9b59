import os
import tomllib
from dataclasses import dataclass, field
from typing import List, Optional

from rpcdocs.errors import ConfigError

CONFIG_FILE_NAME = "rpcdocs.toml"

_STRING_KEYS = ("output_dir", "source_url", "extension", "templates_dir")


@dataclass
class DocsConfig:
    output_dir: str = "docs/api"
    source_url: str = ""
    extension: str = ".mdx"
    templates_dir: Optional[str] = None
    http_rules: List[str] = field(default_factory=list)


def load_config(path: str) -> DocsConfig:
    """Read the ``[docs]`` table of a TOML config file.

    Relative paths in the file are resolved against the file's directory.
    """
    if not os.path.isfile(path):
        raise FileNotFoundError(f"config file not found: {path}")

    with open(path, "rb") as f:
        try:
            raw = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"{path}: {exc}") from exc

    docs = raw.get("docs", {})
    if not isinstance(docs, dict):
        raise ConfigError(f"{path}: [docs] must be a table")

    config = DocsConfig()
    base_dir = os.path.dirname(os.path.abspath(path))
    for key, value in docs.items():
        if key in _STRING_KEYS:
            if not isinstance(value, str):
                raise ConfigError(f"{path}: docs.{key} must be a string")
            setattr(config, key, value)
        elif key == "http_rules":
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"{path}: docs.http_rules must be a list of paths")
            config.http_rules = [os.path.join(base_dir, v) for v in value]
        else:
            raise ConfigError(f"{path}: unknown key docs.{key}")

    if config.templates_dir:
        config.templates_dir = os.path.join(base_dir, config.templates_dir)
    return config
