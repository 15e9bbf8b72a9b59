"""grpc-gateway service YAML support.

A service config maps RPC selectors to HTTP rules::

    http:
      rules:
        - selector: lnrpc.Lightning.WalletBalance
          get: "/v1/balance/blockchain"
"""
import logging
from typing import Any, Dict, Iterable, List, Mapping

import yaml
from google.api import http_pb2
from google.protobuf import json_format

from rpcdocs.errors import ConfigError

logger = logging.getLogger(__name__)

HttpRules = Dict[str, List[http_pb2.HttpRule]]


def parse_http_rules(config: Any, source: str = "<memory>") -> HttpRules:
    if not isinstance(config, Mapping):
        raise ConfigError(f"{source}: expected a mapping at the top level")

    http = config.get("http") or {}
    if not isinstance(http, Mapping):
        raise ConfigError(f"{source}: 'http' must be a mapping")
    rules = http.get("rules") or []
    if not isinstance(rules, list):
        raise ConfigError(f"{source}: 'http.rules' must be a list")

    result: HttpRules = {}
    for raw in rules:
        if not isinstance(raw, Mapping) or not raw.get("selector"):
            raise ConfigError(f"{source}: every HTTP rule needs a selector")
        try:
            rule = json_format.ParseDict(raw, http_pb2.HttpRule())
        except json_format.ParseError as exc:
            raise ConfigError(f"{source}: invalid HTTP rule for {raw['selector']}: {exc}") from exc
        result.setdefault(rule.selector, []).append(rule)
    return result


def load_http_rules(path: str) -> HttpRules:
    logger.info("Loading HTTP rules %s", path)
    with open(path, "r", encoding="utf-8") as f:
        try:
            config = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            raise ConfigError(f"{path}: {exc}") from exc
    return parse_http_rules(config, source=str(path))


def merge_http_rules(rule_sets: Iterable[HttpRules]) -> HttpRules:
    merged: HttpRules = {}
    for rules in rule_sets:
        for selector, selector_rules in rules.items():
            merged.setdefault(selector, []).extend(selector_rules)
    return merged
