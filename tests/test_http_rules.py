from __future__ import annotations

import pytest
import yaml

from rpcdocs.errors import ConfigError
from rpcdocs.extract import load_http_rules, merge_http_rules, parse_http_rules

SERVICE_YAML = """
type: google.api.Service
config_version: 3

http:
  rules:
    - selector: lnrpc.Lightning.WalletBalance
      get: "/v1/balance/blockchain"
    - selector: lnrpc.Lightning.SendCoins
      post: "/v1/transactions"
      body: "*"
    - selector: lnrpc.Lightning.SendCoins
      post: "/v2/transactions"
      body: "*"
"""


def test_parse_http_rules_groups_by_selector() -> None:
    rules = parse_http_rules(yaml.safe_load(SERVICE_YAML))

    assert set(rules) == {"lnrpc.Lightning.WalletBalance", "lnrpc.Lightning.SendCoins"}
    assert rules["lnrpc.Lightning.WalletBalance"][0].get == "/v1/balance/blockchain"
    assert [r.post for r in rules["lnrpc.Lightning.SendCoins"]] == ["/v1/transactions", "/v2/transactions"]


def test_load_http_rules_reads_yaml_file(tmp_path) -> None:
    path = tmp_path / "lightning.yaml"
    path.write_text(SERVICE_YAML, encoding="utf-8")

    rules = load_http_rules(str(path))

    assert rules["lnrpc.Lightning.SendCoins"][0].body == "*"


def test_file_without_http_section_has_no_rules() -> None:
    assert parse_http_rules({"type": "google.api.Service"}) == {}


@pytest.mark.parametrize(
    "config",
    [
        ["not", "a", "mapping"],
        {"http": ["rules"]},
        {"http": {"rules": {"selector": "x"}}},
        {"http": {"rules": [{"get": "/v1/no-selector"}]}},
        {"http": {"rules": [{"selector": "a.B.C", "gett": "/typo"}]}},
    ],
)
def test_invalid_rule_files_are_config_errors(config) -> None:
    with pytest.raises(ConfigError):
        parse_http_rules(config)


def test_merge_http_rules_keeps_order() -> None:
    first = parse_http_rules({"http": {"rules": [{"selector": "a.S.M", "get": "/one"}]}})
    second = parse_http_rules({"http": {"rules": [{"selector": "a.S.M", "get": "/two"}]}})

    merged = merge_http_rules([first, second])

    assert [r.get for r in merged["a.S.M"]] == ["/one", "/two"]


def test_malformed_yaml_is_a_config_error(tmp_path) -> None:
    path = tmp_path / "broken.yaml"
    path.write_text("http: [unclosed\n", encoding="utf-8")

    with pytest.raises(ConfigError) as excinfo:
        load_http_rules(str(path))

    assert str(path) in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, yaml.YAMLError)
