from rpcdocs.extract.common import (
    SourceInfo,
    clean_comment,
    extract_enum,
    extract_field,
    extract_message,
)
from rpcdocs.extract.context import TypeRegistry, type_key
from rpcdocs.extract.http_rules import load_http_rules, merge_http_rules, parse_http_rules
from rpcdocs.extract.transitive import MAX_NESTED_DEPTH, NestedTypeResolver

__all__ = [
    "SourceInfo",
    "clean_comment",
    "extract_enum",
    "extract_field",
    "extract_message",
    "TypeRegistry",
    "type_key",
    "load_http_rules",
    "merge_http_rules",
    "parse_http_rules",
    "MAX_NESTED_DEPTH",
    "NestedTypeResolver",
]
