import re

_ACRONYM_BOUNDARY = re.compile(r"([A-Z]+)([A-Z][a-z])")
_WORD_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_NON_ALNUM = re.compile(r"[^a-zA-Z0-9]+")


def split_words(value: str):
    value = _ACRONYM_BOUNDARY.sub(r"\1 \2", value)
    value = _WORD_BOUNDARY.sub(r"\1 \2", value)
    return [w for w in _NON_ALNUM.split(value) if w]


def to_kebab_case(value: str) -> str:
    """``OpenChannelSync`` -> ``open-channel-sync``."""
    return "-".join(w.lower() for w in split_words(value))


def to_snake_case(value: str) -> str:
    return "_".join(w.lower() for w in split_words(value))


def to_pascal_case(value: str) -> str:
    return "".join(w[:1].upper() + w[1:] for w in split_words(value))


def to_camel_case(value: str) -> str:
    pascal = to_pascal_case(value)
    return pascal[:1].lower() + pascal[1:]
