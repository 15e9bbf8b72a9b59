import enum
from dataclasses import dataclass, field
from typing import List, Optional


class FieldKind(str, enum.Enum):
    SCALAR = "scalar"
    MESSAGE = "message"
    ENUM = "enum"


class Placement(str, enum.Enum):
    """Where a request field travels when the method is called over REST."""

    UNKNOWN = "unknown"
    PATH = "path"
    QUERY = "query"
    BODY = "body"


@dataclass
class Field:
    """A single field of a message."""
    name: str
    number: int
    type: str  # short type name, e.g. "uint64" or "ChannelPoint"
    full_type: str  # fully-qualified name for message/enum references, else same as type
    kind: FieldKind = FieldKind.SCALAR
    label: str = ""  # "repeated" or empty
    description: str = ""
    rest_placement: Placement = Placement.UNKNOWN

    @property
    def is_reference(self) -> bool:
        return self.kind is not FieldKind.SCALAR

    @property
    def is_repeated(self) -> bool:
        return self.label == "repeated"


@dataclass
class Message:
    """A named composite type.

    Messages are shared by every method that references them, so anything
    that mutates one (REST placement, source tagging) is seen by all of them.
    """
    name: str
    full_name: str
    description: str = ""
    source: str = ""
    fields: List[Field] = field(default_factory=list)
    is_map_entry: bool = False

    def get_field(self, name: str) -> Optional[Field]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def has_fields(self) -> bool:
        return len(self.fields) > 0


@dataclass
class EnumValue:
    name: str
    number: int
    description: str = ""


@dataclass
class Enum:
    """A named type with ordered (name, number) variants."""
    name: str
    full_name: str
    description: str = ""
    source: str = ""
    values: List[EnumValue] = field(default_factory=list)
