from rpcdocs.schema.model import Enum, EnumValue, Field, FieldKind, Message, Placement

__all__ = [
    "Enum",
    "EnumValue",
    "Field",
    "FieldKind",
    "Message",
    "Placement",
]
