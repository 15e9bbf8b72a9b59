from typing import Dict, List, Sequence, Tuple

from google.protobuf import descriptor_pb2

from rpcdocs.extract.context import type_key
from rpcdocs.schema import Enum, EnumValue, Field, FieldKind, Message

FieldDescriptorProto = descriptor_pb2.FieldDescriptorProto

# Field numbers from descriptor.proto, used to address SourceCodeInfo locations.
FILE_MESSAGE_TYPE = 4
FILE_ENUM_TYPE = 5
FILE_SERVICE = 6
MESSAGE_FIELD = 2
MESSAGE_NESTED_TYPE = 3
MESSAGE_ENUM_TYPE = 4
ENUM_VALUE = 2
SERVICE_METHOD = 2

SCALAR_TYPES = {
    FieldDescriptorProto.TYPE_DOUBLE: "double",
    FieldDescriptorProto.TYPE_FLOAT: "float",
    FieldDescriptorProto.TYPE_INT64: "int64",
    FieldDescriptorProto.TYPE_UINT64: "uint64",
    FieldDescriptorProto.TYPE_INT32: "int32",
    FieldDescriptorProto.TYPE_FIXED64: "fixed64",
    FieldDescriptorProto.TYPE_FIXED32: "fixed32",
    FieldDescriptorProto.TYPE_BOOL: "bool",
    FieldDescriptorProto.TYPE_STRING: "string",
    FieldDescriptorProto.TYPE_BYTES: "bytes",
    FieldDescriptorProto.TYPE_UINT32: "uint32",
    FieldDescriptorProto.TYPE_SFIXED32: "sfixed32",
    FieldDescriptorProto.TYPE_SFIXED64: "sfixed64",
    FieldDescriptorProto.TYPE_SINT32: "sint32",
    FieldDescriptorProto.TYPE_SINT64: "sint64",
}


def clean_comment(text: str) -> str:
    """Strip the single space protoc keeps after ``//`` and trim the result."""
    lines = []
    for line in text.splitlines():
        if line.startswith(" "):
            line = line[1:]
        lines.append(line.rstrip())
    return "\n".join(lines).strip()


def qualify(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


class SourceInfo:
    """Comments and declaration lines of a single .proto file."""

    def __init__(self, file_proto: descriptor_pb2.FileDescriptorProto, source_url: str = ""):
        self.file_name = file_proto.name
        self.source_url = source_url
        self._locations: Dict[Tuple[int, ...], descriptor_pb2.SourceCodeInfo.Location] = {
            tuple(loc.path): loc for loc in file_proto.source_code_info.location
        }

    def comment(self, path: Sequence[int]) -> str:
        loc = self._locations.get(tuple(path))
        if loc is None:
            return ""
        return clean_comment(loc.leading_comments)

    def line(self, path: Sequence[int]) -> int:
        loc = self._locations.get(tuple(path))
        if loc is None or not loc.span:
            return 0
        return loc.span[0] + 1

    def location(self, path: Sequence[int]) -> str:
        if self.source_url:
            base = f"{self.source_url.rstrip('/')}/{self.file_name}"
        else:
            base = self.file_name
        line = self.line(path)
        return f"{base}#L{line}" if line else base


def extract_field(
    field_proto: FieldDescriptorProto, info: SourceInfo, path: Sequence[int]
) -> Field:
    if field_proto.type in (FieldDescriptorProto.TYPE_MESSAGE, FieldDescriptorProto.TYPE_GROUP):
        kind = FieldKind.MESSAGE
    elif field_proto.type == FieldDescriptorProto.TYPE_ENUM:
        kind = FieldKind.ENUM
    else:
        kind = FieldKind.SCALAR

    if kind is FieldKind.SCALAR:
        type_name = SCALAR_TYPES[field_proto.type]
        full_type = type_name
    else:
        full_type = type_key(field_proto.type_name)
        type_name = full_type.rsplit(".", 1)[-1]

    return Field(
        name=field_proto.name,
        number=field_proto.number,
        type=type_name,
        full_type=full_type,
        kind=kind,
        label="repeated" if field_proto.label == FieldDescriptorProto.LABEL_REPEATED else "",
        description=info.comment(path),
    )


def extract_enum(
    enum_proto: descriptor_pb2.EnumDescriptorProto,
    prefix: str,
    info: SourceInfo,
    path: Sequence[int],
) -> Enum:
    path = list(path)
    return Enum(
        name=enum_proto.name,
        full_name=qualify(prefix, enum_proto.name),
        description=info.comment(path),
        source=info.location(path),
        values=[
            EnumValue(
                name=value.name,
                number=value.number,
                description=info.comment(path + [ENUM_VALUE, i]),
            )
            for i, value in enumerate(enum_proto.value)
        ],
    )


def extract_message(
    message_proto: descriptor_pb2.DescriptorProto,
    prefix: str,
    info: SourceInfo,
    path: Sequence[int],
) -> Tuple[List[Message], List[Enum]]:
    """Convert a message and everything declared inside it."""
    path = list(path)
    full_name = qualify(prefix, message_proto.name)
    message = Message(
        name=message_proto.name,
        full_name=full_name,
        description=info.comment(path),
        source=info.location(path),
        fields=[
            extract_field(f, info, path + [MESSAGE_FIELD, i])
            for i, f in enumerate(message_proto.field)
        ],
        is_map_entry=message_proto.options.map_entry,
    )

    messages = [message]
    enums = [
        extract_enum(e, full_name, info, path + [MESSAGE_ENUM_TYPE, i])
        for i, e in enumerate(message_proto.enum_type)
    ]
    for i, nested in enumerate(message_proto.nested_type):
        nested_messages, nested_enums = extract_message(
            nested, full_name, info, path + [MESSAGE_NESTED_TYPE, i]
        )
        messages.extend(nested_messages)
        enums.extend(nested_enums)
    return messages, enums
