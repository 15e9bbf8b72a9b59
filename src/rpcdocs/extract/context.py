import logging
from typing import Dict, Iterator, Union

from rpcdocs.errors import (
    DuplicateTypeError,
    RegistryFrozenError,
    UnknownTypeError,
)
from rpcdocs.schema import Enum, Message

logger = logging.getLogger(__name__)

TypeDef = Union[Message, Enum]


def type_key(full_name: str) -> str:
    """Normalize a fully-qualified type name.

    Descriptors spell references with a leading dot (".lnrpc.Channel"), the
    registry stores them without it.
    """
    return full_name.lstrip(".")


class TypeRegistry:
    """Lookup from fully-qualified type name to its message or enum definition.

    The registry is filled once and then frozen; after that it is read-only
    and can be shared freely between methods.
    """

    def __init__(self):
        self._messages: Dict[str, Message] = {}
        self._enums: Dict[str, Enum] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        self._frozen = True
        logger.debug(
            "type registry frozen with %d messages and %d enums",
            len(self._messages),
            len(self._enums),
        )

    def add_message(self, message: Message) -> None:
        key = self._check_new(message.full_name)
        self._messages[key] = message

    def add_enum(self, enum: Enum) -> None:
        key = self._check_new(enum.full_name)
        self._enums[key] = enum

    def _check_new(self, full_name: str) -> str:
        if self._frozen:
            raise RegistryFrozenError(f"cannot register {full_name}: registry is frozen")
        key = type_key(full_name)
        if key in self._messages or key in self._enums:
            raise DuplicateTypeError(key)
        return key

    def resolve(self, full_name: str) -> TypeDef:
        key = type_key(full_name)
        if key in self._messages:
            return self._messages[key]
        if key in self._enums:
            return self._enums[key]
        raise UnknownTypeError(key)

    def get_message(self, full_name: str) -> Message:
        resolved = self.resolve(full_name)
        if not isinstance(resolved, Message):
            raise UnknownTypeError(type_key(full_name))
        return resolved

    def get_enum(self, full_name: str) -> Enum:
        resolved = self.resolve(full_name)
        if not isinstance(resolved, Enum):
            raise UnknownTypeError(type_key(full_name))
        return resolved

    def __contains__(self, full_name: str) -> bool:
        key = type_key(full_name)
        return key in self._messages or key in self._enums

    def __len__(self) -> int:
        return len(self._messages) + len(self._enums)

    def messages(self) -> Iterator[Message]:
        return iter(self._messages.values())

    def enums(self) -> Iterator[Enum]:
        return iter(self._enums.values())
