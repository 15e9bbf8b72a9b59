import logging
from typing import Dict, List, Optional, Sequence, Tuple

from rpcdocs.errors import MethodResolutionError, UnknownTypeError
from rpcdocs.extract.context import TypeRegistry
from rpcdocs.extract.transitive import NestedTypeResolver
from rpcdocs.method.rest import RestMapping
from rpcdocs.method.samples import CodeSamples
from rpcdocs.schema import Enum, Message

logger = logging.getLogger(__name__)

DEPRECATED_TOKEN = "deprecated"


def parse_description(description: str) -> str:
    """Drop the first line of a description if it names a CLI command.

    A first line such as ``lncli: `closechannel``` is rendered separately and
    is not part of the prose.
    """
    if not description:
        return ""
    lines = description.split("\n")
    if ": `" in lines[0]:
        return "\n".join(lines[1:])
    return description


def parse_command_line(description: str) -> str:
    """Turn a first line like ``lncli: `closechannel``` into ``lncli closechannel``."""
    if not description:
        return ""
    first = description.split("\n", 1)[0]
    if ": `" not in first:
        return ""
    program, _, rest = first.partition(": `")
    command = rest.split("`", 1)[0]
    return f"{program.strip()} {command.strip()}".strip()


def _sort_key(item) -> Tuple[str, str]:
    return item.full_name.lower(), item.full_name


class Method:
    """One RPC operation of a service.

    Request/response messages and the nested type listings are resolved on
    first use and cached for the lifetime of the instance.
    """

    def __init__(
        self,
        registry: TypeRegistry,
        *,
        name: str,
        request_type: str,
        request_full_type: str,
        response_type: str,
        response_full_type: str,
        service: str = "",
        package: str = "",
        proto_file: str = "",
        description: str = "",
        source: str = "",
        command_line: str = "",
        command_line_help: str = "",
        request_type_source: str = "",
        response_type_source: str = "",
        request_streaming: bool = False,
        response_streaming: bool = False,
        rest_mappings: Optional[Sequence[RestMapping]] = None,
        resolver: Optional[NestedTypeResolver] = None,
    ) -> None:
        self.registry = registry
        self.resolver = resolver or NestedTypeResolver(registry)

        self.name = name
        self.service = service
        self.package = package
        self.proto_file = proto_file
        self.description = parse_description(description)
        self.source = source
        self.command_line = command_line or parse_command_line(description)
        self.command_line_help = command_line_help
        self.request_type = request_type
        self.request_full_type = request_full_type
        self.request_type_source = request_type_source
        self.request_streaming = request_streaming
        self.response_type = response_type
        self.response_full_type = response_full_type
        self.response_type_source = response_type_source
        self.response_streaming = response_streaming

        self.rest_mapping: Optional[RestMapping] = None
        if rest_mappings:
            # Only the first mapping is documented.
            self.rest_mapping = rest_mappings[0]
            if len(rest_mappings) > 1:
                logger.debug(
                    "method %s has %d REST mappings, using %s %s",
                    name,
                    len(rest_mappings),
                    self.rest_mapping.method,
                    self.rest_mapping.path,
                )

        self._request: Optional[Message] = None
        self._response: Optional[Message] = None
        self._nested_messages: Optional[List[Message]] = None
        self._nested_enums: Optional[List[Enum]] = None

        self.code_samples = CodeSamples(self)

    def __repr__(self) -> str:
        return f"Method(name={self.name!r}, service={self.service!r})"

    def _get_message(self, full_type: str, source: str) -> Message:
        try:
            message = self.registry.get_message(full_type)
        except UnknownTypeError as exc:
            raise MethodResolutionError(self.name, full_type) from exc
        if source:
            message.source = source
        return message

    def request(self) -> Message:
        """The request message, tagged with where this method sees it declared."""
        if self._request is None:
            self._request = self._get_message(self.request_full_type, self.request_type_source)
        return self._request

    def response(self) -> Message:
        """The response message, tagged with where this method sees it declared."""
        if self._response is None:
            self._response = self._get_message(self.response_full_type, self.response_type_source)
        return self._response

    def tag_sources(self) -> None:
        """Re-tag the shared request/response messages with this method's sources."""
        if self.request_type_source:
            self.request().source = self.request_type_source
        if self.response_type_source:
            self.response().source = self.response_type_source

    def _resolve_nested(self) -> None:
        messages: Dict[str, Message] = {}
        enums: Dict[str, Enum] = {}
        for root in (self.request(), self.response()):
            try:
                root_messages, root_enums = self.resolver.resolve(root)
            except UnknownTypeError as exc:
                raise MethodResolutionError(self.name, exc.full_name) from exc
            messages.update(root_messages)
            enums.update(root_enums)

        self._nested_messages = sorted(messages.values(), key=_sort_key)
        self._nested_enums = sorted(enums.values(), key=_sort_key)

    def nested_messages(self) -> List[Message]:
        """All messages reachable from the request and response, sorted by name."""
        if self._nested_messages is None:
            self._resolve_nested()
        return self._nested_messages

    def nested_enums(self) -> List[Enum]:
        """All enums reachable from the request and response, sorted by name."""
        if self._nested_enums is None:
            self._resolve_nested()
        return self._nested_enums

    def has_nested_messages(self) -> bool:
        return len(self.nested_messages()) > 0

    def has_nested_enums(self) -> bool:
        return len(self.nested_enums()) > 0

    def is_deprecated(self) -> bool:
        return DEPRECATED_TOKEN in self.description.lower()

    def has_rest_mapping(self) -> bool:
        return self.rest_mapping is not None and not self.rest_mapping.is_empty()

    def rest_method(self) -> str:
        if self.has_rest_mapping():
            return self.rest_mapping.method
        return ""

    def rest_path(self) -> str:
        if self.has_rest_mapping():
            return self.rest_mapping.path
        return ""

    def streaming_direction(self) -> str:
        if self.request_streaming and self.response_streaming:
            return "bidirectional"
        if self.response_streaming:
            return "server"
        if self.request_streaming:
            return "client"
        return ""
