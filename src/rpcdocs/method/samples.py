import os
from typing import List, Tuple

from rpcdocs.render.naming import to_snake_case
from rpcdocs.schema import Field, Placement

DEFAULT_GRPC_HOST = "localhost:10009"
DEFAULT_REST_HOST = "localhost:8080"


def example_value(field: Field) -> str:
    """Placeholder shown for a field in code samples, e.g. ``<uint64>``."""
    value = f"<{field.type}>"
    if field.is_repeated:
        return f"[{value}, ...]"
    return value


class CodeSamples:
    """What the gRPC and REST code sample templates need to know about a method."""

    def __init__(self, method, grpc_host: str = DEFAULT_GRPC_HOST, rest_host: str = DEFAULT_REST_HOST):
        self.method = method
        self.grpc_host = grpc_host
        self.rest_host = rest_host

    @property
    def proto_file(self) -> str:
        if self.method.proto_file:
            return os.path.basename(self.method.proto_file)
        return f"{to_snake_case(self.method.service)}.proto"

    @property
    def grpc_module(self) -> str:
        return f"{os.path.splitext(self.proto_file)[0]}_pb2"

    @property
    def grpc_stub_module(self) -> str:
        return f"{self.grpc_module}_grpc"

    @property
    def stub(self) -> str:
        return f"{self.method.service}Stub"

    @property
    def package(self) -> str:
        return self.method.package

    @property
    def streaming(self) -> str:
        return self.method.streaming_direction()

    @property
    def streams_requests(self) -> bool:
        return self.method.request_streaming

    @property
    def streams_responses(self) -> bool:
        return self.method.response_streaming

    def request_fields(self) -> List[Tuple[str, str]]:
        return [(f.name, example_value(f)) for f in self.method.request().fields]

    def _fields_placed(self, placement: Placement) -> List[Tuple[str, str]]:
        return [
            (f.name, example_value(f))
            for f in self.method.request().fields
            if f.rest_placement is placement
        ]

    def body_fields(self) -> List[Tuple[str, str]]:
        """Request fields sent in the REST body; valid once the mapping was applied."""
        return self._fields_placed(Placement.BODY)

    def query_fields(self) -> List[Tuple[str, str]]:
        return self._fields_placed(Placement.QUERY)

    def has_rest(self) -> bool:
        return self.method.has_rest_mapping()

    @property
    def rest_verb(self) -> str:
        return self.method.rest_method().lower()

    @property
    def rest_url(self) -> str:
        return f"https://{self.rest_host}{self.method.rest_path()}"
