from typing import List, Mapping, Optional

from google.api import annotations_pb2, http_pb2
from google.protobuf import descriptor_pb2

from rpcdocs.extract.context import TypeRegistry, type_key
from rpcdocs.extract.transitive import NestedTypeResolver
from rpcdocs.method.model import Method
from rpcdocs.method.rest import RestMapping


def short_name(full_name: str) -> str:
    return type_key(full_name).rsplit(".", 1)[-1]


class MethodExtractor:
    """Builds Method objects from method descriptors of a single service."""

    def __init__(
        self,
        registry: TypeRegistry,
        declared_at: Mapping[str, str],
        http_rules: Optional[Mapping[str, List[http_pb2.HttpRule]]] = None,
    ):
        self.registry = registry
        self.declared_at = declared_at
        self.http_rules = http_rules or {}
        self.resolver = NestedTypeResolver(registry)

    def rest_mappings(
        self, selector: str, method_proto: descriptor_pb2.MethodDescriptorProto
    ) -> List[RestMapping]:
        """REST mappings from the method options first, then from service YAML rules."""
        rules: List[http_pb2.HttpRule] = []
        if method_proto.options.HasExtension(annotations_pb2.http):
            rules.append(method_proto.options.Extensions[annotations_pb2.http])
        rules.extend(self.http_rules.get(selector, []))
        return RestMapping.from_http_rules(rules)

    def extract(
        self,
        service_full_name: str,
        method_proto: descriptor_pb2.MethodDescriptorProto,
        description: str = "",
        source: str = "",
        proto_file: str = "",
    ) -> Method:
        request_full_type = type_key(method_proto.input_type)
        response_full_type = type_key(method_proto.output_type)
        return Method(
            self.registry,
            name=method_proto.name,
            service=short_name(service_full_name),
            package=service_full_name.rpartition(".")[0],
            proto_file=proto_file,
            description=description,
            source=source,
            request_type=short_name(request_full_type),
            request_full_type=request_full_type,
            request_type_source=self.declared_at.get(request_full_type, ""),
            request_streaming=method_proto.client_streaming,
            response_type=short_name(response_full_type),
            response_full_type=response_full_type,
            response_type_source=self.declared_at.get(response_full_type, ""),
            response_streaming=method_proto.server_streaming,
            rest_mappings=self.rest_mappings(f"{service_full_name}.{method_proto.name}", method_proto),
            resolver=self.resolver,
        )
