import logging
import os
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional

from google.api import http_pb2
from google.protobuf import descriptor_pb2

from rpcdocs.extract.common import (
    FILE_ENUM_TYPE,
    FILE_MESSAGE_TYPE,
    FILE_SERVICE,
    SERVICE_METHOD,
    SourceInfo,
    extract_enum,
    extract_message,
    qualify,
)
from rpcdocs.extract.context import TypeRegistry
from rpcdocs.method import Method, MethodExtractor
from rpcdocs.method.export import DEFAULT_EXTENSION
from rpcdocs.service.model import Package, Service

logger = logging.getLogger(__name__)


@dataclass
class ApiDefinition:
    """Everything extracted from one descriptor set."""

    registry: TypeRegistry
    packages: Dict[str, Package] = field(default_factory=dict)

    def services(self) -> List[Service]:
        return [s for name in sorted(self.packages) for s in self.packages[name].services]

    def methods(self) -> List[Method]:
        return [m for s in self.services() for m in s.methods]

    def export_markdown(self, output_dir: str, templates, extension: str = DEFAULT_EXTENSION) -> List[str]:
        written: List[str] = []
        for name in sorted(self.packages):
            written.extend(self.packages[name].export_markdown(output_dir, templates, extension))
        return written


def load_descriptor_set(path: str) -> descriptor_pb2.FileDescriptorSet:
    if not os.path.isfile(path):
        raise FileNotFoundError(f"descriptor set not found: {path}")
    with open(path, "rb") as f:
        return descriptor_pb2.FileDescriptorSet.FromString(f.read())


class DescriptorSetExtractor:
    """Turns a FileDescriptorSet into a frozen type registry and services.

    Types are registered in a first pass over all files so that methods can
    reference types declared in any other file of the set.
    """

    def __init__(
        self,
        source_url: str = "",
        http_rules: Optional[Mapping[str, List[http_pb2.HttpRule]]] = None,
    ):
        self.source_url = source_url
        self.http_rules = http_rules or {}

    def extract(self, descriptor_set: descriptor_pb2.FileDescriptorSet) -> ApiDefinition:
        registry = TypeRegistry()
        declared_at: Dict[str, str] = {}
        infos = [(f, SourceInfo(f, self.source_url)) for f in descriptor_set.file]

        for file_proto, info in infos:
            for i, message_proto in enumerate(file_proto.message_type):
                messages, enums = extract_message(
                    message_proto, file_proto.package, info, [FILE_MESSAGE_TYPE, i]
                )
                for message in messages:
                    registry.add_message(message)
                    declared_at[message.full_name] = message.source
                for enum in enums:
                    registry.add_enum(enum)
            for i, enum_proto in enumerate(file_proto.enum_type):
                registry.add_enum(extract_enum(enum_proto, file_proto.package, info, [FILE_ENUM_TYPE, i]))
        registry.freeze()

        api = ApiDefinition(registry=registry)
        methods = MethodExtractor(registry, declared_at, self.http_rules)
        for file_proto, info in infos:
            for i, service_proto in enumerate(file_proto.service):
                path = [FILE_SERVICE, i]
                full_name = qualify(file_proto.package, service_proto.name)
                service = Service(
                    name=service_proto.name,
                    full_name=full_name,
                    package=file_proto.package,
                    description=info.comment(path),
                    source=info.location(path),
                )
                for j, method_proto in enumerate(service_proto.method):
                    method_path = path + [SERVICE_METHOD, j]
                    service.methods.append(
                        methods.extract(
                            full_name,
                            method_proto,
                            description=info.comment(method_path),
                            source=info.location(method_path),
                            proto_file=file_proto.name,
                        )
                    )
                package = api.packages.setdefault(file_proto.package, Package(name=file_proto.package))
                package.add_service(service)

        logger.debug(
            "extracted %d types and %d services from %d files",
            len(registry),
            len(api.services()),
            len(descriptor_set.file),
        )
        return api
