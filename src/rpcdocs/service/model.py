import logging
import os
from dataclasses import dataclass, field
from typing import List

from rpcdocs.method import Method, export_method
from rpcdocs.method.export import DEFAULT_EXTENSION
from rpcdocs.render.naming import to_kebab_case

logger = logging.getLogger(__name__)


@dataclass
class Service:
    name: str
    full_name: str
    package: str = ""
    description: str = ""
    source: str = ""
    methods: List[Method] = field(default_factory=list)

    def rest_methods(self) -> List[Method]:
        return [m for m in self.methods if m.has_rest_mapping()]

    def export_markdown(self, package_path: str, templates, extension: str = DEFAULT_EXTENSION) -> List[str]:
        """Export every method, one after the other, then the service index."""
        service_path = os.path.join(package_path, to_kebab_case(self.name))
        written = [export_method(m, service_path, templates, extension) for m in self.methods]

        index_path = os.path.join(service_path, f"index{extension}")
        logger.info("Exporting service %s to %s", self.full_name, index_path)
        templates.render_service(self, index_path)
        written.append(index_path)
        return written


@dataclass
class Package:
    name: str
    services: List[Service] = field(default_factory=list)

    def add_service(self, service: Service) -> None:
        self.services.append(service)
        self.services.sort(key=lambda s: s.name)

    def methods(self) -> List[Method]:
        return [m for s in self.services for m in s.methods]

    def export_markdown(self, output_dir: str, templates, extension: str = DEFAULT_EXTENSION) -> List[str]:
        package_path = os.path.join(output_dir, self.name)
        written: List[str] = []
        for service in self.services:
            written.extend(service.export_markdown(package_path, templates, extension))
        return written
