import logging
import os
from typing import Optional

from jinja2 import (
    BaseLoader,
    Environment,
    FileSystemLoader,
    PackageLoader,
    StrictUndefined,
)

from rpcdocs.render.naming import (
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
)

logger = logging.getLogger(__name__)

METHOD_TEMPLATE = "method.md.jinja"
SERVICE_TEMPLATE = "service.md.jinja"


class Templates:
    """Renders the documentation model into Markdown files.

    The bundled templates are used unless ``templates_dir`` points at a
    directory holding replacements with the same names.
    """

    def __init__(self, templates_dir: Optional[str] = None, loader: Optional[BaseLoader] = None):
        if loader is None:
            if templates_dir:
                logger.info("Loading templates from %s", templates_dir)
                loader = FileSystemLoader(templates_dir)
            else:
                loader = PackageLoader("rpcdocs", "templates")

        self.env = Environment(
            loader=loader,
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        self.env.filters["camel"] = to_camel_case
        self.env.filters["snake"] = to_snake_case
        self.env.filters["pascal"] = to_pascal_case
        self.env.filters["kebab"] = to_kebab_case

    def render(self, template_name: str, file_path: str, **context) -> None:
        content = self.env.get_template(template_name).render(**context)
        parent = os.path.dirname(file_path)
        if parent:
            os.makedirs(parent, exist_ok=True)
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(content)

    def render_method(self, method, file_path: str) -> None:
        self.render(METHOD_TEMPLATE, file_path, method=method)

    def render_service(self, service, file_path: str) -> None:
        self.render(SERVICE_TEMPLATE, file_path, service=service)
