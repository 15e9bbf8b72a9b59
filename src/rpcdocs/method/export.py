import logging
import os

from rpcdocs.method.model import Method
from rpcdocs.render.naming import to_kebab_case

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".mdx"


def method_file_name(method: Method, extension: str = DEFAULT_EXTENSION) -> str:
    return f"{to_kebab_case(method.name)}{extension}"


def export_method(method: Method, service_path: str, templates, extension: str = DEFAULT_EXTENSION) -> str:
    """Render one method into ``service_path`` and return the written file path.

    The request message may be shared with other methods that carry a
    different REST mapping, so the placements and sources are applied right
    before this method is rendered.
    """
    method.tag_sources()
    if method.has_rest_mapping():
        method.rest_mapping.apply_to(method.request())

    file_path = os.path.join(service_path, method_file_name(method, extension))
    logger.info("Exporting method %s to %s", method.name, file_path)
    templates.render_method(method, file_path)
    return file_path
