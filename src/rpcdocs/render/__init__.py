from rpcdocs.render.naming import to_camel_case, to_kebab_case, to_pascal_case, to_snake_case
from rpcdocs.render.templates import Templates

__all__ = [
    "Templates",
    "to_camel_case",
    "to_kebab_case",
    "to_pascal_case",
    "to_snake_case",
]
