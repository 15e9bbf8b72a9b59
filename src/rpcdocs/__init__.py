from rpcdocs.extract import NestedTypeResolver, TypeRegistry
from rpcdocs.method import Method, RestMapping, export_method
from rpcdocs.render import Templates
from rpcdocs.service import ApiDefinition, DescriptorSetExtractor

__all__ = [
    "ApiDefinition",
    "DescriptorSetExtractor",
    "Method",
    "NestedTypeResolver",
    "RestMapping",
    "Templates",
    "TypeRegistry",
    "export_method",
]
