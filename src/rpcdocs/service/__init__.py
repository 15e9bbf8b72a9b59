from rpcdocs.service.extractor import ApiDefinition, DescriptorSetExtractor, load_descriptor_set
from rpcdocs.service.model import Package, Service

__all__ = [
    "ApiDefinition",
    "DescriptorSetExtractor",
    "Package",
    "Service",
    "load_descriptor_set",
]
