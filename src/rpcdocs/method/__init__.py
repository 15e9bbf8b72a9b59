from rpcdocs.method.export import export_method, method_file_name
from rpcdocs.method.extractor import MethodExtractor
from rpcdocs.method.model import Method, parse_command_line, parse_description
from rpcdocs.method.rest import RestMapping
from rpcdocs.method.samples import CodeSamples, example_value

__all__ = [
    "CodeSamples",
    "Method",
    "MethodExtractor",
    "RestMapping",
    "example_value",
    "export_method",
    "method_file_name",
    "parse_command_line",
    "parse_description",
]
