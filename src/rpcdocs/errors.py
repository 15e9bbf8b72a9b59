"""Exceptions raised while building and rendering the documentation model."""


class RpcDocsError(Exception):
    """Base class for all rpcdocs errors."""


class UnknownTypeError(RpcDocsError, LookupError):
    """Raised when a fully-qualified type name is not in the registry."""

    def __init__(self, full_name: str):
        super().__init__(f"unknown type {full_name!r}")
        self.full_name = full_name


class DuplicateTypeError(RpcDocsError, ValueError):
    """Raised when a type name is registered more than once."""

    def __init__(self, full_name: str):
        super().__init__(f"type {full_name!r} is already registered")
        self.full_name = full_name


class RegistryFrozenError(RpcDocsError, RuntimeError):
    """Raised when registering a type after the registry was frozen."""


class MethodResolutionError(RpcDocsError):
    """Raised when a method references a type the registry cannot resolve.

    This means the API definitions are inconsistent and have to be fixed
    upstream, so callers should not try to recover from it.
    """

    def __init__(self, method_name: str, type_name: str):
        super().__init__(f"error getting type {type_name} for method {method_name}")
        self.method_name = method_name
        self.type_name = type_name


class ConfigError(RpcDocsError, ValueError):
    """Raised for invalid configuration or HTTP rule files."""
