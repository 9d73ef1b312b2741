"""Core types, serialization streams, stubs, INI configuration and a factory-based runtime."""

__version__ = "0.1.0"

__all__ = [
    "attribute_extension",
    "deployable",
    "enumeration",
    "inifile",
    "ranged",
    "runtime",
    "serialization",
    "streams",
    "stub",
    "types",
    "utils",
]