"""Type url registry for Cosmos SDK protobuf messages."""

from cosmos_type_registry.exceptions import (
    RegistryTableError,
    TxFetchError,
    TypeRegistryError,
    UnknownTypeUrl,
)
from cosmos_type_registry.registry import RegistryEntry, TypeRegistry, type_url_of
from cosmos_type_registry.tables import build_registry, load_table

__version__ = "0.1.0"

__all__ = [
    "RegistryEntry",
    "RegistryTableError",
    "TxFetchError",
    "TypeRegistry",
    "TypeRegistryError",
    "UnknownTypeUrl",
    "build_registry",
    "load_table",
    "type_url_of",
]
