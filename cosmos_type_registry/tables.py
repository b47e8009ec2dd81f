"""Declarative registry tables.

A table is a TOML file naming one proto package and the compiled ``*_pb2``
modules that define its messages::

    package = "cosmwasm.wasm.v1"

    [[sources]]
    module = "cosmpy.protos.cosmwasm.wasm.v1.tx_pb2"

    [[sources]]
    module = "cosmpy.protos.cosmwasm.wasm.v1.proposal_pb2"
    optional = true

Every top-level message of a source module is registered unless the source
lists ``messages`` explicitly. Tables for the packages this project ships
live in the ``tables/`` directory next to this module.
"""
from __future__ import annotations

import importlib
import logging
import os
from types import ModuleType
from typing import Any, Dict, Iterable, List, Optional, TextIO

import toml

from cosmos_type_registry.exceptions import RegistryTableError
from cosmos_type_registry.registry import RegistryEntry, TypeRegistry, type_url_of

logger = logging.getLogger(__name__)

TABLES_PATH = os.path.join(os.path.dirname(__file__), "tables")


def load_table(path: str) -> List[RegistryEntry]:
    table = _read_table(path)
    package = table["package"]
    entries = []
    for source in table["sources"]:
        module = _import_source(source, path)
        if module is None:
            continue
        for name in _source_messages(module, source, package, path):
            descriptor = getattr(module, name)
            entries.append(RegistryEntry(type_url_of(descriptor), descriptor))
    logger.debug("Loaded %d types for %s from %s", len(entries), package, path)
    return entries


def bundled_tables() -> List[str]:
    """Package names of the tables shipped with this project."""
    return sorted(
        file[: -len(".toml")]
        for file in os.listdir(TABLES_PATH)
        if file.endswith(".toml")
    )


def load_bundled_table(package: str) -> List[RegistryEntry]:
    for file in os.listdir(TABLES_PATH):
        if file == f"{package}.toml":
            return load_table(os.path.join(TABLES_PATH, file))
    raise RegistryTableError(
        f"No bundled table for package {package!r}; available: {bundled_tables()}"
    )


def build_registry(packages: Optional[Iterable[str]] = None) -> TypeRegistry:
    """New registry populated from bundled tables (all of them by default)."""
    if packages is None:
        packages = bundled_tables()
    registry = TypeRegistry()
    for package in packages:
        registry.register(load_bundled_table(package))
    logger.info("Built type registry with %d types", len(registry))
    return registry


def pin_table(path: str, f: TextIO) -> None:
    """Write a copy of a table with every source's messages listed explicitly.

    Optional sources that cannot be imported are left out of the copy.
    """
    table = _read_table(path)
    package = table["package"]
    pinned: Dict[str, Any] = {"package": package, "sources": []}
    for source in table["sources"]:
        module = _import_source(source, path)
        if module is None:
            continue
        pinned["sources"].append(
            {
                "module": source["module"],
                "messages": _source_messages(module, source, package, path),
            }
        )
    toml.dump(pinned, f)


def _read_table(path: str) -> Dict[str, Any]:
    try:
        table = toml.load(path)
    except (OSError, toml.TomlDecodeError) as exc:
        raise RegistryTableError(f"Could not read registry table {path}: {exc}") from exc

    if not isinstance(table.get("package"), str) or not table["package"]:
        raise RegistryTableError(f"Registry table {path} must set 'package'")
    sources = table.get("sources", [])
    if not isinstance(sources, list) or not all(
        isinstance(s, dict) and isinstance(s.get("module"), str) for s in sources
    ):
        raise RegistryTableError(
            f"Registry table {path}: every [[sources]] entry needs a 'module'"
        )
    for source in sources:
        messages = source.get("messages")
        if messages is not None and (
            not isinstance(messages, list)
            or not all(isinstance(name, str) for name in messages)
        ):
            raise RegistryTableError(
                f"Registry table {path}: 'messages' of {source['module']} must be a list of names"
            )
        if not isinstance(source.get("optional", False), bool):
            raise RegistryTableError(
                f"Registry table {path}: 'optional' of {source['module']} must be true or false"
            )
    table["sources"] = sources
    return table


def _import_source(source: Dict[str, Any], path: str) -> Optional[ModuleType]:
    try:
        return importlib.import_module(source["module"])
    except ImportError as exc:
        if source.get("optional", False):
            logger.info(
                "Skipping optional module %s from %s: %s", source["module"], path, exc
            )
            return None
        raise RegistryTableError(
            f"Could not import {source['module']} listed in {path}: {exc}"
        ) from exc


def _source_messages(
    module: ModuleType, source: Dict[str, Any], package: str, path: str
) -> List[str]:
    available = list(module.DESCRIPTOR.message_types_by_name)
    names = source.get("messages", available)

    for name in names:
        if name not in available:
            raise RegistryTableError(
                f"{path}: {source['module']} defines no message {name!r}"
            )
        full_name = getattr(module, name).DESCRIPTOR.full_name
        if full_name != f"{package}.{name}":
            raise RegistryTableError(
                f"{path}: {full_name} is not in package {package!r}"
            )
    return list(names)
