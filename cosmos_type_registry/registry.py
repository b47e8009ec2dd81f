from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, List, NamedTuple, Optional, Tuple, Type, Union

from google.protobuf.message import Message

from cosmos_type_registry.exceptions import UnknownTypeUrl

logger = logging.getLogger(__name__)

Descriptor = Type[Message]


class RegistryEntry(NamedTuple):
    type_url: str
    descriptor: Descriptor


def type_url_of(msg: Union[Message, Descriptor]) -> str:
    """Type url of a message class or instance, as written by Any.Pack(msg, "")."""
    return "/" + msg.DESCRIPTOR.full_name


class TypeRegistry:
    """Maps type urls to generated protobuf message classes.

    Readers see an immutable snapshot; register() copies it, applies the new
    entries and swaps the reference under a lock, so registering late is
    safe against concurrent resolve() calls.
    """

    def __init__(self, entries: Iterable[Tuple[str, Descriptor]] = ()):
        self._lock = threading.Lock()
        self._entries: Dict[str, Descriptor] = {}
        self.register(entries)

    def register(self, entries: Iterable[Tuple[str, Descriptor]]) -> None:
        with self._lock:
            updated = dict(self._entries)
            for type_url, descriptor in entries:
                existing = updated.get(type_url)
                if existing is not None and existing is not descriptor:
                    logger.warning(
                        "Overriding descriptor for %s: %s -> %s",
                        type_url,
                        _qualname(existing),
                        _qualname(descriptor),
                    )
                updated[type_url] = descriptor
            self._entries = updated

    def register_messages(self, descriptors: Iterable[Descriptor]) -> None:
        self.register((type_url_of(d), d) for d in descriptors)

    def resolve(self, type_url: str) -> Descriptor:
        try:
            return self._entries[type_url]
        except KeyError:
            raise UnknownTypeUrl(type_url) from None

    def try_resolve(self, type_url: str) -> Optional[Descriptor]:
        return self._entries.get(type_url)

    def type_urls(self) -> List[str]:
        return sorted(self._entries)

    def entries(self) -> List[RegistryEntry]:
        return [RegistryEntry(u, d) for u, d in sorted(self._entries.items())]

    def __contains__(self, type_url: object) -> bool:
        return type_url in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"TypeRegistry({len(self._entries)} types)"


def _qualname(descriptor: Descriptor) -> str:
    return f"{descriptor.__module__}.{descriptor.__qualname__}"
