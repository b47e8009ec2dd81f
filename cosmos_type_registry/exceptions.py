class TypeRegistryError(Exception):
    """Base class for registry errors."""


class UnknownTypeUrl(TypeRegistryError, KeyError):
    """Raised when a type url has no registered message descriptor."""

    def __init__(self, type_url: str):
        self.type_url = type_url
        super().__init__(type_url)

    def __str__(self) -> str:
        return f"Unknown type url: {self.type_url!r}"


class RegistryTableError(TypeRegistryError):
    pass


class TxFetchError(TypeRegistryError):
    pass
