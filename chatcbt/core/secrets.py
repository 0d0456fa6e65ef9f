from __future__ import annotations

from typing import Protocol


class SecretStore(Protocol):
    """Opaque encrypt/decrypt capability for stored credentials."""

    def encrypt(self, value: str) -> str: ...

    def decrypt(self, value: str) -> str: ...


class PlaintextSecretStore:
    """Stores credentials as given, for hosts without an OS keychain."""

    def encrypt(self, value: str) -> str:
        return value

    def decrypt(self, value: str) -> str:
        return value
