"""Protocols for the collaborators the sync engine talks to."""

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class RemoteStoreClient(Protocol):
    """Anything that can create, update and delete theme assets remotely.

    :class:`pytheme.api.ThemeClient` is the HTTP implementation; tests pass
    in-memory fakes.
    """

    def send(self, path: str, content: bytes, is_binary: bool) -> Any:
        """Create or update the asset stored under ``path``."""
        ...

    def remove(self, path: str) -> Any:
        """Delete the asset stored under ``path``."""
        ...


@runtime_checkable
class RemoteAssetSource(Protocol):
    """Client that can also list and fetch assets (replace and download)."""

    def list_assets(self) -> list[dict[str, Any]]: ...

    def get_asset(self, key: str) -> dict[str, Any]: ...

    def decode_asset(self, asset: dict[str, Any]) -> bytes: ...
