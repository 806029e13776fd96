"""Host discovery against the Manage API."""

from __future__ import annotations

from typing import Any, List, Optional, Protocol

from ..errors import DeployerError, HostDiscoveryError, TransientHostDiscoveryError, TransientManageError
from .client import ManageClient


class HostNameProvider(Protocol):
    def get_host_names(self) -> List[str]: ...

    def get_group_host_names(self, group: str) -> List[str]: ...


def _names_from_listing(listing: Any) -> List[str]:
    items = (
        (listing or {})
        .get("host-default-list", {})
        .get("list-items", {})
        .get("list-item", [])
    )
    return [item["nameref"] for item in items if item.get("nameref")]


class HostManager:
    """Reads host names from /manage/v2/hosts."""

    def __init__(self, client: ManageClient) -> None:
        self.client = client

    def get_host_names(self) -> List[str]:
        return self._list({"format": "json"}, "all hosts")

    def get_group_host_names(self, group: str) -> List[str]:
        return self._list({"group-id": group, "format": "json"}, f"group '{group}'")

    def _list(self, params: dict, label: str) -> List[str]:
        try:
            listing = self.client.get_json("/manage/v2/hosts", params=params)
        except DeployerError as exc:
            error_cls = TransientHostDiscoveryError if isinstance(exc, TransientManageError) else HostDiscoveryError
            raise error_cls(
                f"Unable to list host names for {label}: {exc}",
                details={"params": params},
                cause=exc,
            ) from exc
        return _names_from_listing(listing)


class DefaultHostNameProvider:
    """Returns fixed host names when given, otherwise asks the cluster."""

    def __init__(self, client: ManageClient, host_names: Optional[List[str]] = None) -> None:
        self.client = client
        self.host_names = host_names

    def get_host_names(self) -> List[str]:
        if self.host_names is not None:
            return list(self.host_names)
        return HostManager(self.client).get_host_names()

    def get_group_host_names(self, group: str) -> List[str]:
        return HostManager(self.client).get_group_host_names(group)
