"""State shared by every command in a single deployment run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from .configuration import Configuration, Configurations

if TYPE_CHECKING:
    from ..config import AppConfig
    from ..mgmt.client import ManageClient
    from ..mgmt.hosts import HostNameProvider


@dataclass
class CommandContext:
    """Execution context for one run.

    Host names are fetched on first use and kept for the rest of the run; build a
    new context to see a changed topology. Not safe to share across concurrent
    runs.
    """

    app_config: "AppConfig"
    manage_client: Optional["ManageClient"] = None
    host_name_provider: Optional["HostNameProvider"] = None

    # Ad hoc values commands want to hand to later commands
    cache: Dict[str, Any] = field(default_factory=dict)

    _host_names: Optional[List[str]] = field(default=None, init=False, repr=False)
    _combined_request: Optional[Configurations] = field(default=None, init=False, repr=False)

    def get_host_names(self) -> List[str]:
        if self._host_names is None:
            if self.host_name_provider is None:
                raise RuntimeError("CommandContext has no host name provider")
            # A failure here leaves nothing cached so the next call tries again
            self._host_names = list(self.host_name_provider.get_host_names())
        return list(self._host_names)

    def get_group_host_names(self, group: str) -> List[str]:
        if self.host_name_provider is None:
            raise RuntimeError("CommandContext has no host name provider")
        return list(self.host_name_provider.get_group_host_names(group))

    def add_to_combined_request(self, configuration: Configuration) -> None:
        if self._combined_request is None:
            self._combined_request = Configurations([configuration])
        else:
            self._combined_request.add_config(configuration)

    def get_combined_request(self) -> Optional[Configurations]:
        if self._combined_request is None or self._combined_request.is_empty():
            return None
        return self._combined_request

    def clear_combined_request(self) -> None:
        self._combined_request = None
