"""Exception hierarchy for app-deployer.

Errors are split so callers can tell a configuration problem (fix the input,
do not retry) from a transport failure (the Manage API rejected a request) and
from a transient one (worth retrying later).
"""

from __future__ import annotations

from typing import Any, Optional


class DeployerError(Exception):
    """
    Base exception for app-deployer.

    Attributes:
        details: Optional structured information (status code, database name, ...).
        cause: Optional original exception that triggered this error.
    """

    def __init__(
        self,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message)
        self.details = details or {}
        self.cause = cause


class ConfigurationError(DeployerError):
    """Raised when configuration or a forest plan is invalid."""


class ManageApiError(DeployerError):
    """Raised when the Manage API returns an error response."""

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(message, details=details, cause=cause)
        self.status_code = status_code


class TransientManageError(ManageApiError):
    """Raised for failures that may succeed on retry (429, 503, timeouts)."""


class HostDiscoveryError(DeployerError):
    """Raised when host names cannot be retrieved from the cluster."""


class TransientHostDiscoveryError(HostDiscoveryError):
    """Host listing failed with a transient Manage API error; worth retrying."""


class CommandExecutionError(DeployerError):
    """Raised when a command fails during deploy or undeploy."""

    def __init__(
        self,
        command_name: str,
        message: str,
        *,
        details: Optional[dict[str, Any]] = None,
        cause: Optional[BaseException] = None,
    ) -> None:
        super().__init__(
            f"Command {command_name} failed: {message}",
            details=details,
            cause=cause,
        )
        self.command_name = command_name


_TRANSIENT_STATUS_CODES: tuple[int, ...] = (429, 502, 503, 504)


def map_http_error(
    status_code: int,
    message: Optional[str] = None,
    *,
    details: Optional[dict[str, Any]] = None,
    cause: Optional[BaseException] = None,
) -> ManageApiError:
    """
    Map an HTTP error status to a deployer exception.

    Policy:
        - 429/502/503/504 -> TransientManageError
        - anything else   -> ManageApiError
    """
    payload: dict[str, Any] = {"status_code": status_code}
    if details:
        payload.update(details)

    text = message or f"HTTP error {status_code}"
    if status_code in _TRANSIENT_STATUS_CODES:
        return TransientManageError(text, status_code=status_code, details=payload, cause=cause)
    return ManageApiError(text, status_code=status_code, details=payload, cause=cause)
