"""HTTP client for the Manage API built on requests."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Dict, Optional

import requests
from requests.auth import HTTPDigestAuth

from ..errors import TransientManageError, map_http_error

if TYPE_CHECKING:
    from ..config import ManageConfig

logger = logging.getLogger(__name__)


class ManageClient:
    """Thin wrapper around requests.Session for JSON calls to the Manage API."""

    def __init__(
        self,
        config: "ManageConfig",
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()
        if config.username and config.password:
            self.session.auth = HTTPDigestAuth(config.username, config.password)
        self.session.verify = config.verify_ssl
        self.base_url = config.base_url

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        response = self._request("GET", path, params=params)
        if not response.content:
            return None
        return response.json()

    def post_json(self, path: str, payload: Any) -> requests.Response:
        return self._request("POST", path, json=payload)

    def put_json(self, path: str, payload: Any) -> requests.Response:
        return self._request("PUT", path, json=payload)

    def delete(self, path: str, params: Optional[Dict[str, Any]] = None) -> requests.Response:
        return self._request("DELETE", path, params=params)

    def _request(self, method: str, path: str, **kwargs: Any) -> requests.Response:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(
                method,
                url,
                headers={"Accept": "application/json"},
                timeout=self.config.timeout,
                **kwargs,
            )
        except (requests.exceptions.ConnectionError, requests.exceptions.Timeout) as exc:
            raise TransientManageError(
                f"{method} {url} failed: {exc}",
                details={"method": method, "url": url},
                cause=exc,
            ) from exc

        if not 200 <= response.status_code < 300:
            try:
                body = response.json()
                message = body.get("errorResponse", {}).get("message") or response.text[:500]
            except ValueError:
                message = response.text[:500]
            raise map_http_error(
                response.status_code,
                f"{method} {url} returned {response.status_code}: {message}",
                details={"method": method, "url": url},
            )
        return response
