"""Hand-written stand-ins for the Manage API used across tests."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlparse


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, text: Optional[str] = None) -> None:
        self.status_code = status_code
        self._body = body
        if text is not None:
            self.text = text
        else:
            self.text = json.dumps(body) if body is not None else ""
        self.content = self.text.encode("utf-8")

    def json(self) -> Any:
        if self._body is None:
            raise ValueError("No JSON body")
        return self._body


class FakeSession:
    """Replays canned responses keyed by (method, path); unknown GETs are 404."""

    def __init__(self) -> None:
        self.routes: Dict[Tuple[str, str], List[Any]] = {}
        self.calls: List[Dict[str, Any]] = []
        self.auth = None
        self.verify = True

    def add(self, method: str, path: str, response: Any) -> None:
        self.routes.setdefault((method, path), []).append(response)

    def request(self, method: str, url: str, **kwargs: Any) -> FakeResponse:
        path = urlparse(url).path
        self.calls.append({"method": method, "path": path, **kwargs})
        queue = self.routes.get((method, path))
        if not queue:
            if method == "GET":
                return FakeResponse(404, {"errorResponse": {"message": "not found"}})
            return FakeResponse(201)
        response = queue[0] if len(queue) == 1 else queue.pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def paths(self, method: str) -> List[str]:
        return [call["path"] for call in self.calls if call["method"] == method]


class StaticHostNameProvider:
    def __init__(self, host_names: List[str], groups: Optional[Dict[str, List[str]]] = None) -> None:
        self.host_names = host_names
        self.groups = groups or {}
        self.calls = 0

    def get_host_names(self) -> List[str]:
        self.calls += 1
        return list(self.host_names)

    def get_group_host_names(self, group: str) -> List[str]:
        return list(self.groups.get(group, []))


def host_listing(*names: str) -> Dict[str, Any]:
    return {
        "host-default-list": {
            "list-items": {
                "list-item": [{"nameref": name, "idref": str(i)} for i, name in enumerate(names)]
            }
        }
    }
