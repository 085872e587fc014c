"""Thin JSON-over-HTTP base for the remote service clients.

Each client owns a `requests.Session` carrying its bearer token; every call
uses an explicit timeout and raises `requests.HTTPError` (with the response
body folded into the message) on non-2xx responses.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import requests


class JsonApiClient:
    """Bearer-authenticated JSON API client."""

    def __init__(
        self,
        base_url: str,
        token: Optional[str],
        request_timeout_seconds: float = 30.0,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url: str = base_url.rstrip("/")
        self.request_timeout_seconds: float = request_timeout_seconds

        self._session = session or requests.Session()
        self._session.headers.update({"Accept": "application/json"})
        if token:
            self._session.headers.update({"Authorization": f"Bearer {token}"})

    def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Any = None,
    ) -> Any:
        url = f"{self.base_url}{path}"
        response = self._session.request(
            method,
            url,
            params=params,
            json=json_body,
            timeout=self.request_timeout_seconds,
        )
        try:
            response.raise_for_status()
        except requests.HTTPError as error:
            try:
                details = response.json()
            except ValueError:
                details = response.text
            raise requests.HTTPError(f"{error} - {details}", response=response) from error
        if not response.content:
            return None
        return response.json()

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("GET", path, params=params)

    def _post(self, path: str, json_body: Any = None) -> Any:
        return self._request("POST", path, json_body=json_body if json_body is not None else {})


def unwrap_items(payload: Any) -> list:
    """Accept both paginated `{"items": [...]}` bodies and bare lists."""
    if isinstance(payload, dict):
        return payload.get("items") or []
    if isinstance(payload, list):
        return payload
    return []
