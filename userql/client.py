"""HTTP client for talking to a running userql service."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import httpx


class GraphQLClientError(RuntimeError):
    """Raised when the service cannot be reached or answers unexpectedly."""


@dataclass
class _ClientConfig:
    base_url: str
    timeout: float


def _normalize_base_url(base_url: str) -> str:
    cleaned = (base_url or "").strip()
    if not cleaned:
        raise ValueError("Service base URL must not be empty")
    return cleaned.rstrip("/")


def _build_endpoint(base_url: str, path: str) -> str:
    if not path.startswith("/"):
        path = "/" + path
    return f"{base_url}{path}"


def _decode_json(response: httpx.Response) -> Dict[str, Any]:
    try:
        data = response.json()
    except ValueError as exc:
        raise GraphQLClientError("Service returned an invalid JSON response") from exc
    if not isinstance(data, dict):
        raise GraphQLClientError("Service returned an unexpected response payload")
    return data


class GraphQLClient:
    """Execute queries by POSTing them to ``<base_url>/graphql``."""

    def __init__(self, base_url: str, *, timeout: float = 10.0) -> None:
        self._config = _ClientConfig(base_url=_normalize_base_url(base_url), timeout=timeout)

    @property
    def base_url(self) -> str:
        return self._config.base_url

    def execute(self, query: str, variables: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """Return the response envelope for *query*.

        A ``400`` response still carries an ``errors`` envelope and is
        returned as-is; other failures raise :class:`GraphQLClientError`.
        """

        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = dict(variables)

        url = _build_endpoint(self._config.base_url, "/graphql")
        try:
            response = httpx.post(url, json=payload, timeout=self._config.timeout)
        except httpx.RequestError as exc:
            raise GraphQLClientError(f"Failed to contact userql service: {exc}") from exc

        if response.status_code > 400:
            raise GraphQLClientError(
                f"userql service request failed with status {response.status_code}"
            )
        return _decode_json(response)

    def health(self) -> Dict[str, Any]:
        url = _build_endpoint(self._config.base_url, "/health")
        try:
            response = httpx.get(url, timeout=self._config.timeout)
        except httpx.RequestError as exc:
            raise GraphQLClientError(f"Failed to contact userql service: {exc}") from exc

        if response.status_code != 200:
            raise GraphQLClientError(f"Health check failed with status {response.status_code}")
        return _decode_json(response)


__all__ = ["GraphQLClient", "GraphQLClientError"]
