"""Lightweight Bitrise REST client."""

from __future__ import annotations

import logging
from typing import Any, Dict, Iterator, List, Optional

import httpx

from bitrise_report.domain.entities import App, Build

from .bitrise_exceptions import (
    BitriseAPIError,
    BitriseConfigurationError,
    BitriseRateLimitError,
    BitriseRequestError,
)

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "https://api.bitrise.io/v0.1"


class BitriseClient:
    """
    Read-only access to the apps and builds endpoints.

    Usage:
        with BitriseClient(token) as bitrise:
            for app in bitrise.list_apps():
                builds = bitrise.list_builds(app.slug, after=..., before=...)
    """

    def __init__(
        self,
        token: str | None,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 60.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        if not token:
            raise BitriseConfigurationError("Bitrise token is required to call the API")
        self._token = token
        self._api_url = api_url.rstrip("/")
        self._rest = httpx.Client(
            base_url=self._api_url, timeout=timeout, transport=transport
        )

    def __enter__(self) -> "BitriseClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._rest.close()

    def _headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"token {self._token}",
            "Accept": "application/json",
        }

    def _handle_response(self, response: httpx.Response) -> httpx.Response:
        if response.status_code == 429:
            retry_after: Optional[float] = None
            header = response.headers.get("Retry-After")
            if header:
                try:
                    retry_after = float(header)
                except ValueError:
                    pass
            raise BitriseRateLimitError("Bitrise rate limit reached", retry_after=retry_after)
        if response.is_error:
            snippet = (response.text or "")[:200]
            raise BitriseAPIError(
                response.status_code,
                f"Bitrise API {response.status_code} for {response.request.url.path}: {snippet}",
            )
        return response

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        try:
            response = self._rest.get(path, headers=self._headers(), params=params)
        except httpx.RequestError as exc:
            raise BitriseRequestError(f"Bitrise request to {path} failed: {exc}") from exc
        return self._handle_response(response).json()

    def _paginate(self, path: str, params: Optional[Dict[str, Any]] = None) -> Iterator[Dict[str, Any]]:
        query = dict(params or {})
        while True:
            payload = self._get(path, params=query)
            yield from payload.get("data") or []
            next_page = (payload.get("paging") or {}).get("next")
            if not next_page:
                break
            query["next"] = next_page

    def list_apps(self) -> List[App]:
        return [App.model_validate(item) for item in self._paginate("/me/apps")]

    def list_builds(self, app_slug: str, after: int, before: int) -> List[Build]:
        """Builds of ``app_slug`` triggered inside ``[after, before)`` (UNIX seconds)."""
        params = {"after": after, "before": before}
        builds = [
            Build.model_validate(item)
            for item in self._paginate(f"/apps/{app_slug}/builds", params)
        ]
        logger.debug(f"Fetched {len(builds)} builds for app {app_slug}")
        return builds
