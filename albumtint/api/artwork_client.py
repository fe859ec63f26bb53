"""Async download of album artwork."""

from __future__ import annotations

import logging

import httpx

from albumtint.config.settings import Settings, get_settings

logger = logging.getLogger(__name__)


class ArtworkRequestError(RuntimeError):
    """Raised when artwork cannot be downloaded."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class ArtworkClient:
    """Thin ``httpx`` wrapper returning raw image bytes."""

    def __init__(
        self,
        settings: Settings | None = None,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        settings = settings or get_settings()
        self._client = httpx.AsyncClient(
            timeout=settings.http_timeout,
            follow_redirects=True,
            headers={"User-Agent": settings.user_agent},
            transport=transport,
        )

    async def fetch(self, url: str) -> bytes:
        """Download ``url`` and return the response body."""

        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise ArtworkRequestError(f"Timed out fetching artwork from {url}.") from exc
        except httpx.HTTPStatusError as exc:
            raise ArtworkRequestError(
                f"Artwork request failed with {exc.response.status_code}: {url}",
                status_code=exc.response.status_code,
            ) from exc
        except httpx.HTTPError as exc:
            raise ArtworkRequestError(f"Artwork request failed: {exc}") from exc

        if not response.content:
            raise ArtworkRequestError(f"Artwork response was empty: {url}", status_code=response.status_code)
        logger.debug("Fetched %d bytes of artwork from %s", len(response.content), url)
        return response.content

    async def close(self) -> None:
        """Close the underlying HTTP client."""

        await self._client.aclose()
