import logging
import httpx
from notion_client import AsyncClient
from notion_client.errors import APIResponseError, HTTPResponseError, RequestTimeoutError
from typing import Any, Dict, List, Optional
from src.config import Settings
from src.services.logger import logger

class NotionAPIError(Exception):
    """Raised for any failed Notion call: HTTP error status or transport failure."""

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.code = code

class NotionClient:
    """
    Pages-only facade over the official `notion_client.AsyncClient`.
    Use as an async context manager so the underlying httpx client is closed.
    """

    def __init__(
        self,
        token: str | None,
        base_url: str = "https://api.notion.com",
        notion_version: str = "2022-06-28",
        timeout: float = 60.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = AsyncClient(
            auth=token,
            base_url=base_url.rstrip("/"),
            notion_version=notion_version,
            timeout_ms=int(timeout * 1000),
            logger=logging.getLogger("notion_client"),
            client=httpx.AsyncClient(transport=transport),
        )

    @classmethod
    def from_settings(cls, settings: Settings, transport: httpx.AsyncBaseTransport | None = None) -> "NotionClient":
        return cls(
            token=settings.NOTION_TOKEN,
            base_url=settings.NOTION_BASE_URL,
            notion_version=settings.NOTION_VERSION,
            timeout=settings.NOTION_TIMEOUT,
            transport=transport,
        )

    async def __aenter__(self) -> "NotionClient":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.aclose()

    async def aclose(self):
        await self._client.aclose()

    async def create_page(
        self,
        parent: Dict[str, Any],
        properties: Dict[str, Any],
        children: Optional[List[Dict[str, Any]]] = None,
    ) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"parent": parent, "properties": properties}
        if children:
            payload["children"] = children
        return await self._call("pages.create", self._client.pages.create(**payload))

    async def update_page(self, page_id: str, properties: Dict[str, Any]) -> Dict[str, Any]:
        return await self._call("pages.update", self._client.pages.update(page_id=page_id, properties=properties))

    async def _call(self, name: str, request) -> Dict[str, Any]:
        try:
            return await request
        except APIResponseError as e:
            # Notion error bodies look like {"object": "error", "status": 400, "code": "...", "message": "..."}
            logger.debug(f"Notion {name} returned {e.status}: {e.code}")
            raise NotionAPIError(str(e), status_code=e.status, code=getattr(e.code, "value", e.code)) from e
        except HTTPResponseError as e:
            raise NotionAPIError(str(e), status_code=e.status) from e
        except RequestTimeoutError as e:
            logger.error(f"Notion {name} timed out: {e}")
            raise NotionAPIError(str(e)) from e
        except httpx.HTTPError as e:
            logger.error(f"Notion {name} failed: {e}")
            raise NotionAPIError(f"Request to Notion failed: {e}") from e
