"""EasyTier uptime API client (public node directory)"""

import logging
from typing import List, Optional, Sequence, Tuple

import httpx

from ..config import get_settings
from ..errors import RemoteDiscoveryFailure

logger = logging.getLogger(__name__)


class UptimeClient:
    """Lists public relay nodes recorded on https://uptime.easytier.cn"""

    def __init__(self, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = get_settings()
        self.base_url = self.settings.uptime_api_url.rstrip("/")
        self.transport = transport

    def _params(self, tags: Sequence[str], page: int) -> List[Tuple[str, str]]:
        params = [("tags", tag) for tag in tags]
        params.append(("per_page", str(self.settings.uptime_per_page)))
        params.append(("page", str(page)))
        return params

    async def fetch_page(
        self, client: httpx.AsyncClient, tags: Sequence[str], page: int
    ) -> Tuple[List[str], int]:
        """Fetch one page, returning (addresses, total_pages)."""
        response = await client.get(
            f"{self.base_url}/nodes",
            params=self._params(tags, page),
        )
        response.raise_for_status()
        data = response.json()

        if not data.get("success"):
            logger.warning(
                "Uptime API reported failure (page=%s): %s, %s",
                page,
                data.get("error"),
                data.get("message"),
            )
            raise RemoteDiscoveryFailure(data.get("error"), data.get("message"))

        body = data.get("data") or {}
        items = body.get("items") or []
        try:
            nodes = [str(item["address"]) for item in items]
            total_pages = int(body.get("total_pages") or 0)
        except (KeyError, TypeError, ValueError) as e:
            logger.warning("Malformed uptime API payload (page=%s): %r", page, e)
            raise RemoteDiscoveryFailure("malformed response", f"page {page}: {e!r}") from e
        return nodes, total_pages

    async def get_available_nodes(self, tags: Optional[Sequence[str]] = None) -> List[str]:
        """Walk every page of the node list and return all node urls.

        Args:
            tags: tag filters sent with every request; defaults to UPTIME_TAGS
        """
        if tags is None:
            tags = self.settings.uptime_tag_list()

        nodes: List[str] = []
        page = 1
        async with httpx.AsyncClient(
            timeout=self.settings.uptime_timeout_seconds,
            transport=self.transport,
        ) as client:
            while True:
                page_nodes, total_pages = await self.fetch_page(client, tags, page)
                logger.debug("Fetched %s nodes (page %s/%s)", len(page_nodes), page, total_pages)
                nodes.extend(page_nodes)
                if page >= total_pages:
                    break
                page += 1

        return nodes
