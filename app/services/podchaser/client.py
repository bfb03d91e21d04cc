from typing import Any

import httpx

from app.core.base_client import BaseClient
from app.core.version import __version__


class PodchaserClient(BaseClient):
    """
    Client for the Podchaser GraphQL API.
    """

    def __init__(
        self,
        api_key: str | None,
        url: str = "https://api.podchaser.com/graphql",
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        headers = {
            "User-Agent": f"Moodcast/{__version__}",
            "Accept": "application/json",
        }
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self.url = url
        super().__init__(timeout=timeout, headers=headers, transport=transport)

    async def query(self, query: str, variables: dict[str, Any] | None = None) -> Any:
        """POST a GraphQL document and return the decoded response body."""
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables
        return await self.post(self.url, json=payload)
