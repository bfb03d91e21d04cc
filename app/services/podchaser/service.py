from collections.abc import Callable

from loguru import logger
from pydantic import ValidationError

from app.core.config import settings
from app.core.constants import NO_PODCASTS_MESSAGE, SEARCH_FAILED_MESSAGE
from app.core.exceptions import ParseError, TransportError
from app.models.chat import PodcastResult
from app.services.podchaser.client import PodchaserClient

SEARCH_QUERY = """
query SearchPodcasts($searchTerm: String) {
  podcasts(
    searchTerm: $searchTerm,
    first: %(first)d,
    filters: {rating: {minRating: %(min_rating)d, maxRating: %(max_rating)d}}
  ) {
    paginatorInfo {
      currentPage
      hasMorePages
      lastPage
    }
    data {
      id
      title
      description
      webUrl
      imageUrl
    }
  }
}
"""


class PodcastSearchService:
    """
    Single-shot podcast search against Podchaser.

    Never raises: transport and parse failures, as well as searches without
    matches, produce an empty list plus a notice passed to ``notify``.
    """

    def __init__(
        self,
        client: PodchaserClient,
        first: int = settings.SEARCH_PAGE_SIZE,
        min_rating: int = settings.SEARCH_MIN_RATING,
        max_rating: int = settings.SEARCH_MAX_RATING,
    ):
        self.client = client
        self.query = SEARCH_QUERY % {"first": first, "min_rating": min_rating, "max_rating": max_rating}

    async def close(self):
        """Close the underlying HTTP client."""
        await self.client.close()

    async def search(self, term: str, notify: Callable[[str], None] | None = None) -> list[PodcastResult]:
        def _notice(text: str) -> list[PodcastResult]:
            if notify is not None:
                notify(text)
            return []

        term = (term or "").strip()
        if not term:
            return _notice(NO_PODCASTS_MESSAGE)

        try:
            body = await self.client.query(self.query, variables={"searchTerm": term})
            items = self._extract_items(body)
        except (TransportError, ParseError) as e:
            logger.warning(f"Podcast search for {term!r} failed: {e}")
            return _notice(SEARCH_FAILED_MESSAGE)

        if not items:
            logger.info(f"No podcasts found for {term!r}")
            return _notice(NO_PODCASTS_MESSAGE)

        logger.info(f"Found {len(items)} podcasts for {term!r}")
        return items

    @staticmethod
    def _extract_items(body) -> list[PodcastResult]:
        if not isinstance(body, dict):
            raise ParseError("Unexpected podcast directory response")

        if body.get("errors"):
            logger.warning(f"Podchaser returned errors: {body['errors']}")

        podcasts = body.get("data") or {}
        podcasts = podcasts.get("podcasts") if isinstance(podcasts, dict) else None
        data = podcasts.get("data") if isinstance(podcasts, dict) else None
        if not data:
            return []
        if not isinstance(data, list):
            raise ParseError("Podcast list is not an array")
        try:
            return [PodcastResult.model_validate(item) for item in data]
        except ValidationError as e:
            raise ParseError(f"Malformed podcast entry: {e}") from e
