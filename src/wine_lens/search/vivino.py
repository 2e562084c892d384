"""Vivino wine search over its public Algolia index."""

from __future__ import annotations

import json
import logging
import os
from urllib import error, request
from urllib.parse import urlencode

from pydantic import ValidationError

from wine_lens.exceptions import AuthenticationError, RateLimitError, SearchError
from wine_lens.schema import SearchResult
from wine_lens.search.base import BaseSearchClient

DEFAULT_INDEX = "WINES_prod"
DEFAULT_HITS_PER_PAGE = 5


def _safe_int(value: str | None, default: int) -> int:
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


class VivinoSearchClient(BaseSearchClient):
    """Keyword search against Vivino's wine index."""

    def __init__(
        self,
        app_id: str | None = None,
        api_key: str | None = None,
        *,
        index: str | None = None,
        hits_per_page: int | None = None,
        timeout_sec: float = 10.0,
        base_url: str | None = None,
    ):
        """Initialize the Vivino search client.

        Args:
            app_id: Algolia application id. Falls back to VIVINO_ALGOLIA_APP_ID.
            api_key: Algolia search key. Falls back to VIVINO_ALGOLIA_API_KEY.
            index: Index name. Falls back to VIVINO_ALGOLIA_INDEX, then WINES_prod.
            hits_per_page: Hits per query. Falls back to VIVINO_HITS_PER_PAGE, then 5.
            timeout_sec: Per-request timeout.
            base_url: Override for the Algolia host, mostly for tests.

        Raises:
            AuthenticationError: If the app id or key is missing.
        """
        self.logger = logging.getLogger(__name__)
        self.app_id = app_id or os.environ.get("VIVINO_ALGOLIA_APP_ID")
        self.api_key = api_key or os.environ.get("VIVINO_ALGOLIA_API_KEY")
        if not self.app_id or not self.api_key:
            raise AuthenticationError(
                "No Vivino search credentials. Set VIVINO_ALGOLIA_APP_ID and "
                "VIVINO_ALGOLIA_API_KEY environment variables or pass app_id/api_key."
            )
        self.index = index or os.getenv("VIVINO_ALGOLIA_INDEX", DEFAULT_INDEX)
        self.hits_per_page = hits_per_page or _safe_int(
            os.getenv("VIVINO_HITS_PER_PAGE"), DEFAULT_HITS_PER_PAGE
        )
        self.timeout_sec = timeout_sec
        self.base_url = (base_url or f"https://{self.app_id.lower()}-dsn.algolia.net").rstrip("/")

    @property
    def query_url(self) -> str:
        return f"{self.base_url}/1/indexes/{self.index}/query"

    def build_request(self, query: str) -> request.Request:
        params = urlencode({"query": query, "hitsPerPage": self.hits_per_page})
        body = json.dumps({"params": params}).encode("utf-8")
        return request.Request(
            self.query_url,
            data=body,
            method="POST",
            headers={
                "Content-Type": "application/json",
                "X-Algolia-Application-Id": self.app_id,
                "X-Algolia-API-Key": self.api_key,
            },
        )

    def search(self, query: str) -> SearchResult:
        """Search Vivino for ``query``, passed through unmodified.

        Raises:
            AuthenticationError: If the service rejects the credentials
            RateLimitError: If the service throttles the request
            SearchError: On any other transport or decoding failure
        """
        req = self.build_request(query)
        try:
            with request.urlopen(req, timeout=self.timeout_sec) as response:
                payload = json.loads(response.read().decode("utf-8"))
        except error.HTTPError as e:
            if e.code in {401, 403}:
                raise AuthenticationError(f"Vivino search rejected credentials: {e}") from e
            if e.code == 429:
                raise RateLimitError(f"Vivino search rate limit exceeded: {e}") from e
            raise SearchError(f"Vivino search failed for {query!r}: {e}") from e
        except (error.URLError, TimeoutError) as e:
            raise SearchError(f"Vivino search failed for {query!r}: {e}") from e
        except json.JSONDecodeError as e:
            raise SearchError(f"Vivino search returned invalid JSON for {query!r}") from e

        try:
            result = SearchResult.model_validate(payload)
        except ValidationError as e:
            raise SearchError(f"Unexpected Vivino search payload for {query!r}: {e}") from e

        self.logger.debug("vivino search %r returned %d hits", query, len(result.hits))
        return result
