"""Keyword search client for the hosted documentation index.

Speaks the Algolia REST query API. Search is best-effort: an unconfigured
client, a transport failure or a malformed reply all yield an empty result
list so that chat keeps working without documentation grounding.
"""

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import requests

from observability.logging import log_slow_call
from observability.prometheus_metrics import record_search_metrics

logger = logging.getLogger(__name__)


@dataclass
class DocSearchResult:
    title: str
    url: str
    content: str
    relevance_score: float = 0.0


def _hit_title(hit: Dict[str, Any]) -> str:
    if hit.get("title"):
        return str(hit["title"])
    hierarchy = hit.get("hierarchy") or {}
    for level in ("lvl2", "lvl1", "lvl0"):
        if hierarchy.get(level):
            return str(hierarchy[level])
    return "Untitled"


def _hit_url(hit: Dict[str, Any]) -> str:
    url = str(hit.get("url") or "")
    anchor = hit.get("anchor")
    if anchor and url and "#" not in url:
        url = f"{url}#{anchor}"
    return url


class DocumentSearchClient:
    """Thin client over the search service's single-index query endpoint."""

    def __init__(self, app_id: Optional[str] = None, api_key: Optional[str] = None,
                 index_name: str = "IQM API Docs", host: Optional[str] = None,
                 timeout: float = 10.0):
        self.app_id = app_id
        self.api_key = api_key
        self.index_name = index_name
        self.host = host
        self.timeout = timeout

    @property
    def configured(self) -> bool:
        return bool(self.app_id) and bool(self.api_key)

    @property
    def query_url(self) -> str:
        host = self.host or f"https://{self.app_id}-dsn.algolia.net"
        return f"{host.rstrip('/')}/1/indexes/{quote(self.index_name, safe='')}/query"

    @log_slow_call("search", threshold_ms=2000.0)
    def search(self, query: str, max_results: int = 5) -> List[DocSearchResult]:
        """Return at most ``max_results`` hits for ``query``."""
        if not self.configured:
            logger.debug("Documentation search not configured, returning no results")
            return []
        if max_results <= 0:
            return []

        headers = {
            "X-Algolia-Application-Id": self.app_id,
            "X-Algolia-API-Key": self.api_key,
        }
        body = {"query": query, "hitsPerPage": max_results}

        try:
            response = requests.post(self.query_url, json=body, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            logger.error(f"Documentation search request failed: {e}")
            record_search_metrics(0, error="transport")
            return []

        if response.status_code != 200:
            logger.error(f"Documentation search returned HTTP {response.status_code}: {response.text[:200]}")
            record_search_metrics(0, error="http_status")
            return []

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Error parsing search response: {e}")
            record_search_metrics(0, error="malformed_reply")
            return []

        hits = payload.get("hits") if isinstance(payload, dict) else None
        if not isinstance(hits, list):
            message = payload.get("message") if isinstance(payload, dict) else None
            logger.error(f"Search response carried no hits: {message or 'unexpected payload'}")
            record_search_metrics(0, error="malformed_reply")
            return []

        results = []
        for position, hit in enumerate(hits[:max_results]):
            if not isinstance(hit, dict):
                continue
            results.append(DocSearchResult(
                title=_hit_title(hit),
                url=_hit_url(hit),
                content=str(hit.get("content") or ""),
                # Rank order stands in for relevance
                relevance_score=1.0 / (position + 1),
            ))

        record_search_metrics(len(results))
        logger.debug(f"Documentation search for {query!r} returned {len(results)} hits")
        return results
