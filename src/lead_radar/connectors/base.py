"""Base source adapter for signal ingestion."""

import logging
import time
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Dict, Any, Iterator, Sequence, Callable

import requests

from ..core.config import settings
from ..core.models import Signal, Platform
from ..core.relevance import RelevanceScorer
from ..errors import SourceUnavailable, FetchFailure

logger = logging.getLogger(__name__)

USER_AGENT = "LeadRadar/1.0"


def parse_timestamp(value: Any) -> datetime:
    """Epoch seconds, epoch milliseconds or ISO-8601 string to datetime."""
    if value is None or value == "":
        return datetime.now()
    if isinstance(value, (int, float)):
        # Millisecond epochs are 13 digits
        if value > 1e11:
            value = value / 1000.0
        try:
            return datetime.fromtimestamp(value)
        except (OverflowError, OSError) as e:
            raise ValueError(f"timestamp out of range: {value}") from e
    text = str(value)
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        # Stored timestamps are naive local time
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def truncate_title(text: str, limit: int = 100) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


class BaseSourceAdapter(ABC):
    """Base class for all source adapters.

    ``scan`` is a lazy generator of normalized signals. A missing credential
    ends it immediately with no items; fetch or parse failures on one page or
    item are logged and skipped.
    """

    source_name: str = "unknown"
    platform: Platform
    request_delay: float = 0.0  # seconds between the adapter's own round trips

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        session_factory: Optional[Callable[[], requests.Session]] = None,
        timeout: Optional[float] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.session = session or requests.Session()
        # Worker threads open their own sessions; an injected one is shared
        self.session_factory = session_factory or ((lambda: session) if session else requests.Session)
        self.timeout = timeout if timeout is not None else settings.http_timeout
        self._sleep = sleep

    # === AVAILABILITY ===

    def check_available(self):
        """Raise SourceUnavailable when the source can't run."""

    def is_available(self) -> bool:
        try:
            self.check_available()
        except SourceUnavailable:
            return False
        return True

    # === SCANNING ===

    def scan(self, terms: Optional[Sequence[str]] = None) -> Iterator[Signal]:
        """Yield normalized signals for the given query terms (or the defaults)."""
        try:
            self.check_available()
        except SourceUnavailable as e:
            logger.info(f"Skipping {self.source_name} scan: {e.reason}")
            return

        count = 0
        for signal in self._scan(terms):
            count += 1
            yield signal

        logger.info(f"{self.source_name} scan completed. Found {count} potential signals.")

    def collect(self, terms: Optional[Sequence[str]] = None) -> List[Signal]:
        """Run a scan to completion."""
        return list(self.scan(terms))

    @abstractmethod
    def _scan(self, terms: Optional[Sequence[str]]) -> Iterator[Signal]:
        """Source-specific fetch loop."""
        pass

    @abstractmethod
    def _normalize(self, raw: Dict[str, Any], *context) -> Optional[Signal]:
        """Map one raw item to a Signal, or None if it is filtered out."""
        pass

    # === HELPERS ===

    def _analyze(self, raw: Dict[str, Any], *context) -> Optional[Signal]:
        """Normalize one item, skipping it if its payload is malformed."""
        try:
            return self._normalize(raw, *context)
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.warning(f"{self.source_name}: skipping malformed item: {e}")
            return None

    def _get_json(
        self,
        url: str,
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
        session: Optional[requests.Session] = None,
    ) -> Any:
        """GET a JSON document. Any transport or decode error is a FetchFailure."""
        request_headers = {"User-Agent": USER_AGENT}
        if headers:
            request_headers.update(headers)

        try:
            response = (session or self.session).get(
                url,
                params=params,
                headers=request_headers,
                timeout=self.timeout,
            )
            response.raise_for_status()
            return response.json()
        except requests.RequestException as e:
            raise FetchFailure(self.source_name, f"{url}: {e}", cause=e) from e
        except ValueError as e:
            raise FetchFailure(self.source_name, f"{url}: invalid JSON", cause=e) from e

    def _get_items(
        self,
        url: str,
        extract: Callable[[Any], Any],
        params: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> List[Any]:
        """GET a page and pull its item list out with ``extract``.

        A body of the wrong shape is a FetchFailure, the same as a dropped
        connection, so callers skip the page and move on.
        """
        payload = self._get_json(url, params=params, headers=headers)
        try:
            items = extract(payload)
        except (AttributeError, KeyError, TypeError) as e:
            raise FetchFailure(self.source_name, f"{url}: unexpected payload: {e}", cause=e) from e
        if not isinstance(items, list):
            raise FetchFailure(self.source_name, f"{url}: expected a list, got {type(items).__name__}")
        return items

    def _pause(self):
        if self.request_delay > 0:
            self._sleep(self.request_delay)


class SocialSourceAdapter(BaseSourceAdapter):
    """Adapter for the credentialed social networks."""

    credential_name: str = ""
    max_keywords: int = 5

    def __init__(self, token: Optional[str] = None, scorer: Optional[RelevanceScorer] = None, **kwargs):
        super().__init__(**kwargs)
        self.token = token
        self.scorer = scorer

    def check_available(self):
        if not self.token:
            raise SourceUnavailable(self.source_name, f"{self.credential_name} not configured")

    def _auth_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.token}",
            "Content-Type": "application/json",
        }
