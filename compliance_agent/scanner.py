from __future__ import annotations

import re
import threading
import time
from datetime import datetime, timezone
from typing import Callable
from urllib.parse import urlparse, urlunparse

from .analyzer import analyze
from .config import CACHE_TTL_HOURS
from .errors import ScanFailedError
from .fetch import fetch_and_parse
from .logger import get_logger
from .models import AnalysisResult, IssueRecord, ScanResponse
from .page import ParsedPage
from .scoring import risk_level_for

log = get_logger(__name__)

Fetcher = Callable[[str], ParsedPage]

_RECOMMENDATIONS = {
    "MISSING_PRIVACY_POLICY": "Generate a Privacy Policy tailored to your website",
    "MISSING_TERMS": "Create Terms of Service to protect your business",
    "MISSING_COOKIE_CONSENT": "Add a Cookie Consent banner and Cookie Policy",
    "NO_CONTACT_INFO": "Add visible contact information to your website",
    "THIRD_PARTY_COOKIES": "Disclose third-party tracking in your Privacy Policy",
    "NO_HTTPS": "Enable HTTPS/SSL for your website",
}


def normalize_url(raw: str) -> str:
    value = (raw or "").strip()
    if not value:
        raise ValueError("Please provide a URL.")

    if not re.match(r"^[a-zA-Z][a-zA-Z\d+.-]*://", value):
        value = "https://" + value

    parsed = urlparse(value)
    if parsed.scheme not in ("http", "https"):
        raise ValueError("Please use an http(s) website URL.")
    if not parsed.hostname or "." not in parsed.hostname:
        raise ValueError("Please enter a valid website domain.")
    try:
        parsed.port  # raises on a non-numeric or out-of-range port
    except ValueError:
        raise ValueError("Please enter a valid port number.") from None

    normalized = urlunparse(parsed._replace(fragment=""))
    return normalized.rstrip("/")


def recommendations_for(issues: list[IssueRecord] | tuple[IssueRecord, ...]) -> list[str]:
    return [_RECOMMENDATIONS.get(i.code, f"Address: {i.title}") for i in issues if not i.passed]


def build_response(url: str, analysis: AnalysisResult, scanned_at: str) -> ScanResponse:
    return ScanResponse(
        url=url,
        score=analysis.score,
        issues=list(analysis.issues),
        details=dict(analysis.details),
        recommendations=recommendations_for(analysis.issues),
        jurisdiction=analysis.jurisdiction,
        jurisdiction_name=analysis.jurisdiction.display_name,
        risk_level=risk_level_for(analysis.score),
        scanned_at=scanned_at,
    )


class ScanCache:
    """Recent scan responses keyed by normalized URL."""

    def __init__(self, ttl_s: float = CACHE_TTL_HOURS * 3600, clock: Callable[[], float] = time.monotonic):
        self.ttl_s = ttl_s
        self._clock = clock
        self._entries: dict[str, tuple[float, ScanResponse]] = {}
        self._lock = threading.Lock()

    def get(self, url: str) -> ScanResponse | None:
        with self._lock:
            entry = self._entries.get(url)
            if entry is None:
                return None
            stored_at, response = entry
            if self._clock() - stored_at >= self.ttl_s:
                del self._entries[url]
                return None
            return response

    def put(self, url: str, response: ScanResponse) -> None:
        if self.ttl_s <= 0:
            return
        with self._lock:
            now = self._clock()
            self._prune(now)
            self._entries[url] = (now, response)

    def _prune(self, now: float) -> None:
        # caller holds the lock
        expired = [u for u, (stored_at, _) in self._entries.items() if now - stored_at >= self.ttl_s]
        for u in expired:
            del self._entries[u]

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


_default_cache = ScanCache()


def scan(
    url: str,
    *,
    cache: ScanCache | None = None,
    fetcher: Fetcher | None = None,
) -> ScanResponse:
    cache = _default_cache if cache is None else cache
    fetcher = fetcher or fetch_and_parse

    normalized_url = normalize_url(url)

    cached = cache.get(normalized_url)
    if cached is not None:
        log.info("Cache hit for %s", normalized_url)
        return cached.model_copy(update={"cached": True})

    log.info("Scanning %s", normalized_url)
    try:
        page = fetcher(normalized_url)
    except ScanFailedError:
        log.exception("Failed to scan URL: %s", normalized_url)
        raise

    analysis = analyze(page, normalized_url)
    response = build_response(
        normalized_url,
        analysis,
        scanned_at=datetime.now(timezone.utc).isoformat(),
    )
    cache.put(normalized_url, response)
    return response
