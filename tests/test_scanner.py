from unittest.mock import MagicMock

import pytest

from compliance_agent.analyzer import analyze
from compliance_agent.errors import ScanFailedError
from compliance_agent.models import Jurisdiction
from compliance_agent.scanner import ScanCache, build_response, normalize_url, recommendations_for, scan

from .conftest import build_page, COMPLIANT_BODY


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class TestNormalizeUrl:
    @pytest.mark.parametrize("raw, expected", [
        ("example.com", "https://example.com"),
        ("  http://example.com/  ", "http://example.com"),
        ("https://example.com/about/#team", "https://example.com/about"),
        ("https://example.com/a?b=1", "https://example.com/a?b=1"),
    ])
    def test_normalizes(self, raw, expected):
        assert normalize_url(raw) == expected

    @pytest.mark.parametrize("raw", [
        "",
        "   ",
        "ftp://example.com",
        "https://localhost",
        "example.com:abc",
        "https://example.com:99999",
    ])
    def test_rejects_invalid(self, raw):
        with pytest.raises(ValueError):
            normalize_url(raw)


class TestRecommendations:
    def test_one_per_failed_issue_in_order(self):
        page = build_page("<p>Hello</p>")

        recs = recommendations_for(analyze(page, "http://example.xyz").issues)
        assert recs == [
            "Generate a Privacy Policy tailored to your website",
            "Create Terms of Service to protect your business",
            "Add a Cookie Consent banner and Cookie Policy",
            "Add visible contact information to your website",
            "Enable HTTPS/SSL for your website",
        ]

    def test_unmapped_codes_fall_back_to_title(self):
        page = build_page('<form></form><img src="a.png">' + COMPLIANT_BODY)

        recs = recommendations_for(analyze(page, "https://acme.io").issues)
        assert recs == ["Address: No Opt-Out Mechanism", "Address: Missing Basic Accessibility"]


class TestScan:
    """Normalize, cache, fetch, analyze"""

    def test_scan_builds_response(self):
        fetcher = MagicMock(return_value=build_page(COMPLIANT_BODY))
        response = scan("acme.io/", cache=ScanCache(clock=FakeClock()), fetcher=fetcher)

        fetcher.assert_called_once_with("https://acme.io")
        assert response.url == "https://acme.io"
        assert response.score == 100
        assert response.risk_level == "LOW"
        assert response.recommendations == []
        assert response.jurisdiction is Jurisdiction.GLOBAL
        assert response.jurisdiction_name == "Global / Multi-jurisdictional"
        assert response.cached is False
        assert len(response.issues) == 10

    def test_cache_hit_skips_fetch(self):
        cache = ScanCache(clock=FakeClock())
        fetcher = MagicMock(return_value=build_page("<p>Hi</p>"))

        first = scan("http://example.de", cache=cache, fetcher=fetcher)
        second = scan("http://example.de/", cache=cache, fetcher=fetcher)

        assert fetcher.call_count == 1
        assert second.cached is True
        assert second.score == first.score
        assert second.scanned_at == first.scanned_at

    def test_expired_entry_is_refetched(self):
        clock = FakeClock()
        cache = ScanCache(ttl_s=60, clock=clock)
        fetcher = MagicMock(return_value=build_page("<p>Hi</p>"))

        scan("http://example.de", cache=cache, fetcher=fetcher)
        clock.now += 61
        scan("http://example.de", cache=cache, fetcher=fetcher)

        assert fetcher.call_count == 2

    def test_zero_ttl_disables_cache(self):
        cache = ScanCache(ttl_s=0, clock=FakeClock())
        fetcher = MagicMock(return_value=build_page("<p>Hi</p>"))

        scan("http://example.de", cache=cache, fetcher=fetcher)
        scan("http://example.de", cache=cache, fetcher=fetcher)

        assert fetcher.call_count == 2
        assert len(cache) == 0

    def test_fetch_failure_propagates_and_is_not_cached(self):
        cache = ScanCache(clock=FakeClock())
        fetcher = MagicMock(side_effect=ScanFailedError("https://down.example", "Timed out fetching page."))

        with pytest.raises(ScanFailedError) as exc:
            scan("down.example", cache=cache, fetcher=fetcher)

        assert exc.value.reason == "Timed out fetching page."
        assert cache.get("https://down.example") is None

    def test_invalid_url_never_fetches(self):
        fetcher = MagicMock()
        with pytest.raises(ValueError):
            scan("ftp://example.com", cache=ScanCache(), fetcher=fetcher)
        fetcher.assert_not_called()

    def test_bad_port_never_fetches(self):
        fetcher = MagicMock()
        with pytest.raises(ValueError):
            scan("example.com:abc", cache=ScanCache(), fetcher=fetcher)
        fetcher.assert_not_called()


class TestScanCache:
    """Freshness window and eviction"""

    def _response(self):
        page = build_page(COMPLIANT_BODY)
        return build_response("https://acme.io", analyze(page, "https://acme.io"), scanned_at="2026-01-01T00:00:00+00:00")

    def test_put_prunes_expired_entries(self):
        clock = FakeClock(0.0)
        cache = ScanCache(ttl_s=10, clock=clock)
        response = self._response()
        for i in range(1000):
            cache.put(f"https://site{i}.example", response)
        assert len(cache) == 1000

        clock.now = 1000.0
        cache.put("https://fresh.example", response)

        assert len(cache) == 1
        assert cache.get("https://fresh.example") is response
        assert cache.get("https://site0.example") is None

    def test_fresh_entries_survive_pruning(self):
        clock = FakeClock(0.0)
        cache = ScanCache(ttl_s=10, clock=clock)
        response = self._response()

        cache.put("https://old.example", response)
        clock.now = 5.0
        cache.put("https://mid.example", response)
        clock.now = 12.0
        cache.put("https://new.example", response)

        assert len(cache) == 2
        assert cache.get("https://old.example") is None
        assert cache.get("https://mid.example") is response
