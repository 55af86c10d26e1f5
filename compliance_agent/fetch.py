from __future__ import annotations

import httpx

from .config import MAX_HTML_KB, SCAN_TIMEOUT_S, USER_AGENT
from .errors import ScanFailedError
from .page import ParsedPage, parse_html

_HTML_TYPES = ("text/html", "application/xhtml+xml")


def _is_html(content_type: str | None) -> bool:
    if not content_type:
        # no header: assume HTML
        return True
    ct = content_type.lower()
    return any(t in ct for t in _HTML_TYPES)


def _read_capped(res: httpx.Response, limit: int) -> bytes:
    chunks: list[bytes] = []
    size = 0
    for chunk in res.iter_bytes():
        chunks.append(chunk)
        size += len(chunk)
        if size >= limit:
            break
    return b"".join(chunks)[:limit]


def fetch_and_parse(
    url: str,
    *,
    timeout_s: float = SCAN_TIMEOUT_S,
    user_agent: str = USER_AGENT,
    max_html_kb: int = MAX_HTML_KB,
) -> ParsedPage:
    try:
        with httpx.Client(timeout=timeout_s, follow_redirects=True) as client:
            with client.stream(
                "GET",
                url,
                headers={
                    "user-agent": user_agent,
                    "accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
                    "accept-language": "en-US,en;q=0.6",
                },
            ) as res:
                if res.status_code >= 400:
                    raise ScanFailedError(url, f"Site responded with HTTP {res.status_code}.")

                content_type = res.headers.get("content-type")
                if not _is_html(content_type):
                    raise ScanFailedError(url, f"Non-HTML content ({content_type}).")

                # the rest of the body is never downloaded once the cap is hit
                body = _read_capped(res, max_html_kb * 1024)
                encoding = res.charset_encoding or "utf-8"
    except httpx.TimeoutException as e:
        raise ScanFailedError(url, "Timed out fetching page.") from e
    except httpx.InvalidURL as e:
        raise ScanFailedError(url, f"Invalid URL: {e}") from e
    except httpx.HTTPError as e:
        raise ScanFailedError(url, f"Unable to fetch page: {e}") from e

    try:
        html = body.decode(encoding, errors="replace")
    except LookupError:
        html = body.decode("utf-8", errors="replace")
    return parse_html(html)
