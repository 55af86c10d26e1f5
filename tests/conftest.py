"""
Shared fixtures for the compliance agent tests.

Pages are built from small HTML snippets so each test states exactly which
signals are present. Nothing here touches the network.
"""
import pytest
from fastapi.testclient import TestClient

from compliance_agent.page import ParsedPage, parse_html

COMPLIANT_BODY = """
<div id="cookie-consent">We use cookies to run this site.</div>
<footer>
  <a href="/privacy">Privacy Policy</a>
  <a href="/terms">Terms of Service</a>
  <a href="mailto:hello@acme.io">Email us</a>
</footer>
"""

GA_SCRIPT = '<script async src="https://www.googletagmanager.com/gtag/js?id=G-TEST"></script>'


def build_page(body: str = "", head: str = "") -> ParsedPage:
    return parse_html(f"<html><head>{head}</head><body>{body}</body></html>")


@pytest.fixture
def make_page():
    """Factory fixture: make_page(body, head='') -> ParsedPage."""
    return build_page


@pytest.fixture
def compliant_page() -> ParsedPage:
    return build_page(COMPLIANT_BODY)


@pytest.fixture
def empty_page() -> ParsedPage:
    return build_page("<p>Hello world</p>")


@pytest.fixture
def client():
    from compliance_agent.main import app

    with TestClient(app) as test_client:
        yield test_client
