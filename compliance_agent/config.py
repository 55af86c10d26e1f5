from __future__ import annotations

import os
from pathlib import Path

from dotenv import load_dotenv

# Repo-root .env for local dev; real environment variables always win.
_HERE = Path(__file__).resolve()
_REPO_ROOT = _HERE.parents[1]
load_dotenv(_REPO_ROOT / ".env", override=False)


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


SCAN_TIMEOUT_S = max(1, _int_env("COMPLIANCE_SCAN_TIMEOUT_S", 15))
CACHE_TTL_HOURS = max(0, _int_env("COMPLIANCE_CACHE_TTL_HOURS", 24))
MAX_HTML_KB = max(1, _int_env("COMPLIANCE_MAX_HTML_KB", 2048))
USER_AGENT = os.getenv("COMPLIANCE_USER_AGENT", "").strip() or "Mozilla/5.0 (compatible; ComplianceScanner/1.0)"
LOG_LEVEL = os.getenv("COMPLIANCE_LOG_LEVEL", "INFO").strip().upper() or "INFO"


def cors_allow_origins() -> list[str]:
    raw = os.getenv("COMPLIANCE_CORS_ORIGINS", "").strip()
    if not raw:
        return ["http://localhost:3000"]
    return [o.strip() for o in raw.split(",") if o.strip()]
