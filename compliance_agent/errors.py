from __future__ import annotations


class ScanFailedError(RuntimeError):
    """The page could not be fetched or is not HTML, so no analysis was run."""

    def __init__(self, url: str, reason: str):
        super().__init__(f"{reason} ({url})")
        self.url = url
        self.reason = reason
