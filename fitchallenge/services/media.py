from __future__ import annotations
from typing import Protocol


class MediaResolver(Protocol):
    def resolve(self, handle: str) -> str: ...


class PublicUrlResolver:
    """
    Turn an uploaded-file handle (storage key) into its public URL.

    Absolute URLs are passed through, so re-submitting a log that already
    carries a resolved reference keeps it unchanged.
    """

    def __init__(self, base_url: str):
        self.base_url = base_url.rstrip("/")

    def resolve(self, handle: str) -> str:
        if handle.startswith(("http://", "https://")):
            return handle
        return f"{self.base_url}/{handle.lstrip('/')}"
