"""HTTP ingestion backend: pushes virtual files to a remote analyzer service."""

from __future__ import annotations

import base64
from hashlib import sha256

import requests
from requests import Response
from tenacity import retry, stop_after_attempt, wait_fixed

from ..models import ProjectContext
from .base import IngestionError

USER_AGENT = "tsext/0.1 (+virtual-file-ingestion)"


@retry(reraise=True, stop=stop_after_attempt(3), wait=wait_fixed(2))
def _http_put(url: str, payload: dict[str, str], timeout: float) -> Response:
    return requests.put(url, json=payload, headers={"User-Agent": USER_AGENT}, timeout=timeout)


def build_payload(virtual_path: str, content: bytes, context: ProjectContext) -> dict[str, str]:
    return {
        "contextRoot": context.root.as_posix(),
        "virtualPath": virtual_path,
        "encoding": "base64",
        "content": base64.b64encode(content).decode("ascii"),
        "contentHash": sha256(content).hexdigest(),
    }


class HttpIngestionService:
    """Send each (virtual path, content) pair to ``url`` with an HTTP PUT."""

    def __init__(self, url: str, timeout: float = 30.0) -> None:
        if not url.startswith(("http://", "https://")):
            raise ValueError(f"Ingestion URL must be http(s): {url}")
        self.url = url
        self.timeout = timeout

    def ingest(self, virtual_path: str, content: bytes, context: ProjectContext) -> None:
        payload = build_payload(virtual_path, content, context)
        try:
            response = _http_put(self.url, payload, self.timeout)
        except requests.RequestException as exc:  # pragma: no cover - network failure path
            raise IngestionError(f"Failed to ingest {virtual_path}: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise IngestionError(
                f"Unexpected status code {response.status_code} ingesting {virtual_path}"
            )
