from typing import Dict, Optional, Tuple

import urllib3
from urllib3.util.retry import Retry
from urllib3 import exceptions as urllib3_exc

from .types import FetchResult


class HttpClient:
    def __init__(
        self,
        headers: Dict[str, str],
        request_timeout: float,
        max_redirects: int = 5,
        concurrency: int = 5,
        max_connections: int = 16,
    ):
        self.headers = dict(headers)
        self.timeout = urllib3.Timeout(connect=min(5.0, request_timeout), read=request_timeout)
        self.http = urllib3.PoolManager(
            num_pools=max(8, concurrency),
            maxsize=max_connections,
            headers=self.headers,
            retries=Retry(
                total=None,
                connect=2,
                read=2,
                status=2,
                redirect=max(0, max_redirects),
                backoff_factor=0.3,
                status_forcelist=[429, 500, 502, 503, 504],
                allowed_methods=["GET", "HEAD"],
                raise_on_status=False,
            ),
        )

    def _request_bytes(self, method: str, url: str, preload: bool = True) -> Optional[Tuple[int, str, bytes]]:
        try:
            response = self.http.request(
                method,
                url,
                timeout=self.timeout,
                preload_content=preload,
                redirect=True,
            )
        except urllib3_exc.HTTPError:
            return None
        if not preload:
            response.drain_conn()
            response.release_conn()
            return response.status, response.headers.get("Content-Type", ""), b""
        return response.status, response.headers.get("Content-Type", ""), response.data or b""

    def fetch(self, url: str) -> Optional[FetchResult]:
        res = self._request_bytes("GET", url)
        if res is None:
            return None
        status, content_type, body = res
        text = ""
        if "text/html" in (content_type or ""):
            text = body.decode("utf-8", errors="ignore")
        return FetchResult(status=status, content_type=content_type or "", text=text, size_bytes=len(body))

    def probe(self, url: str) -> Optional[int]:
        """Return the final status code for url, or None when unreachable.

        Uses HEAD and falls back to a body-less GET for servers that refuse HEAD.
        """
        res = self._request_bytes("HEAD", url)
        if res is not None and res[0] not in (405, 501):
            return res[0]
        res = self._request_bytes("GET", url, preload=False)
        if res is None:
            return None
        return res[0]
