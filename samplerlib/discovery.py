import logging
import random
import time
from typing import List, Optional

from .config import SamplerConfig
from .metrics import Metrics
from .parsing import Extractor, UrlTools
from .types import HttpClientProtocol


logger = logging.getLogger(__name__)


class LinkDiscovery:
    """Fetches a page and returns its outbound links, filtered and shuffled.

    Never raises; any failure yields an empty list.
    """

    def __init__(
        self,
        config: SamplerConfig,
        http: HttpClientProtocol,
        metrics: Optional[Metrics] = None,
        rng: Optional[random.Random] = None,
    ):
        self.config = config
        self.http = http
        self.metrics = metrics or Metrics()
        self.rng = rng or random.Random()

    def _keep(self, link: str) -> bool:
        return UrlTools.is_acceptable_domain(
            UrlTools.get_domain(link), self.config.min_domain_level, self.config.excluded_domains
        )

    def extract_links(self, url: str) -> List[str]:
        try:
            t0 = time.perf_counter()
            response = self.http.fetch(url)
            dt_ms = (time.perf_counter() - t0) * 1000.0
            if response is None:
                self.metrics.record_fetch(False, 0, dt_ms)
                logger.debug("Failed to extract URLs from %s: no response", url)
                return []
            self.metrics.record_fetch(response.status < 400, response.size_bytes, dt_ms)
            if response.status >= 400 or "text/html" not in (response.content_type or ""):
                return []
            links = [link for link in Extractor.extract_links(url, response.text) if self._keep(link)]
            unique = list(dict.fromkeys(links))
            self.rng.shuffle(unique)
            return unique
        except Exception as exc:
            logger.debug("Failed to extract URLs from %s: %s", url, exc)
            return []
