import logging
import random
from concurrent.futures import ThreadPoolExecutor, wait
from typing import Iterator, List, Optional

from .config import SamplerConfig
from .discovery import LinkDiscovery
from .frontier import FrontierState
from .metrics import Metrics, StatsLogger
from .net import HttpClient
from .parsing import UrlTools
from .rate import RateLimiter
from .types import HttpClientProtocol, LinkExtractorProtocol, UrlValidatorProtocol
from .validator import UrlValidator


logger = logging.getLogger(__name__)


class UrlSampler:
    def __init__(
        self,
        config: SamplerConfig,
        http_client: HttpClientProtocol | None = None,
        link_extractor: LinkExtractorProtocol | None = None,
        validator: UrlValidatorProtocol | None = None,
        rate: RateLimiter | None = None,
        rng: random.Random | None = None,
        metrics: Metrics | None = None,
    ):
        self.config = config
        self.rng = rng or random.Random()
        self.metrics = metrics or Metrics()
        if link_extractor is None or validator is None:
            http_client = http_client or HttpClient(
                config.headers, config.request_timeout, config.max_redirects, config.concurrency
            )
        self.links = link_extractor or LinkDiscovery(config, http_client, self.metrics, self.rng)
        self.validator = validator or UrlValidator(config, http_client)
        self.rate = rate or RateLimiter(config.crawl_delay)
        self.state: Optional[FrontierState] = None
        self.stats_thread: Optional[StatsLogger] = None

    def _is_valid(self, url: str) -> bool:
        try:
            valid = bool(self.validator.is_valid_url(url))
        except Exception as exc:
            logger.debug("Validator raised for %s: %s", url, exc)
            valid = False
        self.metrics.record_validation(valid)
        return valid

    def _order_candidates(self, candidates: List[str]) -> List[str]:
        fresh: List[str] = []
        known: List[str] = []
        for link in candidates:
            domain = UrlTools.get_domain(link)
            if domain and self.state.has_domain(domain):
                known.append(link)
            else:
                fresh.append(link)
        self.rng.shuffle(fresh)
        self.rng.shuffle(known)
        return fresh + known

    def visit(self, url: str) -> List[str]:
        """Visit one URL and return the candidates to explore from it, best first."""
        state = self.state
        if not state.claim(url):
            return []
        if not self._is_valid(url):
            return []
        domain = UrlTools.get_domain(url)
        if domain is None:
            return []
        accepted = state.admit(url, domain)
        self.metrics.record_admission(accepted)
        if accepted:
            logger.info("Found valid URL (%d/%d) from domain %s", state.result_count(), state.target, domain)
        else:
            logger.debug("Domain cap reached for %s, exploring without accepting %s", domain, url)
        if state.is_full():
            return []
        try:
            candidates = self.links.extract_links(url)
        except Exception as exc:
            logger.debug("Failed to extract URLs from %s: %s", url, exc)
            return []
        return self._order_candidates(candidates)

    def _crawl(self, seed: str) -> None:
        state = self.state
        stack: List[Iterator[str]] = [iter(self.visit(seed))]
        while stack:
            url = next(stack[-1], None)
            if url is None:
                stack.pop()
                continue
            if state.is_full():
                return
            if state.is_visited(url):
                continue
            self.rate.wait_turn(UrlTools.get_domain(url) or "")
            children = self.visit(url)
            if children:
                stack.append(iter(children))

    def run(self, num_urls: int | None = None) -> List[str]:
        target = self.config.number_of_urls if num_urls is None else num_urls
        if target <= 0:
            return []
        self.state = FrontierState(target, self.config.max_urls_per_domain)
        seeds = UrlTools.normalize_start(self.config.all_seed_urls())
        self.rng.shuffle(seeds)
        logger.info("Starting sample: %d seed URLs, target %d URLs", len(seeds), target)

        if self.config.metrics_interval and self.config.metrics_interval > 0:
            self.stats_thread = StatsLogger(self.metrics, self.config.metrics_interval, logger.info)
            self.stats_thread.start()
        width = max(1, self.config.concurrency)
        try:
            with ThreadPoolExecutor(max_workers=width, thread_name_prefix="sampler") as executor:
                for i in range(0, len(seeds), width):
                    if self.state.is_full():
                        break
                    batch = [executor.submit(self._crawl, url) for url in seeds[i:i + width]]
                    wait(batch)
                    for future in batch:
                        future.result()
        finally:
            if self.stats_thread:
                self.stats_thread.stop()

        results = self.state.results()[:target]
        logger.info(
            "Finished. Accepted %d URLs from %d domains after visiting %d",
            len(results),
            len(self.state.domain_counts()),
            self.state.visited_count(),
        )
        return results


def get_valid_urls(num_urls: int | None = None, config: SamplerConfig | None = None, **kwargs) -> List[str]:
    """Sample up to num_urls distinct reachable URLs, crawling from the configured seeds."""
    sampler = UrlSampler(config or SamplerConfig(), **kwargs)
    return sampler.run(num_urls)
