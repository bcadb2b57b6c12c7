from dataclasses import dataclass, field
from typing import Dict, List


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0 Safari/537.36 url-sampler/1.0"
)

DEFAULT_HEADERS: Dict[str, str] = {
    "User-Agent": DEFAULT_USER_AGENT,
    "Accept": "text/html,application/xhtml+xml,*/*;q=0.8",
    "Accept-Language": "en-US,en;q=0.5",
    "Accept-Encoding": "gzip, deflate",
}

# Link-rich sites with many outbound links to unrelated domains.
DEFAULT_SEED_URLS: List[str] = [
    "https://news.ycombinator.com",
    "https://reddit.com",
    "https://medium.com",
    "https://dev.to",
    "https://techcrunch.com",
    "https://producthunt.com",
    "https://slashdot.org",
    "https://wired.com",
    "https://theverge.com",
    "https://mashable.com",
]

DEFAULT_EXCLUDED_DOMAINS: List[str] = [
    "facebook.com",
    "twitter.com",
    "x.com",
    "instagram.com",
    "linkedin.com",
    "youtube.com",
    "google.com",
    "tiktok.com",
    "pinterest.com",
]


@dataclass(frozen=True)
class SamplerConfig:
    seed_urls: List[str] = field(default_factory=list)
    number_of_urls: int = 100
    max_urls_per_domain: int = 2
    min_domain_level: int = 2
    excluded_domains: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDED_DOMAINS))
    crawl_delay: float = 1.0
    request_timeout: float = 10.0
    max_redirects: int = 5
    headers: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_HEADERS))
    concurrency: int = 5
    include_default_seeds: bool = True
    metrics_interval: float = 0.0

    def all_seed_urls(self) -> List[str]:
        if self.include_default_seeds:
            return list(DEFAULT_SEED_URLS) + list(self.seed_urls)
        return list(self.seed_urls)
