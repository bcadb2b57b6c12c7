import logging
from urllib.parse import urlparse

from .config import SamplerConfig
from .parsing import UrlTools
from .types import HttpClientProtocol


logger = logging.getLogger(__name__)


class UrlValidator:
    def __init__(self, config: SamplerConfig, http: HttpClientProtocol):
        self.config = config
        self.http = http

    def is_valid_url_format(self, url: str) -> bool:
        try:
            parsed = urlparse(url)
        except ValueError:
            return False
        if parsed.scheme not in ("http", "https"):
            return False
        return UrlTools.is_acceptable_domain(
            UrlTools.get_domain(url), self.config.min_domain_level, self.config.excluded_domains
        )

    def is_valid_url(self, url: str) -> bool:
        """True when url is well-formed, not excluded, and answers with a non-error status."""
        try:
            if not self.is_valid_url_format(url):
                return False
            status = self.http.probe(url)
        except Exception as exc:
            logger.debug("Validation failed for %s: %s", url, exc)
            return False
        if status is None:
            logger.debug("Unreachable: %s", url)
            return False
        return status < 400
