from typing import Iterable, List, Optional
from urllib.parse import urljoin, urldefrag, urlparse

from bs4 import BeautifulSoup


class UrlTools:
    @staticmethod
    def normalize_start(urls: Iterable[str]) -> List[str]:
        normalized: List[str] = []
        seen = set()
        for u in urls:
            if not u:
                continue
            u = u.strip()
            parsed = urlparse(u)
            if not parsed.scheme:
                u = "https://" + u
            u, _ = urldefrag(u)
            u = UrlTools.with_root_path(u)
            if u in seen:
                continue
            seen.add(u)
            normalized.append(u)
        return normalized

    @staticmethod
    def normalize_link(base_url: str, href: str) -> Optional[str]:
        if not href:
            return None
        href = href.strip()
        if href.startswith(("mailto:", "javascript:", "tel:", "#")):
            return None
        try:
            absolute = urljoin(base_url, href)
            absolute, _ = urldefrag(absolute)
            parsed = urlparse(absolute)
        except ValueError:
            return None
        if parsed.scheme not in ("http", "https"):
            return None
        return UrlTools.with_root_path(absolute)

    @staticmethod
    def with_root_path(url: str) -> str:
        """Give a bare origin such as https://a.test the path "/"."""
        try:
            parsed = urlparse(url)
        except ValueError:
            return url
        if parsed.netloc and not parsed.path:
            return parsed._replace(path="/").geturl()
        return url

    @staticmethod
    def get_domain(url: str) -> Optional[str]:
        try:
            host = urlparse(url).hostname
        except ValueError:
            return None
        return host or None

    @staticmethod
    def is_acceptable_domain(domain: Optional[str], min_domain_level: int, excluded: Iterable[str]) -> bool:
        if not domain:
            return False
        if len(domain.split(".")) < min_domain_level:
            return False
        return not any(e and e.lower() in domain for e in excluded)


class Extractor:
    @staticmethod
    def extract_links(url: str, html: str) -> List[str]:
        soup = BeautifulSoup(html, "html.parser")
        links: List[str] = []
        for a in soup.find_all("a", href=True):
            normalized = UrlTools.normalize_link(url, a["href"])
            if normalized:
                links.append(normalized)
        return links
