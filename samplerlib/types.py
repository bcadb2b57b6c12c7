from dataclasses import dataclass
from typing import List, Optional, Protocol


@dataclass(frozen=True)
class FetchResult:
    status: int
    content_type: str
    text: str
    size_bytes: int


class HttpClientProtocol(Protocol):
    def fetch(self, url: str) -> Optional[FetchResult]: ...

    def probe(self, url: str) -> Optional[int]: ...


class LinkExtractorProtocol(Protocol):
    def extract_links(self, url: str) -> List[str]: ...


class UrlValidatorProtocol(Protocol):
    def is_valid_url(self, url: str) -> bool: ...
