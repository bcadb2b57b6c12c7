import random

from samplerlib.config import SamplerConfig
from samplerlib.discovery import LinkDiscovery
from samplerlib.metrics import Metrics
from samplerlib.types import FetchResult, HttpClientProtocol


PAGE = """
<html><body>
  <a href="/local">local</a>
  <a href="/local#again">local again</a>
  <a href="https://blog.other.org/post">other</a>
  <a href="http://localhost/admin">single label</a>
  <a href="https://www.facebook.com/share">excluded</a>
  <a href="javascript:void(0)">js</a>
  <a href="ftp://files.example.com/x">ftp</a>
</body></html>
"""


class StubHttp(HttpClientProtocol):
    def __init__(self, result=None, exc=None):
        self.result = result
        self.exc = exc

    def fetch(self, url):
        if self.exc:
            raise self.exc
        return self.result

    def probe(self, url):
        return 200


def html(text, status=200, content_type="text/html; charset=utf-8"):
    return FetchResult(status=status, content_type=content_type, text=text, size_bytes=len(text))


def make(http, **kw):
    config = SamplerConfig(excluded_domains=["facebook.com"], **kw)
    return LinkDiscovery(config, http, metrics=Metrics(), rng=random.Random(0))


def test_links_are_filtered_and_deduplicated():
    links = make(StubHttp(html(PAGE))).extract_links("https://example.com/start")
    assert sorted(links) == ["https://blog.other.org/post", "https://example.com/local"]


def test_min_domain_level_applies():
    links = make(StubHttp(html(PAGE)), min_domain_level=3).extract_links("https://example.com/start")
    assert links == ["https://blog.other.org/post"]


def test_non_html_response_yields_nothing():
    result = FetchResult(status=200, content_type="application/json", text="", size_bytes=2)
    assert make(StubHttp(result)).extract_links("https://example.com/api") == []


def test_error_status_yields_nothing():
    assert make(StubHttp(html(PAGE, status=404))).extract_links("https://example.com/missing") == []


def test_failures_are_absorbed():
    discovery = make(StubHttp(exc=RuntimeError("reset")))
    assert discovery.extract_links("https://example.com") == []
    discovery = make(StubHttp(None))
    assert discovery.extract_links("https://example.com") == []
    totals, _ = discovery.metrics.snapshot()
    assert totals.errors == 1
