import threading
from typing import Dict, List, Set


class FrontierState:
    """Visited URLs, accepted URLs and per-domain counts for one run.

    All reads and writes go through one lock so that the domain cap check and
    the count increment happen as a single step, even when several seed
    crawls run at once.
    """

    def __init__(self, target: int, max_per_domain: int):
        self.target = target
        self.max_per_domain = max_per_domain
        self._visited: Set[str] = set()
        # dict keeps insertion order, used as an ordered set
        self._results: Dict[str, str] = {}
        self._domain_counts: Dict[str, int] = {}
        self._lock = threading.Lock()

    def claim(self, url: str) -> bool:
        """Mark url visited. False if it was already visited or the target is met."""
        with self._lock:
            if len(self._results) >= self.target or url in self._visited:
                return False
            self._visited.add(url)
            return True

    def admit(self, url: str, domain: str) -> bool:
        with self._lock:
            if len(self._results) >= self.target or url in self._results:
                return False
            if self._domain_counts.get(domain, 0) >= self.max_per_domain:
                return False
            self._results[url] = domain
            self._domain_counts[domain] = self._domain_counts.get(domain, 0) + 1
            return True

    def is_visited(self, url: str) -> bool:
        with self._lock:
            return url in self._visited

    def is_full(self) -> bool:
        with self._lock:
            return len(self._results) >= self.target

    def has_domain(self, domain: str) -> bool:
        with self._lock:
            return self._domain_counts.get(domain, 0) > 0

    def result_count(self) -> int:
        with self._lock:
            return len(self._results)

    def visited_count(self) -> int:
        with self._lock:
            return len(self._visited)

    def results(self) -> List[str]:
        with self._lock:
            return list(self._results)

    def domain_counts(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._domain_counts)
