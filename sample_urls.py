#!/usr/bin/env python3
import argparse
import logging

from samplerlib.config import (
    DEFAULT_EXCLUDED_DOMAINS,
    DEFAULT_HEADERS,
    DEFAULT_USER_AGENT,
    SamplerConfig,
)
from samplerlib.engine import UrlSampler
from samplerlib.parsing import UrlTools
from samplerlib.prometheus_exporter import PrometheusExporter
from samplerlib.storage import JsonlWriter


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Sample distinct, reachable URLs across many domains by crawling from seed pages.")
    parser.add_argument("-n", "--num-urls", type=int, default=100, help="Number of URLs to collect.")
    parser.add_argument("--seed", dest="seeds", nargs="+", default=[], help="Additional seed URLs.")
    parser.add_argument("--no-default-seeds", action="store_true", help="Only crawl from --seed URLs.")
    parser.add_argument("--max-per-domain", type=int, default=2, help="Maximum accepted URLs per domain.")
    parser.add_argument("--min-domain-level", type=int, default=2, help="Minimum number of labels in a hostname.")
    parser.add_argument(
        "--exclude",
        nargs="+",
        default=None,
        help="Hostname substrings to skip. Defaults to a list of large social and search sites.",
    )
    parser.add_argument("--delay", type=float, default=1.0, help="Seconds to wait before each followed link.")
    parser.add_argument("--timeout", type=float, default=10.0, help="HTTP read timeout in seconds.")
    parser.add_argument("--max-redirects", type=int, default=5, help="Redirects to follow per request.")
    parser.add_argument("--concurrency", type=int, default=5, help="Seed URLs crawled at once.")
    parser.add_argument("--user-agent", default=DEFAULT_USER_AGENT, help="User-Agent header to send.")
    parser.add_argument("--out", dest="output_path", default=None, help="Also write results to this JSONL file.")
    parser.add_argument("--metrics-interval", type=float, default=10.0, help="Seconds between progress logs (0 to disable).")
    parser.add_argument("--prometheus-port", type=int, default=0, help="Expose Prometheus metrics on this port (0 to disable).")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="Increase logging verbosity.")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> SamplerConfig:
    headers = dict(DEFAULT_HEADERS)
    headers["User-Agent"] = args.user_agent
    return SamplerConfig(
        seed_urls=list(args.seeds),
        number_of_urls=max(0, args.num_urls),
        max_urls_per_domain=max(1, args.max_per_domain),
        min_domain_level=max(1, args.min_domain_level),
        excluded_domains=list(DEFAULT_EXCLUDED_DOMAINS) if args.exclude is None else [e.lower() for e in args.exclude],
        crawl_delay=max(0.0, args.delay),
        request_timeout=max(1.0, args.timeout),
        max_redirects=max(0, args.max_redirects),
        headers=headers,
        concurrency=max(1, args.concurrency),
        include_default_seeds=not args.no_default_seeds,
        metrics_interval=max(0.0, args.metrics_interval),
    )


def main(argv=None) -> None:
    args = parse_args(argv)
    log_level = logging.WARNING
    if args.verbose == 1:
        log_level = logging.INFO
    elif args.verbose >= 2:
        log_level = logging.DEBUG
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(threadName)s %(message)s",
    )

    config = build_config(args)
    sampler = UrlSampler(config)

    exporter = None
    if args.prometheus_port > 0:
        exporter = PrometheusExporter(sampler.metrics, port=args.prometheus_port)
        exporter.start()
        logging.info("Prometheus metrics available at http://0.0.0.0:%d/metrics", args.prometheus_port)

    try:
        urls = sampler.run()
    finally:
        if exporter:
            exporter.stop()

    writer = JsonlWriter(args.output_path) if args.output_path else None
    try:
        for rank, url in enumerate(urls, start=1):
            print(url)
            if writer:
                writer.write({"rank": rank, "url": url, "domain": UrlTools.get_domain(url)})
    finally:
        if writer:
            writer.close()


if __name__ == "__main__":
    main()
