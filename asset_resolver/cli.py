"""Command-line entry point for asset URL resolution."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from typing import Iterable, List, Sequence

from .browser import BrowserProber
from .config import ResolverConfig
from .models import ProbeResult
from .probe import AccessibilityProber, HttpProber
from .resolver import UrlResolver
from .selector import FallbackSelector

logger = logging.getLogger("asset_resolver.cli")


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return argv
    first = argv[0]
    if first in commands or first.startswith("-"):
        return argv
    return ("resolve", *argv)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--base-origin",
        default=None,
        help="Backend origin prefixed onto upload paths (default: $API_BASE_URL)",
    )
    parser.add_argument(
        "--frontend-origin",
        default=None,
        help="Origin serving static /assets/ paths, used when probing them",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Seconds before a single probe is abandoned",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _add_probe_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--browser",
        action="store_true",
        help="Load candidates as images in headless Chromium instead of HTTP HEAD",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Resolve stored image references to fetchable URLs and check they load.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    resolve_parser = subparsers.add_parser(
        "resolve", help="Print the resolved URL for each reference"
    )
    resolve_parser.add_argument("references", nargs="+", help="Stored image references")
    resolve_parser.add_argument(
        "--fallback",
        default=None,
        help="Reference used for empty inputs (default: thumbnail image)",
    )
    _add_common_arguments(resolve_parser)

    check_parser = subparsers.add_parser(
        "check", help="Probe resolved URLs and report whether each one loads"
    )
    check_parser.add_argument("urls", nargs="+", help="References or URLs to probe")
    _add_probe_arguments(check_parser)
    _add_common_arguments(check_parser)

    select_parser = subparsers.add_parser(
        "select", help="Print the first reachable candidate, in the order given"
    )
    select_parser.add_argument("candidates", nargs="*", help="Candidate references")
    select_parser.add_argument(
        "--fallback",
        default=None,
        help="Reference used when no candidate loads (default: thumbnail image)",
    )
    _add_probe_arguments(select_parser)
    _add_common_arguments(select_parser)

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ResolverConfig:
    """Start from the environment and apply any command-line overrides."""
    config = ResolverConfig.from_env()
    return ResolverConfig(
        base_origin=config.base_origin if args.base_origin is None else args.base_origin,
        upload_root=config.upload_root,
        static_prefix=config.static_prefix,
        defaults=config.defaults,
        probe_timeout=config.probe_timeout if args.timeout is None else args.timeout,
        frontend_origin=args.frontend_origin or config.frontend_origin,
    )


def _make_prober(args: argparse.Namespace, config: ResolverConfig) -> AccessibilityProber:
    if args.browser:
        return BrowserProber(
            timeout=config.probe_timeout, frontend_origin=config.frontend_origin
        )
    return HttpProber(timeout=config.probe_timeout, frontend_origin=config.frontend_origin)


async def _check_all(
    urls: List[str], resolver: UrlResolver, prober: AccessibilityProber
) -> List[ProbeResult]:
    results = []
    for url in urls:
        results.append(await prober.check(resolver.resolve(url)))
    return results


async def _with_prober(prober: AccessibilityProber, coro_factory):
    if isinstance(prober, BrowserProber):
        async with prober:
            return await coro_factory()
    return await coro_factory()


def _run_resolve(args: argparse.Namespace, config: ResolverConfig) -> int:
    resolver = UrlResolver(config)
    for reference in args.references:
        sys.stdout.write(resolver.resolve(reference, args.fallback) + "\n")
    sys.stdout.flush()
    return 0


def _run_check(args: argparse.Namespace, config: ResolverConfig) -> int:
    resolver = UrlResolver(config)
    prober = _make_prober(args, config)
    overall_start = time.perf_counter()
    results = asyncio.run(
        _with_prober(prober, lambda: _check_all(args.urls, resolver, prober))
    )
    total_elapsed = time.perf_counter() - overall_start

    for result in results:
        sys.stdout.write(f"{result.url}\t{result.outcome.value}\n")
    sys.stdout.flush()

    reachable = sum(1 for result in results if result.reachable)
    logger.info(
        "Checked %d URLs in %.2fs (%d reachable, %d unreachable)",
        len(results),
        total_elapsed,
        reachable,
        len(results) - reachable,
    )
    return 0 if reachable == len(results) else 1


def _run_select(args: argparse.Namespace, config: ResolverConfig) -> int:
    selector = FallbackSelector(UrlResolver(config), _make_prober(args, config))
    best = asyncio.run(
        _with_prober(
            selector.prober,
            lambda: selector.select_best(args.candidates, args.fallback),
        )
    )
    sys.stdout.write(best + "\n")
    sys.stdout.flush()
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    config = build_config(args)
    if args.command == "resolve":
        return _run_resolve(args, config)
    if args.command == "check":
        return _run_check(args, config)
    return _run_select(args, config)


if __name__ == "__main__":
    sys.exit(main())
