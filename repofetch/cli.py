#!/usr/bin/env python3
"""
Command-line entry point for one-shot retrieval.

Usage:
    repofetch https://repo.example.org/maven2 .index/nexus-maven-repository-index.gz
    repofetch file:///srv/repo index.properties -o -
    repofetch https://repo.example.org/private a.jar --username u --password p

Exit codes:
    0  resource retrieved
    1  connection or transfer failure
    2  resource does not exist
"""

import argparse
import logging
import shutil
import sys
from pathlib import Path
from urllib.parse import urlparse

from repofetch.core.config.loader import ConfigurationError, get_fetcher_config
from repofetch.core.fetchers.exceptions import FetchError
from repofetch.core.fetchers.factory import FetcherFactory
from repofetch.core.transport.base import AuthInfo, ProxyInfo
from repofetch.core.transport.listener import LoggingTransferListener

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_NOT_FOUND = 2


def setup_logging(verbose: bool) -> None:
    """
    Configure logging for the command.

    Args:
        verbose: Log at DEBUG instead of INFO.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def parse_proxy(value: str) -> ProxyInfo:
    """Parse HOST:PORT into ProxyInfo."""
    host, sep, port = value.rpartition(":")
    if not sep or not host or not port.isdigit():
        raise argparse.ArgumentTypeError(f"Expected HOST:PORT, got {value!r}")
    return ProxyInfo(host=host, port=int(port))


def protocol_for(url: str) -> str:
    """Protocol name for url. Plain paths map to "file"."""
    scheme = urlparse(url).scheme.lower()
    if not scheme or len(scheme) == 1:
        # no scheme, or a Windows drive letter
        return "file"
    return scheme


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="repofetch",
        description="Retrieve a single resource from a repository.",
    )
    parser.add_argument("url", help="Repository base URL or directory")
    parser.add_argument("name", help="Resource name relative to the repository")
    parser.add_argument(
        "-o", "--output",
        help="Target file, or '-' for stdout (default: resource base name)",
    )
    parser.add_argument("--id", default="remote", help="Repository id used in messages")
    parser.add_argument("--username", help="Username for basic authentication")
    parser.add_argument("--password", help="Password for basic authentication")
    parser.add_argument("--proxy", type=parse_proxy, help="Proxy as HOST:PORT")
    parser.add_argument("--config-dir", help="Directory holding fetcher*.yaml")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    try:
        factory = FetcherFactory.from_config(get_fetcher_config(args.config_dir))
    except ConfigurationError as e:
        logger.error(f"Configuration error: {e}")
        return EXIT_FAILED

    auth = None
    if args.username is not None:
        auth = AuthInfo(username=args.username, password=args.password)

    try:
        fetcher = factory.get_resource_fetcher(
            LoggingTransferListener(),
            auth_info=auth,
            proxy_info=args.proxy,
            protocol=protocol_for(args.url),
        )
    except ValueError as e:
        logger.error(str(e))
        return EXIT_FAILED

    try:
        with fetcher.connected(args.id, args.url):
            if args.output == "-":
                with fetcher.retrieve(args.name) as stream:
                    shutil.copyfileobj(stream, sys.stdout.buffer)
                sys.stdout.buffer.flush()
            else:
                target = Path(args.output or Path(args.name).name)
                fetcher.retrieve_to(args.name, target)
                logger.info(f"Saved {args.name} to {target}")
    except FetchError as e:
        logger.error(str(e))
        return EXIT_NOT_FOUND if e.is_not_found else EXIT_FAILED

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
