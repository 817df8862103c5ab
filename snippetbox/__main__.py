# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Command-line entry point: ``python -m snippetbox``.

Flags override the matching environment settings.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from snippetbox.app import main
from snippetbox.shared.config import load_config


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="snippetbox", description="Snippetbox web server")
    parser.add_argument("--addr", help="HTTP network address, e.g. :4000")
    parser.add_argument("--dsn", help="SQLAlchemy database URL")
    parser.add_argument("--tls-cert", type=Path, help="TLS certificate file")
    parser.add_argument("--tls-key", type=Path, help="TLS private key file")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    return parser.parse_args(argv)


def run(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    config = load_config()

    if args.addr:
        config.addr = args.addr
    if args.dsn:
        config.database.url = args.dsn
    if args.tls_cert:
        config.tls.cert_file = args.tls_cert
    if args.tls_key:
        config.tls.key_file = args.tls_key
    if args.debug:
        config.debug_logging = True

    return main(config)


if __name__ == "__main__":
    sys.exit(run())
