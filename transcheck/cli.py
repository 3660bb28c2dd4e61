"""
Command line entry point.

Commands:
    serve         Start the HTTP transport for an editor extension
    check PATH    Load a workspace once and print every missing translation
    init-config   Write the default config.json
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from transcheck.config import Settings, create_default_config, get_config_file, load_config
from transcheck.core.provider import TranslationProvider
from transcheck.core.publisher import DiagnosticsCollector
from transcheck.logger import get_logger
from transcheck.project.workspace import load_workspace

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="transcheck",
        description="Flag i18n identifiers missing from project translation files.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the HTTP transport")
    serve.add_argument("--host", help="Bind address (default from config)")
    serve.add_argument("--port", type=int, help="Port (default from config)")
    serve.add_argument("--debug", action="store_true", help="Enable Flask debug mode")

    check = subparsers.add_parser("check", help="Check a workspace once")
    check.add_argument("workspace", type=Path, help="Directory containing angular.json")

    init = subparsers.add_parser("init-config", help="Write the default config file")
    init.add_argument("--path", type=Path, help=f"Target file (default {get_config_file()})")

    return parser


def run_check(workspace: Path, settings: Settings) -> int:
    """Print diagnostics as ``uri:line:col: warning: message``; 1 when any exist."""
    collector = DiagnosticsCollector()
    provider = TranslationProvider(publisher=collector, settings=settings)
    load_workspace(provider, workspace)

    flagged = collector.all()
    total = 0
    for uri in sorted(flagged):
        for diagnostic in flagged[uri]:
            start = diagnostic.range.start
            print(f"{uri}:{start.line + 1}:{start.character + 1}: warning: {diagnostic.message}")
            total += 1

    if total:
        print(f"{total} missing translation(s) in {len(flagged)} file(s)", file=sys.stderr)
        return 1
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "init-config":
        path = create_default_config(args.path)
        print(f"Wrote {path}")
        return 0

    config = load_config()
    settings = Settings.from_config(config)

    if args.command == "check":
        if not args.workspace.is_dir():
            logger.error(f"Workspace directory not found: {args.workspace}")
            return 2
        return run_check(args.workspace, settings)

    from transcheck.web import create_app

    app = create_app(config)
    server = config.get("server", {})
    app.run(
        host=args.host or server.get("host", "127.0.0.1"),
        port=args.port or server.get("port", 5510),
        debug=args.debug,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
