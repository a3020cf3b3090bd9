"""Command-line interface for the folderproxy gateway.

Run as::

    folderproxy -base ~/Projects -token foo -port 1234

and put a link onto a web page::

    http://localhost:1234/open?name=subDir&token=foo

When the link is fetched by the browser, ~/Projects/subDir is opened in
the local file manager.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Unset options stay None so configuration files and environment
    variables can supply them.
    """
    parser = argparse.ArgumentParser(
        prog="folderproxy",
        description="Open local folders in the file manager via links from the browser",
    )
    parser.add_argument(
        "-base", "--base",
        type=Path,
        default=None,
        help="Base directory for allowed paths (default: .)",
    )
    parser.add_argument(
        "-port", "--port",
        type=int,
        default=None,
        help="Port to listen on (default: 4455)",
    )
    parser.add_argument(
        "-token", "--token",
        type=str,
        default=None,
        help="Secret token to check for (&token=...) in requests (default: none)",
    )
    parser.add_argument(
        "--allow-parent-traversal",
        action="store_true",
        help="Accept names such as '../other' that resolve outside the base directory",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to YAML configuration file (default: config/folderproxy.yaml)",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the folderproxy CLI."""
    args = parse_args(argv)

    from folderproxy.config.settings import ConfigError, build_gateway_config, load_settings
    from folderproxy.utils.logging import setup_logging

    try:
        settings = load_settings(
            args.config,
            base_path=args.base,
            port=args.port,
            token=args.token,
            confine_to_base=False if args.allow_parent_traversal else None,
        )
    except (ConfigError, ValidationError) as e:
        print(f"Error in configuration: {e}")
        sys.exit(1)

    if args.verbose:
        settings.logging.level = "DEBUG"

    setup_logging(settings.logging)

    try:
        config = build_gateway_config(settings)
    except ConfigError as e:
        print(f"Error: {e}")
        sys.exit(1)

    if not config.confine_to_base:
        logger.warning("Parent traversal enabled: names may resolve outside %s", config.base_path)
    if not config.auth_enabled:
        logger.warning("No token configured: any web page can trigger the gateway")

    token = config.token.get_secret_value()
    print(f"Base path: {config.base_path}")
    print(f"Listening on http://localhost:{config.port}")
    print(f"Example:\n http://localhost:{config.port}/open?name=.&token={token}")

    from folderproxy.gateway.server import main as serve
    from folderproxy.launcher.command import launcher_for_platform

    logger.info("Starting gateway server")
    serve(config, launcher_for_platform())


if __name__ == "__main__":
    main()
