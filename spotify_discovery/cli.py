"""Command-line entrypoint: authorize in the browser, then run discovery once."""

import argparse
from dataclasses import replace
import logging
import sys
from typing import List, Optional
import webbrowser

from spotify_discovery.config import SPOTIFY_CLIENT_ID
from spotify_discovery.core import (
    AuthorizationError,
    configure_logging,
    log_error,
    log_info,
    log_section,
    log_step,
    log_warning,
    write_json,
)
from spotify_discovery.pipeline import (
    DiscoverySettings,
    LoggingDisplay,
    PipelineOrchestrator,
)
from spotify_discovery.spotify import (
    SessionCredentialStore,
    build_authorize_url,
    parse_token_fragment,
)

EXIT_OK = 0
EXIT_FAILED = 1
EXIT_CONFIG = 2


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="python -m spotify_discovery",
        description="Find user-curated Spotify playlists from your listening taste.",
    )
    parser.add_argument(
        "--fanout",
        type=int,
        default=None,
        metavar="N",
        help="Number of recommended tracks to search playlists for (default: 5)",
    )
    parser.add_argument(
        "--min-tracks",
        type=int,
        default=None,
        metavar="N",
        help="Minimum playlist size to keep (default: 20)",
    )
    parser.add_argument(
        "--market",
        default=None,
        metavar="CC",
        help="Market / region filter, e.g. FR",
    )
    parser.add_argument(
        "--token-url",
        default=None,
        metavar="URL",
        help="Redirect URL (with #access_token=...) from a previous authorization",
    )
    parser.add_argument(
        "--output",
        default=None,
        metavar="FILE",
        help="Write the discovery result as JSON",
    )
    parser.add_argument(
        "--no-browser",
        action="store_true",
        help="Only print the authorization URL",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    return parser


def _settings_from_args(args: argparse.Namespace) -> DiscoverySettings:
    settings = DiscoverySettings()
    overrides = {}
    if args.fanout is not None:
        overrides["search_fanout_limit"] = max(args.fanout, 0)
    if args.min_tracks is not None:
        overrides["min_playlist_tracks"] = max(args.min_tracks, 0)
    if args.market:
        overrides["market"] = args.market.upper()
    return replace(settings, **overrides)


def _obtain_credential(
    args: argparse.Namespace, session: SessionCredentialStore
) -> None:
    redirect = args.token_url
    if not redirect:
        auth_url = build_authorize_url()
        log_step("Open the following URL in a browser and authorize the application:")
        log_info(auth_url)
        if not args.no_browser:
            try:
                webbrowser.open(auth_url)
            except webbrowser.Error as e:
                log_warning(
                    f"Could not open a browser ({e}), open the URL above manually."
                )
        redirect = input("→ Paste the full redirect URL here: ").strip()

    session.store(parse_token_fragment(redirect))


def main(argv: Optional[List[str]] = None) -> int:
    args = create_parser().parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else logging.INFO)

    if not SPOTIFY_CLIENT_ID and not args.token_url:
        log_error("Please set SPOTIFY_CLIENT_ID in the .env file.")
        return EXIT_CONFIG

    log_section("Spotify playlist discovery")
    session = SessionCredentialStore()
    try:
        _obtain_credential(args, session)
    except AuthorizationError as e:
        log_error(str(e))
        return EXIT_CONFIG

    orchestrator = PipelineOrchestrator(
        display=LoggingDisplay(),
        settings=_settings_from_args(args),
    )
    result = orchestrator.run(session)

    if args.output:
        path = write_json(args.output, result.model_dump(mode="json"))
        log_info(f"Result written to {path}")

    return EXIT_OK if result.succeeded else EXIT_FAILED


if __name__ == "__main__":
    sys.exit(main())
