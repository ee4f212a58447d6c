"""Command line entrypoint: run the API, browse news or request a transcript."""

from __future__ import annotations

import argparse
import logging
import os
import sys

from dotenv import load_dotenv

from newsdesk.client import TranscriberClient
from newsdesk.config import ConfigError, Settings
from newsdesk.logging_config import configure_logging
from newsdesk.models import InputMode, View
from newsdesk.news import ALL_CHANNELS, load_store
from newsdesk.session import AppState

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Newsdesk: news browser and media transcriber")
    parser.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging verbosity (default: LOG_LEVEL or INFO)",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("serve", help="Run the API server")

    news = sub.add_parser("news", help="List articles")
    news.add_argument("--channel", default=ALL_CHANNELS, help="Channel id, or 'all'")
    news.add_argument("--query", default="", help="Search title and content")

    transcribe = sub.add_parser("transcribe", help="Transcribe a YouTube video or a local file")
    source = transcribe.add_mutually_exclusive_group(required=True)
    source.add_argument("--url", help="YouTube video URL")
    source.add_argument("--file", help="Path to an audio or video file")
    transcribe.add_argument(
        "--server",
        default=os.environ.get("NEWSDESK_URL", "http://localhost:8080"),
        help="Base URL of the Newsdesk API",
    )
    return parser.parse_args(argv)


def render_segments(segments) -> str:
    return "".join(f"[{s.text}]" if s.highlighted else s.text for s in segments)


def cmd_news(state: AppState, settings: Settings, channel: str, search: str) -> int:
    store = load_store(settings.news_data_path)
    state.switch_view(View.NEWS)
    state.news.active_channel = channel
    state.news.search_query = search
    results = state.news.refresh(store)
    if not results:
        print("No matching news found. Try another channel or keyword.")
        return 0
    for item in results:
        print(f"{item.article.date}  {item.channel_name}")
        print(f"  {render_segments(item.title_segments)}")
        print(f"  {render_segments(item.snippet_segments)}")
    return 0


def cmd_transcribe(state: AppState, settings: Settings, args: argparse.Namespace) -> int:
    client = TranscriberClient(args.server, max_upload_bytes=settings.max_upload_bytes)
    form = state.transcriber
    state.switch_view(View.TRANSCRIBER)
    if args.url:
        form.switch_mode(InputMode.URL)
        form.set_url(args.url)
    else:
        form.switch_mode(InputMode.FILE)
        form.select_file(args.file)
    if not form.submit(client):
        print(form.error or "No transcript returned.", file=sys.stderr)
        return 1
    print(form.transcript)
    return 0


def main(argv: list[str] | None = None) -> int:
    load_dotenv(override=False)
    args = parse_args(argv)
    configure_logging(level=args.log_level)
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        return 1
    state = AppState()

    if args.command == "serve":
        from newsdesk.main import run  # lazy import, starts the app

        run()
        return 0
    if args.command == "news":
        return cmd_news(state, settings, args.channel, args.query)
    return cmd_transcribe(state, settings, args)


if __name__ == "__main__":  # pragma: no cover - script entrypoint
    raise SystemExit(main())
