"""
dvach: a terminal client for the 2ch.hk imageboard.

Usage:
    dvach                  # browse boards interactively
    dvach --list           # print all boards
    dvach pr               # print threads of the "pr" board
    dvach pr 1299618       # print posts of a thread
    dvach --download /pr/src/1299618/15.png > 15.png
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from rich.console import Console
from rich.text import Text

from dvach.api import DvachApi
from dvach.errors import DvachError
from dvach.formatting import board_row, download_command, post_header
from dvach.http_client import HttpClient, HttpConfig
from dvach.layout import INDENT, layout
from dvach.navigation import NavigationStack
from dvach.render import body, teaser
from dvach.settings import ClientSettings, load_settings

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"


def build_parser(settings: ClientSettings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="dvach",
        description="Terminal client for the 2ch.hk imageboard.",
    )
    parser.add_argument("board", nargs="?", help="board to list, e.g. pr")
    parser.add_argument("thread", nargs="?", type=int, help="thread to show")
    parser.add_argument(
        "-w",
        "--comment-width",
        type=int,
        default=settings.comment_width,
        help="width of comments before wrapping (default: %(default)s)",
    )
    parser.add_argument(
        "--base-url",
        default=settings.base_url,
        help="service root (default: %(default)s)",
    )
    parser.add_argument(
        "--download",
        metavar="PATH",
        help="download a file by its relative path and write it to stdout",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="print boards instead of starting the interactive browser",
    )
    return parser


def configure_logging(settings: ClientSettings, interactive: bool) -> None:
    level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    if settings.log_file:
        logging.basicConfig(level=level, format=LOG_FORMAT, filename=settings.log_file)
    elif interactive:
        # stderr belongs to the curses screen for the whole session
        logging.basicConfig(level=level, handlers=[logging.NullHandler()])
    else:
        logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.captureWarnings(True)


def build_api(settings: ClientSettings) -> DvachApi:
    http = HttpClient(
        HttpConfig(
            timeout_sec=settings.request_timeout_sec,
            user_agent=settings.user_agent,
        )
    )
    return DvachApi(base_url=settings.base_url, http=http)


def print_boards(api: DvachApi, console: Console) -> None:
    for board in api.fetch_boards():
        console.print(Text(board_row(board)), soft_wrap=True)


def print_threads(api: DvachApi, board_id: str, width: int, console: Console) -> None:
    for thread in api.fetch_threads(board_id):
        console.print(
            Text.assemble((thread.id, "blue"), " ", thread.subject),
            soft_wrap=True,
        )
        console.print(Text(layout(teaser(thread.comment), width)), soft_wrap=True)


def print_posts(api: DvachApi, board_id: str, thread_id: int, width: int, console: Console) -> None:
    for post in api.fetch_posts(board_id, thread_id):
        id_part, date_part = post_header(post).split(" ", 1)
        console.print(Text.assemble((id_part, "blue"), " ", (date_part, "green")), soft_wrap=True)
        for image in post.images:
            console.print(Text.assemble(INDENT, (image.fullname, "yellow")), soft_wrap=True)
            console.print(Text(INDENT + download_command(image)), soft_wrap=True)
        console.print(Text(layout(body(post.comment), width)), soft_wrap=True)


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = load_settings()
    args = build_parser(settings).parse_args(argv)

    if args.comment_width <= 0:
        print("dvach: --comment-width must be > 0", file=sys.stderr)
        return 2

    settings = settings.model_copy(
        update={"base_url": args.base_url, "comment_width": args.comment_width}
    )
    interactive = args.download is None and args.board is None and not args.list
    configure_logging(settings, interactive)
    logger.debug("Got args: %s", args)

    api = build_api(settings)
    console = Console(highlight=False)

    try:
        if args.download is not None:
            api.download(args.download, sys.stdout.buffer)
        elif interactive:
            # Imported here so listing modes work where curses is unavailable
            from dvach.tui import run_session

            run_session(NavigationStack(api, comment_width=settings.comment_width))
        elif args.board is None:
            print_boards(api, console)
        elif args.thread is None:
            print_threads(api, args.board, settings.comment_width, console)
        else:
            print_posts(api, args.board, args.thread, settings.comment_width, console)
    except DvachError as e:
        logger.error("Fatal: %s", e)
        print(f"dvach: {e}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        return 130
    return 0
