from __future__ import annotations

from dvach.layout import INDENT, layout
from dvach.models import Board, Image, Post, Thread
from dvach.render import body, teaser


def board_label(board: Board) -> str:
    return f"{board.id} {board.name}"


def board_row(board: Board) -> str:
    """Fixed-width row used by the plain boards listing."""
    return f"{board.id:>10} {board.category:20} {board.name}"


def thread_label(thread: Thread) -> str:
    # One screen row per entry
    return f"{thread.id} {' '.join(teaser(thread.comment).split())}"


def post_header(post: Post) -> str:
    return f"{post.id} {post.date}"


def download_command(image: Image) -> str:
    """Shell command fetching the image with this tool and opening it."""
    return f"dvach --download {image.path} > {image.name} && xdg-open {image.name}"


def format_image(image: Image) -> str:
    return f"{INDENT}{image.fullname}\n{INDENT}{download_command(image)}"


def format_post(post: Post, width: int) -> str:
    """
    Render a post as a display block:

        <id> <date>
          <image fullname>
          dvach --download <path> > <name> && xdg-open <name>
          <wrapped body...>
    """
    parts = [post_header(post)]
    parts.extend(format_image(image) for image in post.images)
    parts.append(layout(body(post.comment), width))
    return "\n".join(parts)
