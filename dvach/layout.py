from __future__ import annotations

import textwrap

DEFAULT_WIDTH = 80
INDENT = "  "


def wrap_lines(text: str, width: int = DEFAULT_WIDTH) -> list[str]:
    """
    Greedy word-wrap keeping existing line breaks.

    Words longer than `width` stay whole on their own line.
    """
    if width <= 0:
        raise ValueError("width must be > 0")

    out: list[str] = []
    for line in text.split("\n"):
        # Lines that fit are kept byte for byte
        if len(line) <= width:
            out.append(line)
            continue
        wrapped = textwrap.wrap(
            line,
            width=width,
            expand_tabs=False,
            replace_whitespace=False,
            break_long_words=False,
            break_on_hyphens=False,
        )
        out.extend(wrapped or [""])
    return out


def layout(text: str, width: int = DEFAULT_WIDTH, indent: str = INDENT) -> str:
    """Wrap `text` to `width` columns and prefix every line with `indent`."""
    return "\n".join(indent + line for line in wrap_lines(text, width))
