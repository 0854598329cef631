from __future__ import annotations

import warnings

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning, XMLParsedAsHTMLWarning


def _text_nodes(comment: str) -> list[str]:
    if not comment:
        return []
    # Truncated emoji leave lone surrogates that cannot be encoded for the parser
    comment = comment.encode("utf-8", "replace").decode("utf-8")
    with warnings.catch_warnings():
        # Comments like "image.png" or "<?xml ..." are still HTML fragments to us
        warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
        warnings.simplefilter("ignore", XMLParsedAsHTMLWarning)
        # lxml recovers from unclosed and unknown tags; markup comments are not text
        soup = BeautifulSoup(comment, "lxml")
    return [str(s) for s in soup.strings]


def teaser(comment: str) -> str:
    """Return the first text node of a comment, or "" if it has none."""
    nodes = _text_nodes(comment)
    return nodes[0] if nodes else ""


def body(comment: str) -> str:
    """
    Return all text nodes of a comment joined with newlines.

    Tags add no text of their own, so "<span>a</span><br><span>b</span>"
    renders as "a\\nb".
    """
    return "\n".join(_text_nodes(comment))
