from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Board:
    """Board from the boards listing, e.g. id="pr"."""

    id: str
    category: str
    name: str


@dataclass(frozen=True)
class Thread:
    """Thread from a board catalog. `comment` is the opening post's markup."""

    id: str
    subject: str
    comment: str


@dataclass(frozen=True)
class Image:
    """Image attached to a post."""

    # Name generated by the board
    name: str
    # Original file name
    fullname: str
    # Path relative to the service root
    path: str


@dataclass(frozen=True)
class Post:
    """Single post of a thread."""

    id: int
    comment: str
    date: str
    images: tuple[Image, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class ListEntry:
    label: str
    key: str
