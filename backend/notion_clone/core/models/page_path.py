"""Materialized page paths and page references.

A page's ``path`` lists the references of its ancestors, root first. On disk it
is stored as a single string in which every reference is wrapped by the
``/`` delimiter and the pieces are joined with ``,``::

    []                  -> None
    ["a-1"]             -> "/,a-1,/"
    ["a-1", "b-2"]      -> "/,a-1,/,b-2,/"

so that "is ``ref`` an ancestor" is the substring test ``"/,ref,/" in path``.
References therefore may not contain ``/`` or ``,``.
"""
from __future__ import annotations

from collections.abc import Iterator, Sequence
from uuid import uuid4

DELIMITER = "/"
SEPARATOR = ","
_FORBIDDEN = (DELIMITER, SEPARATOR)


def _check_token(token: str) -> str:
    if not isinstance(token, str) or not token:
        raise ValueError("Path token must be a non-empty string")
    for char in _FORBIDDEN:
        if char in token:
            raise ValueError(f"Path token {token!r} may not contain {char!r}")
    return token


def segment(reference: str) -> str:
    """The substring that marks ``reference`` as an ancestor inside a path."""
    return f"{DELIMITER}{SEPARATOR}{_check_token(reference)}{SEPARATOR}{DELIMITER}"


class PagePath(Sequence[str]):
    """Immutable ancestor chain of a page. Empty means root page."""

    __slots__ = ("_tokens",)

    def __init__(self, tokens: Sequence[str] = ()) -> None:
        self._tokens: tuple[str, ...] = tuple(_check_token(t) for t in tokens)

    @classmethod
    def parse(cls, raw: str | None) -> PagePath:
        if raw is None or raw == "":
            return cls()
        pieces = raw.split(SEPARATOR)
        if len(pieces) < 3 or len(pieces) % 2 == 0:
            raise ValueError(f"Malformed page path {raw!r}")
        tokens = []
        for index, piece in enumerate(pieces):
            if index % 2 == 0:
                if piece != DELIMITER:
                    raise ValueError(f"Malformed page path {raw!r}")
            else:
                tokens.append(piece)
        return cls(tokens)

    def serialize(self) -> str | None:
        if not self._tokens:
            return None
        pieces = [DELIMITER]
        for token in self._tokens:
            pieces.extend([token, DELIMITER])
        return SEPARATOR.join(pieces)

    @property
    def is_root(self) -> bool:
        return not self._tokens

    def child(self, reference: str) -> PagePath:
        """Path of a page whose parent has this path and ``reference``."""
        return PagePath((*self._tokens, reference))

    def contains(self, reference: str) -> bool:
        return reference in self._tokens

    def replace(self, old: str, new: str) -> PagePath:
        """Swap ancestor ``old`` for ``new``, used when a page is renamed."""
        return PagePath(new if token == old else token for token in self._tokens)

    def __getitem__(self, index):
        return self._tokens[index]

    def __len__(self) -> int:
        return len(self._tokens)

    def __iter__(self) -> Iterator[str]:
        return iter(self._tokens)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, PagePath):
            return self._tokens == other._tokens
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._tokens)

    def __repr__(self) -> str:
        return f"PagePath({list(self._tokens)!r})"


def _slugify(title: str) -> str:
    # Naive on purpose: words split on single spaces, no URL encoding.
    slug = "-".join(title.split(" "))
    for char in _FORBIDDEN:
        slug = slug.replace(char, "")
    return slug


def make_reference(title: str) -> str:
    """Build a fresh reference: title slug plus a unique dash-free suffix."""
    return f"{_slugify(title)}-{uuid4().hex}"


def reference_suffix(reference: str) -> str:
    return reference.rsplit("-", 1)[-1]


def rename_reference(reference: str, title: str) -> str:
    """Keep the unique suffix of ``reference`` and swap in the new title slug."""
    return f"{_slugify(title)}-{reference_suffix(reference)}"
