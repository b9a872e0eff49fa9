# mdtty project, MIT license.

"""
Terminals that can't display clickable links get reference-style links instead:
link text is followed by an index, and the link target is printed later,
after the current section.

Pending links are collected by a :class:`LinkBuffer`::

    >>> buffer = LinkBuffer()
    >>> buffer.add("http://example.com/world")
    1
    >>> buffer.add("http://example.com/donald", "Donald")
    2
    >>> buffer.take()
    [Link(index=1, target='http://example.com/world', title=''), Link(index=2, target='http://example.com/donald', title='Donald')]

Indices are never reused, even after the buffer was drained::

    >>> buffer.add("http://example.com/")
    3

.. autoclass:: LinkBuffer
   :members:

.. autoclass:: Link
   :members:

"""

from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "Link",
    "LinkBuffer",
]


@dataclass(frozen=True, slots=True)
class Link:
    """
    A link waiting to be printed as a reference.

    """

    index: int
    """
    Index of the reference, `1`-based.

    """

    target: str
    """
    Link destination.

    """

    title: str
    """
    Link title, possibly empty.

    """


class LinkBuffer:
    """
    An ordered, append-only collection of pending links.

    """

    def __init__(self):
        self._pending: list[Link] = []
        self._next_index: int = 1

    def add(self, target: str, title: str = "", /) -> int:
        """
        Add a link and return its index.

        """

        index = self._next_index
        self._next_index += 1
        self._pending.append(Link(index, target, title))
        return index

    def take(self) -> list[Link]:
        """
        Remove all pending links from the buffer and return them
        in the order they were added.

        """

        links, self._pending = self._pending, []
        return links

    def __len__(self) -> int:
        return len(self._pending)

    def __bool__(self) -> bool:
        return bool(self._pending)

    def __repr__(self) -> str:
        return f"LinkBuffer({self._pending!r}, next_index={self._next_index})"
