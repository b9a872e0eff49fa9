# mdtty project, MIT license.

"""
Markdown events are the renderer's input. They are produced by an external
markdown parser, one event per start or end of a construct, plus leaf events
for text and line breaks.

For example, ``Hello _world_`` is represented as follows::

    >>> events = [
    ...     Start(Paragraph()),
    ...     Text("Hello "),
    ...     Start(Emphasis()),
    ...     Text("world"),
    ...     End(Emphasis()),
    ...     End(Paragraph()),
    ... ]


Tags
----

.. autoclass:: Paragraph

.. autoclass:: Heading
   :members:

.. autoclass:: BlockQuote

.. autoclass:: CodeBlock
   :members:

.. autoclass:: List
   :members:

.. autoclass:: Item

.. autoclass:: Emphasis

.. autoclass:: Strong

.. autoclass:: Strikethrough

.. autoclass:: Code

.. autoclass:: Link
   :members:

.. autoclass:: LinkType
   :members:


Events
------

.. autoclass:: Start
   :members:

.. autoclass:: End
   :members:

.. autoclass:: Text
   :members:

.. autoclass:: SoftBreak

.. autoclass:: HardBreak

.. autoclass:: Rule


Debugging
---------

.. autofunction:: dump_events

"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from mdtty import _typing as _t

__all__ = [
    "BlockQuote",
    "Code",
    "CodeBlock",
    "Emphasis",
    "End",
    "Event",
    "HardBreak",
    "Heading",
    "Item",
    "Link",
    "LinkType",
    "List",
    "Paragraph",
    "Rule",
    "SoftBreak",
    "Start",
    "Strikethrough",
    "Strong",
    "Tag",
    "Text",
    "dump_events",
]


class LinkType(enum.Enum):
    """
    How a link was written in the source document.

    """

    INLINE = "inline"
    """
    ``[text](target)``.

    """

    REFERENCE = "reference"
    """
    ``[text][label]``.

    """

    COLLAPSED = "collapsed"
    """
    ``[label][]``.

    """

    SHORTCUT = "shortcut"
    """
    ``[label]``.

    """

    AUTOLINK = "autolink"
    """
    ``<http://example.com>``.

    """

    EMAIL = "email"
    """
    ``<john@example.com>``.

    """

    @property
    def is_autolink(self) -> bool:
        """
        Autolinks display their own target, so they need no reference.

        """

        return self in (LinkType.AUTOLINK, LinkType.EMAIL)


@dataclass(frozen=True, slots=True)
class Paragraph:
    """
    A paragraph of text.

    """


@dataclass(frozen=True, slots=True)
class Heading:
    """
    A heading.

    """

    level: int
    """
    Level of the heading, `1`-based.

    """


@dataclass(frozen=True, slots=True)
class BlockQuote:
    """
    A quotation block.

    """


@dataclass(frozen=True, slots=True)
class CodeBlock:
    """
    A block of code, either fenced or indented.

    """

    syntax: str | None = None
    """
    Syntax token from the fence's info string, or :data:`None` for indented
    blocks and fences without info string.

    """

    def __post_init__(self):
        syntax = (self.syntax or "").split(maxsplit=1)
        object.__setattr__(self, "syntax", syntax[0] if syntax else None)


@dataclass(frozen=True, slots=True)
class List:
    """
    A list of items.

    """

    start: int | None = None
    """
    Number of the first item for ordered lists, :data:`None` for bullet lists.

    """


@dataclass(frozen=True, slots=True)
class Item:
    """
    An item of a list.

    """


@dataclass(frozen=True, slots=True)
class Emphasis:
    """
    Emphasized text, usually rendered in italics.

    """


@dataclass(frozen=True, slots=True)
class Strong:
    """
    Strong text, rendered in bold.

    """


@dataclass(frozen=True, slots=True)
class Strikethrough:
    """
    Crossed out text.

    """


@dataclass(frozen=True, slots=True)
class Code:
    """
    An inline code span.

    """


@dataclass(frozen=True, slots=True)
class Link:
    """
    A hyperlink. Events between start and end of a link are the link's text.

    """

    link_type: LinkType
    """
    How the link was written.

    """

    target: str
    """
    Link destination, an absolute URL or a path relative to the document.

    """

    title: str = ""
    """
    Link title, possibly empty.

    """


Tag: _t.TypeAlias = (
    Paragraph
    | Heading
    | BlockQuote
    | CodeBlock
    | List
    | Item
    | Emphasis
    | Strong
    | Strikethrough
    | Code
    | Link
)
"""
Any construct that has a start and an end.

"""


@dataclass(frozen=True, slots=True)
class Start:
    """
    Start of a construct.

    """

    tag: Tag
    """
    The construct being opened.

    """


@dataclass(frozen=True, slots=True)
class End:
    """
    End of a construct.

    """

    tag: Tag
    """
    The construct being closed.

    """


@dataclass(frozen=True, slots=True)
class Text:
    """
    A run of text.

    """

    text: str
    """
    Text contents.

    """


@dataclass(frozen=True, slots=True)
class SoftBreak:
    """
    A line break in the source document.

    """


@dataclass(frozen=True, slots=True)
class HardBreak:
    """
    A forced line break.

    """


@dataclass(frozen=True, slots=True)
class Rule:
    """
    A thematic break.

    """


Event: _t.TypeAlias = Start | End | Text | SoftBreak | HardBreak | Rule
"""
Any markdown event.

"""


def dump_events(stream: _t.TextIO, events: _t.Iterable[Event], /):
    """
    Write every event to the stream, one per line.

    :example:
        ::

            >>> import sys
            >>> dump_events(sys.stdout, [Start(Heading(2)), Text("Hi"), End(Heading(2))])
            Start(tag=Heading(level=2))
            Text(text='Hi')
            End(tag=Heading(level=2))

    """

    for event in events:
        stream.write(f"{event!r}\n")
