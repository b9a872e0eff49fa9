# mdtty project, MIT license.

"""
Render markdown events to a terminal.

Rendering is a single pass over the events. The renderer keeps no lookahead;
everything it needs to know about the current context is stored in a state
value. Every nested state owns the state it returns to when it ends,
so the chain of states works as a stack.

.. autofunction:: render

.. autofunction:: render_to_string

.. autoclass:: Renderer
   :members:

.. autoclass:: ImpossibleEventError
   :members:


Rendering states
----------------

.. autoclass:: TopLevel
   :members:

.. autoclass:: Inline
   :members:

.. autoclass:: InlineMode
   :members:

.. autoclass:: StyledBlock
   :members:

.. autoclass:: HighlightBlock
   :members:

.. autoclass:: ListBlock
   :members:

"""

from __future__ import annotations

import dataclasses
import enum
import io
import pathlib
import urllib.parse
from dataclasses import dataclass

import mdtty
import mdtty.hl
import mdtty.links
import mdtty.term
from mdtty import _typing as _t
from mdtty.color import Color
from mdtty.config import Settings
from mdtty.events import (
    BlockQuote,
    Code,
    CodeBlock,
    Emphasis,
    End,
    Event,
    HardBreak,
    Heading,
    Item,
    Link,
    List,
    Paragraph,
    Rule,
    SoftBreak,
    Start,
    Strikethrough,
    Strong,
    Tag,
    Text,
)

__all__ = [
    "HighlightBlock",
    "ImpossibleEventError",
    "Inline",
    "InlineMode",
    "ListBlock",
    "Renderer",
    "State",
    "StyledBlock",
    "TopLevel",
    "render",
    "render_to_string",
]

_HEADING_STYLE = Color.FORE_BLUE | Color.STYLE_BOLD
_QUOTE_STYLE = Color.FORE_GREEN | Color.STYLE_ITALIC
_CODE_STYLE = Color.FORE_YELLOW
_RULE_STYLE = Color.FORE_GREEN
_LINK_STYLE = Color.FORE_BLUE

_HEADING_ADORNMENT = "┄"
_RULE = "═"
_BORDER = "─"
_BULLET = "•"

_QUOTE_INDENT = 4
_BORDER_MAX_WIDTH = 20


class ImpossibleEventError(RuntimeError):
    """
    Raised when an event can't occur in the current rendering state.

    This indicates a bug in the markdown parser that produced the events
    (or in the renderer), not a problem with the markdown document.

    """

    def __init__(self, state: State, event: Event | None, /):
        self.state: State = state
        """
        Rendering state at the moment of failure.

        """

        self.event: Event | None = event
        """
        The offending event, or :data:`None` if the event stream ended
        in a state other than :class:`TopLevel`.

        """

        if event is None:
            msg = f"must finish in state TopLevel but got: {state!r}"
        else:
            msg = (
                f"event {event!r} impossible in state {state!r}\n\n"
                "Please report an issue including a copy of this message, "
                "and the markdown document which caused this error."
            )
        super().__init__(msg)


class InlineMode(enum.Enum):
    """
    What kind of inline text we're in.

    """

    PLAIN_INLINE_TEXT = enum.auto()
    """
    Regular inline text without any particular implications.

    Closing a link in this mode writes a link reference.

    """

    INLINE_LINK = enum.auto()
    """
    Text of a link that was opened as a clickable hyperlink.

    Closing a link in this mode closes the hyperlink, no reference is written.

    """

    LIST_ITEM_LEAD_TEXT = enum.auto()
    """
    First line of a list item.

    Unlike other modes, this one permits block level events: a paragraph start
    means that the list item contains multiple paragraphs.

    """


@dataclass(frozen=True, slots=True)
class TopLevel:
    """
    At top level, waiting for the next block. This is the initial
    and the final state.

    """

    margin_before: bool = False
    """
    If true, the next block must be preceded by an empty line.

    """


@dataclass(frozen=True, slots=True)
class Inline:
    """
    Inside running text.

    """

    return_to: State
    """
    State to return to when this inline ends.

    """

    mode: InlineMode
    """
    What kind of inline text this is.

    """

    style: Color
    """
    Style for the text.

    """

    indent: int
    """
    Indent after line breaks.

    """

    opened_by: type[Tag]
    """
    Construct that started this inline: a paragraph, a heading, an inline
    style, a link, or a list item for lead text. Only the matching end event
    closes the inline.

    """

    emphasis_depth: int = 0
    """
    Number of emphasis levels we're in. Text is italic when this number is odd.

    """


@dataclass(frozen=True, slots=True)
class StyledBlock:
    """
    A block with uniform style and indent, such as a quote, or a list item
    with multiple paragraphs.

    """

    return_to: State
    """
    State to return to when this block ends.

    """

    margin_before: bool
    """
    If true, the next block must be preceded by an empty line.

    """

    indent: int
    """
    Indent of the block's contents.

    """

    style: Color
    """
    Style of the block's contents.

    """

    opened_by: type[Tag]
    """
    Construct that started this block: a block quote, or a list item.

    """


@dataclass(frozen=True, slots=True)
class HighlightBlock:
    """
    Inside a code block.

    """

    return_to: State
    """
    State to return to when this block ends.

    """

    syntax_token: str | None
    """
    Syntax token from the code fence.

    """

    indent: int = 0
    """
    Indent of every code line.

    """

    highlighter: mdtty.hl.HighlightLines | None = dataclasses.field(
        default=None, compare=False, repr=False
    )
    """
    Highlighter for this block, or :data:`None` if code is written
    in a fixed color.

    """


@dataclass(frozen=True, slots=True)
class ListBlock:
    """
    Between list items.

    """

    return_to: State
    """
    State to return to when the list ends.

    """

    number: int | None
    """
    Number of the next item for ordered lists, :data:`None` for bullet lists.

    """

    indent: int
    """
    Indent of item bullets.

    """

    style: Color
    """
    Style of items' text.

    """

    newline_before: bool = False
    """
    If true, the next item must start on a new line.

    """

    def to_next_item(self) -> ListBlock:
        return dataclasses.replace(
            self,
            number=self.number + 1 if self.number is not None else None,
            newline_before=True,
        )


State: _t.TypeAlias = TopLevel | Inline | StyledBlock | HighlightBlock | ListBlock
"""
Any rendering state.

"""


def _emphasis_depth(style: Color) -> int:
    # Text that is already italic counts as emphasized once,
    # so that emphasis inside a quote renders upright.
    return 1 if style.italic else 0


class Renderer:
    """
    Renders markdown events to a stream.

    :param stream:
        stream to write to.
    :param settings:
        settings for rendering, see :class:`~mdtty.config.Settings`.
    :param base_dir:
        directory of the markdown document, used to resolve relative link
        targets. Default is the current working directory.

    """

    def __init__(
        self,
        stream: _t.TextIO,
        settings: Settings | None = None,
        base_dir: str | pathlib.Path | None = None,
    ):
        self._stream = stream
        self._settings = settings if settings is not None else Settings()
        self._capabilities = self._settings.terminal_capabilities
        self._base_dir = (
            pathlib.Path(base_dir) if base_dir is not None else pathlib.Path.cwd()
        )
        self._links = mdtty.links.LinkBuffer()

    def process(self, state: State, event: Event, /) -> State:
        """
        Render a single event and return the next state.

        :raises:
            :class:`ImpossibleEventError` if the event can't occur
            in the given state.

        """

        mdtty._logger.debug("%s <- %r", state.__class__.__name__, event)
        return getattr(self, f"_process_{state.__class__.__name__}")(state, event)

    def finish(self, state: State, /):
        """
        Finish rendering, and write all pending link references.

        :raises:
            :class:`ImpossibleEventError` if the state is not :class:`TopLevel`.

        """

        if type(state) is not TopLevel:
            raise self._impossible(state, None)
        self._write_link_refs()

    def _impossible(self, state: State, event: Event | None) -> ImpossibleEventError:
        err = ImpossibleEventError(state, event)
        mdtty._logger.error("%s", err)
        return err

    def _process_TopLevel(self, state: TopLevel, event: Event) -> State:
        match event:
            case Start(Paragraph()):
                self._write_margin(state.margin_before)
                return Inline(
                    TopLevel(margin_before=True),
                    InlineMode.PLAIN_INLINE_TEXT,
                    Color.NONE,
                    0,
                    Paragraph,
                )
            case Start(Heading(level)):
                self._write_link_refs()
                self._write_margin(state.margin_before)
                mdtty.term.set_mark(self._stream, self._capabilities)
                self._write_styled(_HEADING_STYLE, _HEADING_ADORNMENT * level)
                return Inline(
                    TopLevel(margin_before=True),
                    InlineMode.PLAIN_INLINE_TEXT,
                    _HEADING_STYLE,
                    0,
                    Heading,
                )
            case Start(BlockQuote()):
                self._write_margin(state.margin_before)
                # The margin before the quote is written already, so the first
                # block inside the quote shouldn't add another one.
                return StyledBlock(
                    TopLevel(margin_before=True),
                    margin_before=False,
                    indent=_QUOTE_INDENT,
                    style=_QUOTE_STYLE,
                    opened_by=BlockQuote,
                )
            case Rule():
                self._write_link_refs()
                self._write_margin(state.margin_before)
                self._write_rule(self._settings.terminal_size.width)
                return TopLevel(margin_before=True)
            case Start(CodeBlock(syntax)):
                self._write_link_refs()
                self._write_margin(state.margin_before)
                self._write_border(0)
                return HighlightBlock(
                    TopLevel(margin_before=True),
                    syntax,
                    highlighter=self._get_highlighter(syntax),
                )
            case Start(List(start)):
                self._write_link_refs()
                self._write_margin(state.margin_before)
                return ListBlock(
                    TopLevel(margin_before=True),
                    start,
                    indent=0,
                    style=Color.NONE,
                )
            case _:
                raise self._impossible(state, event)

    def _process_Inline(self, state: Inline, event: Event) -> State:
        is_lead_text = state.mode is InlineMode.LIST_ITEM_LEAD_TEXT
        closes = isinstance(event, End) and type(event.tag) is state.opened_by

        match event:
            case Start(Paragraph()) if is_lead_text:
                # The list item contains multiple paragraphs. The first one
                # continues right after the bullet, subsequent ones are
                # treated as regular nested blocks.
                return dataclasses.replace(
                    state,
                    return_to=StyledBlock(
                        state.return_to,
                        margin_before=True,
                        indent=state.indent,
                        style=state.style,
                        opened_by=Item,
                    ),
                    mode=InlineMode.PLAIN_INLINE_TEXT,
                    opened_by=Paragraph,
                )
            case Start(List(start)) if is_lead_text:
                self._writeln()
                return ListBlock(
                    state,
                    start,
                    indent=state.indent,
                    style=state.style,
                )
            case (
                Start(BlockQuote() | CodeBlock() | Heading()) | Rule()
            ) if is_lead_text:
                # Some other block in a list item: end the item's first line
                # and continue as a block with the item's indent.
                self._writeln()
                block = StyledBlock(
                    state.return_to,
                    margin_before=False,
                    indent=state.indent,
                    style=state.style,
                    opened_by=Item,
                )
                return self._process_StyledBlock(block, event)
            case Start(Emphasis()):
                depth = state.emphasis_depth + 1
                return self._nested_inline(
                    state,
                    Emphasis,
                    state.style | Color(italic=depth % 2 == 1),
                    depth,
                )
            case Start(Strong()):
                return self._nested_inline(
                    state, Strong, state.style | Color.STYLE_BOLD
                )
            case Start(Strikethrough()):
                return self._nested_inline(
                    state, Strikethrough, state.style | Color.STYLE_STRIKETHROUGH
                )
            case Start(Code()):
                return self._nested_inline(state, Code, state.style | _CODE_STYLE)
            case End(Emphasis() | Strong() | Strikethrough() | Code()) if closes:
                return state.return_to
            case Start(Link(_, target)) if state.mode is not InlineMode.INLINE_LINK:
                style = state.style | _LINK_STYLE
                if (
                    self._capabilities.links is mdtty.term.LinkCapability.OSC8
                    and (url := self._resolve_url(target)) is not None
                ):
                    mdtty.term.set_link_url(self._stream, url)
                    return self._nested_inline(
                        state, Link, style, mode=InlineMode.INLINE_LINK
                    )
                # We'll write a link reference when the link ends.
                return self._nested_inline(state, Link, style)
            case End(Link()) if closes and state.mode is InlineMode.INLINE_LINK:
                mdtty.term.clear_link(self._stream)
                return state.return_to
            case End(Link(link_type)) if (
                closes
                and state.mode is InlineMode.PLAIN_INLINE_TEXT
                and link_type.is_autolink
            ):
                # Text of an autolink is its target, no need for a reference.
                return state.return_to
            case End(Link(_, target, title)) if (
                closes and state.mode is InlineMode.PLAIN_INLINE_TEXT
            ):
                index = self._links.add(target, title)
                self._write_styled(state.style | _LINK_STYLE, f"[{index}]")
                return state.return_to
            case Text(text):
                self._write_styled(state.style, text)
                return state
            case SoftBreak() | HardBreak():
                self._writeln()
                self._write_indent(state.indent)
                return state
            case End(Paragraph() | Heading()) if closes:
                self._writeln()
                return state.return_to
            case End(Item()) if closes:
                return state.return_to
            case _:
                raise self._impossible(state, event)

    def _process_StyledBlock(self, state: StyledBlock, event: Event) -> State:
        match event:
            case Start(Paragraph()):
                self._write_margin(state.margin_before)
                self._write_indent(state.indent)
                return Inline(
                    dataclasses.replace(state, margin_before=True),
                    InlineMode.PLAIN_INLINE_TEXT,
                    state.style,
                    state.indent,
                    Paragraph,
                    _emphasis_depth(state.style),
                )
            case Rule():
                self._write_margin(state.margin_before)
                self._write_indent(state.indent)
                self._write_rule(self._settings.terminal_size.width - state.indent)
                return dataclasses.replace(state, margin_before=True)
            case Start(Heading(level)):
                self._write_margin(state.margin_before)
                self._write_indent(state.indent)
                # Only top level headings get marks.
                style = state.style | Color.STYLE_BOLD
                self._write_styled(style, _HEADING_ADORNMENT * level)
                return Inline(
                    dataclasses.replace(state, margin_before=True),
                    InlineMode.PLAIN_INLINE_TEXT,
                    style,
                    state.indent,
                    Heading,
                    _emphasis_depth(style),
                )
            case Start(List(start)):
                self._write_margin(state.margin_before)
                return ListBlock(
                    dataclasses.replace(state, margin_before=True),
                    start,
                    indent=state.indent,
                    style=state.style,
                )
            case Start(BlockQuote()):
                self._write_margin(state.margin_before)
                return StyledBlock(
                    dataclasses.replace(state, margin_before=True),
                    margin_before=False,
                    indent=state.indent + _QUOTE_INDENT,
                    style=state.style | _QUOTE_STYLE,
                    opened_by=BlockQuote,
                )
            case Start(CodeBlock(syntax)):
                self._write_margin(state.margin_before)
                self._write_border(state.indent)
                return HighlightBlock(
                    dataclasses.replace(state, margin_before=True),
                    syntax,
                    indent=state.indent,
                    highlighter=self._get_highlighter(syntax),
                )
            case End(tag) if type(tag) is state.opened_by:
                return state.return_to
            case _:
                raise self._impossible(state, event)

    def _process_HighlightBlock(self, state: HighlightBlock, event: Event) -> State:
        match event:
            case Text(text):
                self._write_code(state, text)
                return state
            case End(CodeBlock()):
                self._write_border(state.indent)
                return state.return_to
            case _:
                raise self._impossible(state, event)

    def _process_ListBlock(self, state: ListBlock, event: Event) -> State:
        match event:
            case Start(Item()):
                if state.newline_before:
                    self._writeln()
                self._write_indent(state.indent)
                if state.number is None:
                    self._write(f"{_BULLET} ")
                    indent = state.indent + 2
                else:
                    self._write(f"{state.number:>2}. ")
                    indent = state.indent + 4
                return Inline(
                    state.to_next_item(),
                    InlineMode.LIST_ITEM_LEAD_TEXT,
                    state.style,
                    indent,
                    Item,
                    _emphasis_depth(state.style),
                )
            case End(List()):
                # A nested list in an item's first line leaves the line open,
                # the outer list will end it. After a loose list this newline
                # adds a second blank line before the next top level block.
                if type(state.return_to) is not Inline:
                    self._writeln()
                return state.return_to
            case _:
                raise self._impossible(state, event)

    def _nested_inline(
        self,
        state: Inline,
        opened_by: type[Tag],
        style: Color,
        emphasis_depth: int | None = None,
        mode: InlineMode = InlineMode.PLAIN_INLINE_TEXT,
    ) -> Inline:
        return Inline(
            state,
            mode,
            style,
            state.indent,
            opened_by,
            state.emphasis_depth if emphasis_depth is None else emphasis_depth,
        )

    def _get_highlighter(self, syntax: str | None) -> mdtty.hl.HighlightLines | None:
        if self._capabilities.style is not mdtty.term.StyleCapability.ANSI:
            return None
        return mdtty.hl.HighlightLines.for_token(
            syntax, self._settings.highlight_theme
        )

    def _resolve_url(self, target: str) -> str | None:
        # One-letter schemes are drive letters of windows paths.
        if len(urllib.parse.urlsplit(target).scheme) > 1:
            return target
        try:
            return (self._base_dir / target).as_uri()
        except ValueError:
            mdtty._logger.debug("can't resolve link target %r", target)
            return None

    def _write(self, text: str):
        self._stream.write(text)

    def _writeln(self):
        self._stream.write("\n")

    def _write_margin(self, margin_before: bool):
        if margin_before:
            self._writeln()

    def _write_indent(self, indent: int):
        if indent > 0:
            self._stream.write(" " * indent)

    def _write_styled(self, style: Color, text: str):
        mdtty.term.write_styled(self._stream, self._capabilities, style, text)

    def _write_rule(self, width: int):
        self._write_styled(_RULE_STYLE, _RULE * max(width, 0))
        self._writeln()

    def _write_border(self, indent: int):
        self._write_indent(indent)
        width = min(self._settings.terminal_size.width, _BORDER_MAX_WIDTH)
        self._write_styled(_RULE_STYLE, _BORDER * width)
        self._writeln()

    def _write_code(self, state: HighlightBlock, text: str):
        if state.highlighter is not None:
            fragments = state.highlighter.highlight(text)
        else:
            fragments = [(_CODE_STYLE, text)]

        if not state.indent:
            for color, fragment in fragments:
                self._write_styled(color, fragment)
            return

        at_line_start = True
        for color, fragment in fragments:
            for line in fragment.splitlines(keepends=True):
                if at_line_start:
                    self._write_indent(state.indent)
                self._write_styled(color, line)
                at_line_start = line.endswith("\n")

    def _write_link_refs(self):
        links = self._links.take()
        if not links:
            return
        self._writeln()
        for link in links:
            self._write_styled(
                _LINK_STYLE, f"[{link.index}]: {link.target} {link.title}"
            )
            self._writeln()


def render(
    events: _t.Iterable[Event],
    stream: _t.TextIO,
    /,
    settings: Settings | None = None,
    *,
    base_dir: str | pathlib.Path | None = None,
):
    """
    Render markdown events to a stream.

    :param events:
        markdown events, see :mod:`mdtty.events`.
    :param stream:
        stream to write to. Errors from the stream are propagated as is,
        leaving whatever was written before the error.
    :param settings:
        settings for rendering. Default settings describe a terminal without
        any capabilities.
    :param base_dir:
        directory of the markdown document, used to resolve relative link targets.
    :raises:
        :class:`ImpossibleEventError` if events don't form a valid markdown
        document.
    :example:
        ::

            >>> import sys
            >>> render(
            ...     [Start(Paragraph()), Text("Hello, world!"), End(Paragraph())],
            ...     sys.stdout,
            ... )
            Hello, world!

    """

    renderer = Renderer(stream, settings, base_dir)
    state: State = TopLevel()
    for event in events:
        state = renderer.process(state, event)
    renderer.finish(state)


def render_to_string(
    events: _t.Iterable[Event],
    /,
    settings: Settings | None = None,
    *,
    base_dir: str | pathlib.Path | None = None,
) -> str:
    """
    Render markdown events and return the result as a string.

    See :func:`render` for details.

    """

    stream = io.StringIO()
    render(events, stream, settings, base_dir=base_dir)
    return stream.getvalue()
