# Yuio project, MIT license.
#
# https://github.com/taminomara/yuio/
#
# You're free to copy this file to your project and edit it for your needs,
# just keep this copyright line please :3

"""
Mdtty highlights fenced code blocks with a small set of regexp-based
highlighters. It supports the following languages:

- ``python``,
- ``bash``,
- ``diff``,
- ``json``,
- ``toml``,
- ``rust``.

A highlighter turns a run of code into a list of ``(color, fragment)`` pairs
that cover the run exactly::

    >>> highlighter = HighlightLines.for_token("json", HighlightTheme())
    >>> "".join(fragment for _, fragment in highlighter.highlight('{"a": null}'))
    '{"a": null}'


Highlighters registry
---------------------

.. autofunction:: get_highlighter

.. autofunction:: register_highlighter


Highlighter base class
----------------------

.. autoclass:: SyntaxHighlighter
    :members:

.. autoclass:: ReSyntaxHighlighter
    :members:


Highlighting code blocks
------------------------

.. autoclass:: HighlightLines
    :members:

.. autoclass:: HighlightTheme
    :members:

"""

from __future__ import annotations

import abc
import re
import typing
import warnings

import mdtty
import mdtty.color
from mdtty import _typing as _t

__all__ = [
    "Fragment",
    "HighlightLines",
    "HighlightTheme",
    "ReSyntaxHighlighter",
    "SyntaxHighlighter",
    "ThemeWarning",
    "get_highlighter",
    "register_highlighter",
]

Fragment: _t.TypeAlias = tuple[mdtty.color.Color, str]
"""
A piece of highlighted code and its color.

"""


class ThemeWarning(mdtty.MdttyWarning):
    """
    Warning issued when a theme contains an invalid color.

    """


class HighlightTheme:
    """
    Colors for syntax highlighting.

    Colors are looked up by token paths, such as ``"str/esc"``. If there's
    no color for the exact path, its parent path (``"str"``) is tried, and so on.
    Colors can be set for a specific syntax by appending ``":<syntax>"``
    to the path, i.e. ``"kwd:py"``. The empty path is the default color
    for all code.

    :param colors:
        overrides for the default colors. Values can be colors or hex strings.

    :example:
        ::

            >>> theme = HighlightTheme({"str": "#FF0000"})
            >>> theme.get_color("str", "py")
            Color(fore=<ColorValue #FF0000>, bold=None, italic=None, underline=None, strikethrough=None)

    """

    SOLARIZED_DARK: typing.ClassVar[dict[str, mdtty.color.Color | str]] = {
        "": "#839496",
        "kwd": "#859900",
        "str": "#2AA198",
        "str/esc": "#CB4B16",
        "lit": "#D33682",
        "lit/builtin": "#B58900",
        "type": "#B58900",
        "punct": "#839496",
        "comment": mdtty.color.Color.fore_from_hex("#586E75")
        | mdtty.color.Color.STYLE_ITALIC,
        "prog": "#268BD2",
        "flag": "#CB4B16",
        "key": "#268BD2",
        "section": mdtty.color.Color.fore_from_hex("#268BD2")
        | mdtty.color.Color.STYLE_BOLD,
        "macro": "#6C71C4",
        "meta": "#268BD2",
        "added": "#859900",
        "removed": "#DC322F",
    }
    """
    Default colors, from the Solarized (dark) palette.

    """

    def __init__(self, colors: _t.Mapping[str, mdtty.color.Color | str] | None = None):
        self._colors: dict[str, mdtty.color.Color | str] = dict(self.SOLARIZED_DARK)
        if colors:
            self._colors.update(colors)
        self._cache: dict[tuple[str, str], mdtty.color.Color] = {}

    def get_color(self, path: str, syntax: str, /) -> mdtty.color.Color:
        """
        Look up a color for a token path in the given syntax.

        """

        key = (path, syntax)
        if (color := self._cache.get(key)) is None:
            color = self._cache[key] = self._get_color(path, syntax)
        return color

    def _get_color(self, path: str, syntax: str) -> mdtty.color.Color:
        color = mdtty.color.Color.NONE
        for prefix in _path_prefixes(path):
            for key in (prefix, f"{prefix}:{syntax}"):
                if key in self._colors:
                    color |= self._to_color(key, self._colors[key])
        return color

    @staticmethod
    def _to_color(key: str, value: mdtty.color.Color | str) -> mdtty.color.Color:
        if isinstance(value, mdtty.color.Color):
            return value
        try:
            return mdtty.color.Color.fore_from_hex(value)
        except ValueError as e:
            warnings.warn(f"invalid color code for {key!r}: {e}", ThemeWarning)
            return mdtty.color.Color.NONE


def _path_prefixes(path: str) -> list[str]:
    prefixes = [""]
    if path:
        parts = path.split("/")
        prefixes.extend("/".join(parts[: i + 1]) for i in range(len(parts)))
    return prefixes


class SyntaxHighlighter(abc.ABC):
    @abc.abstractmethod
    def highlight(
        self,
        code: str,
        /,
        *,
        theme: HighlightTheme,
        syntax: str,
    ) -> list[Fragment]:
        """
        Highlight the given code using the given theme.

        :param code:
            code to highlight.
        :param theme:
            theme that will be used to look up colors.
        :param syntax:
            canonical name of the syntax, used to look up syntax-specific colors.
        :returns:
            a list of colored fragments; concatenated, they're equal to ``code``.

        """

        raise NotImplementedError()


_SYNTAXES: dict[str, tuple[SyntaxHighlighter, str]] = {}
"""
Global syntax registry.

"""


def _normalize(syntax: str) -> str:
    return syntax.lower().replace("_", "-")


def register_highlighter(syntaxes: list[str], highlighter: SyntaxHighlighter):
    """
    Register a highlighter in a global registry, and allow looking it up
    via the :func:`get_highlighter` method.

    :param syntaxes:
        syntax names which should be associated with this highlighter.
        The first name is the canonical one.
    :param highlighter:
        a highlighter instance.

    """

    if not syntaxes:
        raise ValueError("expected at least one syntax name")
    canonical = _normalize(syntaxes[0])
    for syntax in syntaxes:
        _SYNTAXES[_normalize(syntax)] = (highlighter, canonical)


def get_highlighter(syntax: str, /) -> tuple[SyntaxHighlighter, str] | None:
    """
    Look up highlighter by a syntax name.

    :param syntax:
        name of the syntax highlighter, case-insensitive.
    :returns:
        a highlighter instance and canonical name of the syntax,
        or :data:`None` if there's no highlighter for this syntax.

    """

    return _SYNTAXES.get(_normalize(syntax))


class HighlightLines:
    """
    Highlights text runs of a single code block.

    A new instance is created for every code block. Runs are highlighted
    independently of each other.

    """

    def __init__(
        self, highlighter: SyntaxHighlighter, syntax: str, theme: HighlightTheme
    ):
        self._highlighter = highlighter
        self._syntax = syntax
        self._theme = theme

    @classmethod
    def for_token(
        cls, token: str | None, theme: HighlightTheme, /
    ) -> HighlightLines | None:
        """
        Create a highlighter for the given syntax token.

        Returns :data:`None` if there's no token, or no highlighter matches it.

        """

        if not token:
            return None
        if (found := get_highlighter(token)) is None:
            mdtty._logger.debug("no highlighter for syntax %r", token)
            return None
        highlighter, syntax = found
        return cls(highlighter, syntax, theme)

    @property
    def syntax(self) -> str:
        """
        Canonical name of the syntax being highlighted.

        """

        return self._syntax

    def highlight(self, text: str, /) -> list[Fragment]:
        """
        Highlight a run of code.

        """

        return self._highlighter.highlight(
            text, theme=self._theme, syntax=self._syntax
        )


class ReSyntaxHighlighter(SyntaxHighlighter):
    """
    Highlights code by scanning it with a regular expression.

    Every named group of the pattern is a token; its name is a token path
    for :class:`HighlightTheme`. Groups named ``aN__path`` are used when one
    match consists of several differently colored tokens; they are emitted
    in order of ``N``. Text between matches gets the syntax's default color.

    :param pattern:
        regular expression for tokens.
    :param str_esc_pattern:
        if given, tokens named ``str`` are additionally scanned for escape
        sequences, which are colored as ``str/esc``.

    """

    def __init__(
        self,
        pattern: _t.StrRePattern,
        str_esc_pattern: _t.StrRePattern | None = None,
    ):
        self._pattern = pattern
        self._str_esc_pattern = str_esc_pattern

    def highlight(
        self,
        code: str,
        /,
        *,
        theme: HighlightTheme,
        syntax: str,
    ) -> list[Fragment]:
        default_color = theme.get_color("", syntax)

        raw: list[Fragment] = []

        last_pos = 0
        for code_unit in self._pattern.finditer(code):
            if last_pos < code_unit.start():
                raw.append((default_color, code[last_pos : code_unit.start()]))
            last_pos = code_unit.end()

            for name, text in sorted(code_unit.groupdict().items()):
                if not text:
                    continue
                name = name.split("__", maxsplit=1)[-1].replace("_", "/")
                if self._str_esc_pattern is not None and name == "str":
                    str_color = theme.get_color("str", syntax)
                    esc_color = theme.get_color("str/esc", syntax)
                    last_escape_pos = 0
                    for escape_unit in self._str_esc_pattern.finditer(text):
                        if last_escape_pos < escape_unit.start():
                            raw.append(
                                (str_color, text[last_escape_pos : escape_unit.start()])
                            )
                        last_escape_pos = escape_unit.end()
                        if escape := text[escape_unit.start() : escape_unit.end()]:
                            raw.append((esc_color, escape))
                    if last_escape_pos < len(text):
                        raw.append((str_color, text[last_escape_pos:]))
                else:
                    raw.append((theme.get_color(name, syntax), text))

        if last_pos < len(code):
            raw.append((default_color, code[last_pos:]))

        return raw


_PY_SYNTAX = re.compile(
    r"""
        (?P<kwd>
            \b(?:                                   # keyword
                and|as|assert|async|await|break|class|continue|def|del|elif|else|
                except|finally|for|from|global|if|import|in|is|lambda|
                nonlocal|not|or|pass|raise|return|try|while|with|yield
            )\b)
        | (?P<str>
            (?<!\w)[rRbBfFuUtT]*(?:                # string prefix
                \"""(?:\\.|[^\\]|\n)*?\"""          # long doubly-quoted string
                | '''(?:\\.|[^\\]|\n)*?'''          # long singly-quoted string
                | '(?:\\.|[^\\'\n])*(?:'|$)         # singly-quoted string
                | "(?:\\.|[^\\"\n])*(?:"|$)))       # doubly-quoted string
        | (?P<lit>
                \b0x[0-9a-fA-F]+\b                  # hex
            | \b0b[01]+\b                           # bin
            | \b\d+(?:\.\d*(?:e[+-]?\d+)?)?         # int or float
            | \.\d+(?:e[+-]?\d+)?)                  # float that starts with dot
        | (?P<lit_builtin>
            \b(?:None|True|False)\b)                # bool or none
        | (?P<type>
            \b(?:                                   # type
                str|int|float|complex|list|tuple|range|dict|set|frozenset|bool|
                bytes|bytearray|memoryview|(?:[A-Z](?:[a-z]\w*)?)
            )\b)
        | (?P<punct>[{}()\[\]\\;|!&,])              # punctuation
        | (?P<comment>\#.*$)                        # comment
    """,
    re.MULTILINE | re.VERBOSE,
)
_PY_ESC_PATTERN = re.compile(
    r"""
        \\(
            \n                                      # escaped newline
            | [\\'"abfnrtv]                         # normal escape
            | [0-7]{3}                              # octal escape
            | x[0-9a-fA-F]{2}                       # hex escape
            | u[0-9a-fA-F]{4}                       # short unicode escape
            | U[0-9a-fA-F]{8}                       # long unicode escape
            | N\{[^}\n]+\}                          # unicode character names
        )
    """,
    re.VERBOSE,
)


register_highlighter(
    ["py", "py3", "py-3", "python", "python3", "python-3"],
    ReSyntaxHighlighter(_PY_SYNTAX, str_esc_pattern=_PY_ESC_PATTERN),
)
register_highlighter(
    ["sh", "bash", "shell", "zsh", "console"],
    ReSyntaxHighlighter(
        re.compile(
            r"""
                (?P<kwd>
                    \b(?:                                   # keyword
                      if|then|elif|else|fi|time|for|in|until|while|do|done|case|
                      esac|coproc|select|function
                    )\b
                  | \[\[                                    # `test` syntax: if [[ ... ]]
                  | \]\])
                | (?P<a0__punct>(?:^|\|\|?|&&|\$\())        # chaining operator: pipe or logic
                  (?P<a1__>[ \t]*)
                  (?P<a2__prog>(?:[\w.@/-]|\\.)+)           # prog
                | (?P<str>
                    '[^']*'                                 # singly-quoted string
                  | "(?:\\.|[^\\"])*")                      # doubly-quoted string
                | (?P<punct>
                      [{}()\[\]\\;!&|]                      # punctuation
                    | <{1,3}                                # input redirect
                    | [12]?>{1,2}(?:&[12])?)                # output redirect
                | (?P<comment>\#.*$)                        # comment
                | (?P<flag>(?<![\w-])-[a-zA-Z0-9_-]+\b)     # flag
            """,
            re.MULTILINE | re.VERBOSE,
        ),
    ),
)
register_highlighter(
    ["diff", "patch"],
    ReSyntaxHighlighter(
        re.compile(
            r"""
                (?P<meta>^(?:\-\-\-|\+\+\+|\@\@)[^\r\n]*$)
                | (?P<added>^\+[^\r\n]*$)
                | (?P<removed>^\-[^\r\n]*$)
            """,
            re.MULTILINE | re.VERBOSE,
        ),
    ),
)
register_highlighter(
    ["json"],
    ReSyntaxHighlighter(
        re.compile(
            r"""
                (?P<lit_builtin>\b(?:true|false|null)\b)   # keyword
                | (?P<lit>-?\b\d+(?:\.\d+)?(?:[eE][+-]?\d+)?\b) # number
                | (?P<str>"(?:\\.|[^\\"\n])*(?:"|$))         # doubly-quoted string
                | (?P<punct>[{}\[\],:])                     # punctuation
            """,
            re.MULTILINE | re.VERBOSE,
        ),
        str_esc_pattern=re.compile(
            r"""
                \\(
                    [\\/"bfnrt]
                    | u[0-9a-fA-F]{4}
                )
            """,
            re.VERBOSE,
        ),
    ),
)
register_highlighter(
    ["toml", "ini", "cfg"],
    ReSyntaxHighlighter(
        re.compile(
            r"""
                (?P<section>^[ \t]*\[\[?[^\]\n]*\]\]?)      # table header
                | (?P<a0__key>^[ \t]*[\w.\-"]+)             # key
                  (?P<a1__>[ \t]*)
                  (?P<a2__punct>=)
                | (?P<lit_builtin>\b(?:true|false)\b)      # bool
                | (?P<lit>[+-]?\b\d[\d_]*(?:\.\d+)?\b)      # number
                | (?P<str>
                    \"""(?:\\.|[^\\]|\n)*?\"""              # multiline string
                  | '[^'\n]*'                               # literal string
                  | "(?:\\.|[^\\"\n])*")                    # basic string
                | (?P<punct>[{}\[\],])                      # punctuation
                | (?P<comment>[\#;].*$)                     # comment
            """,
            re.MULTILINE | re.VERBOSE,
        ),
    ),
)
register_highlighter(
    ["rust", "rs"],
    ReSyntaxHighlighter(
        re.compile(
            r"""
                (?P<kwd>
                    \b(?:                                   # keyword
                        as|break|const|continue|crate|else|enum|extern|fn|for|
                        if|impl|in|let|loop|match|mod|move|mut|pub|ref|return|
                        static|struct|super|trait|type|unsafe|use|where|while|
                        async|await|dyn
                    )\b)
                | (?P<macro>\b[a-z_]\w*!)                   # macro call
                | (?P<str>
                    b?"(?:\\.|[^\\"])*"                     # string
                  | b?'(?:\\.|[^\\'\n])'                    # char
                  | r\#*"(?:.|\n)*?"\#*)                    # raw string
                | (?P<lit_builtin>\b(?:true|false|self|Self)\b)
                | (?P<lit>\b\d[\d_]*(?:\.\d+)?(?:[iuf](?:8|16|32|64|128|size))?\b)
                | (?P<type>\b[A-Z]\w*\b)                    # type
                | (?P<punct>[{}()\[\];,&|!])                 # punctuation
                | (?P<comment>//.*$)                        # comment
            """,
            re.MULTILINE | re.VERBOSE,
        ),
        str_esc_pattern=re.compile(
            r"""
                \\(
                    [\\'"nrt0]
                    | x[0-9a-fA-F]{2}
                    | u\{[0-9a-fA-F]{1,6}\}
                )
            """,
            re.VERBOSE,
        ),
    ),
)
