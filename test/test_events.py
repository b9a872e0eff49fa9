import io

import pytest

from mdtty.events import (
    CodeBlock,
    End,
    Heading,
    LinkType,
    Start,
    Text,
    dump_events,
)


@pytest.mark.parametrize(
    ("syntax", "expected"),
    [
        (None, None),
        ("", None),
        ("   ", None),
        ("rust", "rust"),
        ("rust ignore", "rust"),
        ("  python  title='x'", "python"),
    ],
)
def test_code_block_syntax(syntax, expected):
    assert CodeBlock(syntax).syntax == expected


@pytest.mark.parametrize(
    ("link_type", "expected"),
    [
        (LinkType.INLINE, False),
        (LinkType.REFERENCE, False),
        (LinkType.COLLAPSED, False),
        (LinkType.SHORTCUT, False),
        (LinkType.AUTOLINK, True),
        (LinkType.EMAIL, True),
    ],
)
def test_is_autolink(link_type, expected):
    assert link_type.is_autolink is expected


def test_events_compare_by_value():
    assert Start(Heading(1)) == Start(Heading(1))
    assert Start(Heading(1)) != End(Heading(1))
    assert Start(Heading(1)) != Start(Heading(2))


def test_dump_events():
    stream = io.StringIO()
    dump_events(stream, [Start(CodeBlock("py")), Text("x"), End(CodeBlock("py"))])
    assert stream.getvalue() == (
        "Start(tag=CodeBlock(syntax='py'))\n"
        "Text(text='x')\n"
        "End(tag=CodeBlock(syntax='py'))\n"
    )
