"""Tests for html_tg.tokenizer module."""

from collections.abc import Iterator

import pytest

from html_tg.errors import MalformedMarkup
from html_tg.tokenizer import EndTagToken, StartTagToken, TextToken, Token, iter_tokens


def _merge_text(tokens: list[Token]) -> list[Token]:
    """Join adjacent text tokens, which may be split at feed boundaries."""
    merged: list[Token] = []
    for token in tokens:
        if isinstance(token, TextToken) and merged and isinstance(merged[-1], TextToken):
            merged[-1] = TextToken(merged[-1].data + token.data)
        else:
            merged.append(token)
    return merged


def test_token_kinds() -> None:
    tokens = list(iter_tokens('a <b>bold</b>'))

    assert tokens == [
        TextToken('a '),
        StartTagToken('b'),
        TextToken('bold'),
        EndTagToken('b'),
    ]


def test_attributes_in_document_order() -> None:
    tokens = list(iter_tokens('<a HREF="x" data-flag title=\'t\'>y</a>'))

    assert tokens[0] == StartTagToken('a', (('href', 'x'), ('data-flag', ''), ('title', 't')))


def test_is_lazy() -> None:
    """Tokens are produced while the input is consumed, not all at once."""
    tokens = iter_tokens('<b>x</b>' * 1000, chunk_size=16)

    assert isinstance(tokens, Iterator)
    assert next(tokens) == StartTagToken('b')


@pytest.mark.parametrize('chunk_size', [1, 2, 3, 7, 4096])
def test_chunk_size_does_not_change_tokens(chunk_size: int) -> None:
    markup = 'Click <a href="https://example.com/?a=1&amp;b=2">here &amp; there</a>!'

    tokens = _merge_text(list(iter_tokens(markup, chunk_size=chunk_size)))

    assert tokens == [
        TextToken('Click '),
        StartTagToken('a', (('href', 'https://example.com/?a=1&b=2'),)),
        TextToken('here & there'),
        EndTagToken('a'),
        TextToken('!'),
    ]


def test_bytes_split_inside_multibyte_character() -> None:
    tokens = _merge_text(list(iter_tokens('<i>ёж</i>'.encode(), chunk_size=4)))

    assert tokens == [StartTagToken('i'), TextToken('ёж'), EndTagToken('i')]


@pytest.mark.parametrize('chunk_size', [1, 2, 4096])
@pytest.mark.parametrize(
    'markup',
    ['a\r\nb', 'a\rb', 'a\nb'],
)
def test_line_breaks_normalized(markup: str, chunk_size: int) -> None:
    tokens = _merge_text(list(iter_tokens(markup, chunk_size=chunk_size)))

    assert tokens == [TextToken('a\nb')]


def test_crlf_pair_split_between_byte_chunks() -> None:
    tokens = _merge_text(list(iter_tokens(b'<b>a\r\nb</b>', chunk_size=5)))

    assert tokens == [StartTagToken('b'), TextToken('a\nb'), EndTagToken('b')]


def test_unclosed_constructs_do_not_abort() -> None:
    tokens = list(iter_tokens('<b>x<!-- no end'))

    assert tokens[:2] == [StartTagToken('b'), TextToken('x')]


def test_self_closing_tag_skipped() -> None:
    assert list(iter_tokens('<b/>')) == []


def test_invalid_utf8() -> None:
    with pytest.raises(MalformedMarkup):
        list(iter_tokens(b'\xc3\x28'))


def test_truncated_utf8() -> None:
    with pytest.raises(MalformedMarkup):
        list(iter_tokens(b'<b>\xd0'))


if __name__ == '__main__':
    pytest.main([__file__, '-v'])
