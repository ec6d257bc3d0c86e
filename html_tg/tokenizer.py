"""Lazy HTML tokenizer built on the standard library HTMLParser.

HTMLParser is push-based (it calls handle_* methods while being fed), so the
input is fed in slices and the tokens produced by each slice are yielded before
the next slice is fed. Malformed markup is handled the way HTMLParser handles
it: unclosed or foreign constructs become text or are skipped, they never stop
tokenization.
"""

from __future__ import annotations

import codecs
from collections import deque
from collections.abc import Iterator
from dataclasses import dataclass
from html.parser import HTMLParser
from typing import Final

from html_tg.errors import MalformedMarkup

# Characters fed to the parser per step
FEED_CHUNK_SIZE: Final = 4096


@dataclass(frozen=True)
class TextToken:
    data: str


@dataclass(frozen=True)
class StartTagToken:
    name: str
    attrs: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class EndTagToken:
    name: str


Token = TextToken | StartTagToken | EndTagToken


class _TokenCollector(HTMLParser):
    """HTMLParser that queues tokens instead of handling them."""

    def __init__(self) -> None:
        # Character references in text are resolved before handle_data
        super().__init__(convert_charrefs=True)
        self.tokens: deque[Token] = deque()

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        self.tokens.append(StartTagToken(tag, tuple((key, value or '') for key, value in attrs)))

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        # Self-closing tags (<b/>) enclose nothing and are skipped
        return

    def handle_endtag(self, tag: str) -> None:
        self.tokens.append(EndTagToken(tag))

    def handle_data(self, data: str) -> None:
        if data:
            self.tokens.append(TextToken(data))


def _iter_text(markup: str | bytes, chunk_size: int) -> Iterator[str]:
    """Yield markup as text slices, validating that it is representable in UTF-16.

    Raises:
        MalformedMarkup: If bytes are not valid UTF-8 or text has lone surrogates
    """
    if isinstance(markup, bytes):
        decoder = codecs.getincrementaldecoder('utf-8')(errors='strict')
        try:
            for start in range(0, len(markup), chunk_size):
                yield decoder.decode(markup[start : start + chunk_size])
            yield decoder.decode(b'', final=True)
        except UnicodeDecodeError as e:
            raise MalformedMarkup(e) from e
        return

    for start in range(0, len(markup), chunk_size):
        chunk = markup[start : start + chunk_size]
        try:
            chunk.encode('utf-16-le')
        except UnicodeEncodeError as e:
            raise MalformedMarkup(e) from e
        yield chunk


def _normalize_newlines(chunks: Iterator[str]) -> Iterator[str]:
    """Turn \\r\\n and lone \\r into \\n, including a pair split between chunks."""
    pending_cr = False
    for chunk in chunks:
        if not chunk:
            continue
        if pending_cr and chunk.startswith('\n'):
            chunk = chunk[1:]
        pending_cr = chunk.endswith('\r')
        yield chunk.replace('\r\n', '\n').replace('\r', '\n')


def _drain(tokens: deque[Token]) -> Iterator[Token]:
    while tokens:
        yield tokens.popleft()


def iter_tokens(markup: str | bytes, chunk_size: int = FEED_CHUNK_SIZE) -> Iterator[Token]:
    """Tokenize markup lazily.

    Tag names and attribute names are lowercased, attribute values without a
    value become ''. CRLF and CR line breaks become LF. Comments, doctypes and
    self-closing tags produce no tokens.

    Args:
        markup: HTML text, or UTF-8 encoded bytes
        chunk_size: Number of characters fed to the parser at once

    Yields:
        TextToken, StartTagToken and EndTagToken in document order

    Raises:
        MalformedMarkup: If the input cannot be decoded as text
    """
    parser = _TokenCollector()
    for chunk in _normalize_newlines(_iter_text(markup, chunk_size)):
        parser.feed(chunk)
        yield from _drain(parser.tokens)
    parser.close()
    yield from _drain(parser.tokens)
