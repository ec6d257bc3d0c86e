"""Errors raised by the HTML to entities converter."""


class HtmlEntitiesError(ValueError):
    """Base class for conversion errors."""


class MalformedMarkup(HtmlEntitiesError):
    """Input could not be tokenized.

    Attributes:
        cause: Underlying decoding/encoding error
    """

    def __init__(self, cause: Exception) -> None:
        super().__init__(f'malformed markup: {cause}')
        self.cause = cause


class UnexpectedEndTag(HtmlEntitiesError):
    """End tag without a matching open tag (strict mode only).

    Attributes:
        tag: Name of the offending end tag
    """

    def __init__(self, tag: str) -> None:
        super().__init__(f'unexpected end tag: {tag}')
        self.tag = tag
