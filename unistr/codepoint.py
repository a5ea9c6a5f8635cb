"""
Unicode code points and the decoding of text into them.

Python strings are sequences of code points already, yet they may still carry
UTF-16 surrogate pairs as two separate code points. That happens for string
literals written with two `\\u` escapes, such as `'\\ud83d\\ude04'`, and for
text that crossed a UTF-16 boundary with the `surrogatepass` error handler.
Since unistr indexes text by code point, all text entering the package passes
through `decode()`, which collapses each high/low surrogate pair into the one
supplementary code point it encodes. Lone surrogates are not paired with
anything and hence remain as they are.

This module also defines `CodePoint`, an integer that is guaranteed to be a
valid code point. Its `repr()` uses Unicode `U+` notation, whereas `str()`
shows the actual character.
"""

import re
from typing import Any, ClassVar, Self, SupportsIndex, SupportsInt
import unicodedata


class CodePoint(int):

    MIN: 'ClassVar[CodePoint]'
    MAX: 'ClassVar[CodePoint]'

    SPACE: 'ClassVar[CodePoint]'
    NO_BREAK_SPACE: 'ClassVar[CodePoint]'
    ZERO_WIDTH_NO_BREAK_SPACE: 'ClassVar[CodePoint]'
    REPLACEMENT_CHARACTER: 'ClassVar[CodePoint]'

    LEAD_SURROGATE_FIRST: 'ClassVar[CodePoint]'
    LEAD_SURROGATE_LAST: 'ClassVar[CodePoint]'
    TRAIL_SURROGATE_FIRST: 'ClassVar[CodePoint]'
    TRAIL_SURROGATE_LAST: 'ClassVar[CodePoint]'

    __slots__ = ()

    def __new__(cls, *args: Any, **kwargs: Any) -> Self:
        value = super().__new__(cls, *args, **kwargs)
        if not (0 <= value <= 0x10_FFFF):
            raise ValueError(f'{value:04x} is out of range')
        return value

    @classmethod
    def of(cls, value: str | SupportsInt | SupportsIndex) -> Self:
        """
        Convert the given value into a code point. Strings may either hold
        exactly one code point, with surrogate pairs counting as one, or spell
        out the code point in hexadecimal, optionally prefixed by `U+` or `0x`.
        """
        if isinstance(value, cls):
            return value
        elif not isinstance(value, str):
            return cls(value)

        decoded = decode(value)
        if len(decoded) == 1:
            return cls(ord(decoded))

        length = len(value)
        if value.startswith('U+'):
            if not (6 <= length <= 8):
                raise ValueError(f'"U+" not followed by 4-6 hex digits in "{value}"')
            return cls(value[2:], base=16)
        if value.startswith('0x'):
            if not (4 <= length <= 8):
                raise ValueError(f'"0x" not followed by 2-6 hex digits in "{value}"')
            return cls(value[2:], base=16)
        if 4 <= length <= 6:
            return cls(value, base=16)

        raise ValueError(f'"{value}" does not consist of 4-6 hex digits')

    def is_surrogate(self) -> bool:
        return CodePoint.LEAD_SURROGATE_FIRST <= self <= CodePoint.TRAIL_SURROGATE_LAST

    def is_whitespace(self) -> bool:
        """
        Determine whether trimming removes this code point. That is the case
        for space separators, the byte order mark, tabs, and line terminators.
        Unlike `str.isspace()`, the information separators U+001C to U+001F and
        U+0085 NEXT LINE do not count as white space.
        """
        return self in _WHITESPACE or unicodedata.category(chr(self)) == 'Zs'

    def __repr__(self) -> str:
        return f'U+{self:04X}'

    def __str__(self) -> str:
        return chr(self)


CodePoint.MIN = CodePoint(0)
CodePoint.MAX = CodePoint(0x10_FFFF)

CodePoint.SPACE = CodePoint(0x0020)
CodePoint.NO_BREAK_SPACE = CodePoint(0x00A0)
CodePoint.ZERO_WIDTH_NO_BREAK_SPACE = CodePoint(0xFEFF)
CodePoint.REPLACEMENT_CHARACTER = CodePoint(0xFFFD)

CodePoint.LEAD_SURROGATE_FIRST = CodePoint(0xD800)
CodePoint.LEAD_SURROGATE_LAST = CodePoint(0xDBFF)
CodePoint.TRAIL_SURROGATE_FIRST = CodePoint(0xDC00)
CodePoint.TRAIL_SURROGATE_LAST = CodePoint(0xDFFF)

_WHITESPACE = frozenset([
    CodePoint(0x0009),  # TAB
    CodePoint(0x000A),  # LF
    CodePoint(0x000B),  # VT
    CodePoint(0x000C),  # FF
    CodePoint(0x000D),  # CR
    CodePoint.SPACE,
    CodePoint.NO_BREAK_SPACE,
    CodePoint.ZERO_WIDTH_NO_BREAK_SPACE,
    CodePoint(0x2028),  # LINE SEPARATOR
    CodePoint(0x2029),  # PARAGRAPH SEPARATOR
])


# --------------------------------------------------------------------------------------


_SURROGATE = re.compile('[\ud800-\udfff]')


def decode(text: str) -> str:
    """
    Decode the text into code points. Every surrogate pair becomes the single
    code point it encodes, while lone surrogates are preserved. Text without
    surrogates is returned as is.
    """
    if _SURROGATE.search(text) is None:
        return text
    # The UTF-16 decoder pairs up surrogates; surrogatepass keeps lone ones.
    return (
        text
        .encode('utf-16-le', errors='surrogatepass')
        .decode('utf-16-le', errors='surrogatepass')
    )


def codepoint_length(text: str) -> int:
    """Determine the number of code points in the text, after decoding."""
    return len(decode(text))


def is_unit(value: object) -> bool:
    """Determine whether the value is a string with exactly one code point."""
    return isinstance(value, str) and codepoint_length(value) == 1
