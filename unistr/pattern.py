"""
Regular expressions for matching and replacing.

Python's `re` module performs the actual matching. This module only adds the
notion of a *global* pattern, which determines whether matching and replacing
apply to all occurrences or just the first one, and it decodes pattern sources
just like all other text entering unistr. Hence `Pattern.of('\\ud83d\\ude04',
'g')` matches the single code point U+1F604 and not a surrogate pair.

Text arguments become patterns in one of two ways. `to_pattern()` treats text
as the source of a regular expression, which is what matching does, whereas
`to_literal_pattern()` matches text verbatim, which is what replacing does.
Both leave `Pattern` instances alone and wrap compiled `re.Pattern` instances
as non-global patterns.
"""

from collections.abc import Callable, Iterator
from dataclasses import dataclass
from functools import singledispatch
import logging
import re
from typing import TypeAlias

from .codepoint import decode
from .convert import to_text
from .error import InvalidArgument


_logger = logging.getLogger(__name__)


_FLAGS: dict[str, re.RegexFlag] = {
    'i': re.IGNORECASE,
    'm': re.MULTILINE,
    's': re.DOTALL,
    'x': re.VERBOSE,
}


Replacement: TypeAlias = str | Callable[[re.Match[str]], str]


@dataclass(frozen=True, slots=True)
class Pattern:
    """
    A compiled regular expression plus a flag for global matching. Literal
    patterns match their text verbatim and also insert replacement text
    verbatim, without expanding `re` template syntax.
    """

    regex: re.Pattern[str]
    is_global: bool = False
    is_literal: bool = False

    @classmethod
    def of(cls, source: str, flags: str = '') -> 'Pattern':
        """
        Compile the source into a pattern. The flags are a string of letters:
        `g` makes the pattern global, whereas `i`, `m`, `s`, and `x` enable
        `re.IGNORECASE`, `re.MULTILINE`, `re.DOTALL`, and `re.VERBOSE`,
        respectively. Each letter may appear at most once. Syntax errors in the
        source propagate as `re.error`.
        """
        is_global = False
        regex_flags = re.RegexFlag.NOFLAG
        for position, letter in enumerate(flags):
            if letter in flags[:position]:
                raise InvalidArgument(f'flag "{letter}" repeats in "{flags}"')
            if letter == 'g':
                is_global = True
            elif letter in _FLAGS:
                regex_flags |= _FLAGS[letter]
            else:
                raise InvalidArgument(f'"{letter}" is not a valid pattern flag')

        _logger.debug('compiling pattern %r with flags "%s"', source, flags)
        return cls(re.compile(decode(source), regex_flags), is_global)

    @classmethod
    def literal(cls, text: str, is_global: bool = False) -> 'Pattern':
        return cls(re.compile(re.escape(decode(text))), is_global, True)

    @property
    def source(self) -> str:
        return self.regex.pattern

    @property
    def flags(self) -> str:
        letters = 'g' if self.is_global else ''
        for letter, flag in _FLAGS.items():
            if self.regex.flags & flag:
                letters += letter
        return letters

    def to_global(self) -> 'Pattern':
        if self.is_global:
            return self
        return Pattern(self.regex, True, self.is_literal)

    def matches(self, text: str) -> list[str]:
        """
        Return the matched text for all non-overlapping matches from left to
        right if this pattern is global, or for just the first match otherwise.
        """
        if self.is_global:
            return [m.group(0) for m in self.regex.finditer(text)]
        match = self.regex.search(text)
        return [] if match is None else [match.group(0)]

    def iter_matches(self, text: str) -> Iterator[re.Match[str]]:
        """Iterate over all matches, whether this pattern is global or not."""
        return self.regex.finditer(text)

    def substitute(self, replacement: Replacement, text: str) -> str:
        """
        Replace all matches if this pattern is global, or just the first one
        otherwise. Unless this pattern is literal, a string replacement may use
        `re` template syntax such as `\\1` or `\\g<name>`. A callable
        replacement receives each match and returns the replacement text.
        """
        count = 0 if self.is_global else 1
        if isinstance(replacement, str):
            replacement = decode(replacement)
            if not self.is_literal:
                return self.regex.sub(replacement, text, count=count)
            verbatim = replacement
            return self.regex.sub(lambda _: verbatim, text, count=count)

        callback = replacement
        return self.regex.sub(lambda m: decode(str(callback(m))), text, count=count)

    def __repr__(self) -> str:
        return f'/{self.source}/{self.flags}'


# --------------------------------------------------------------------------------------


@singledispatch
def to_pattern(value: object) -> Pattern:
    """Convert the value into a pattern, treating text as regex source."""
    return Pattern.of(to_text(value))


@singledispatch
def to_literal_pattern(value: object) -> Pattern:
    """Convert the value into a pattern, treating text as literal."""
    return Pattern.literal(to_text(value))


@to_pattern.register(Pattern)
@to_literal_pattern.register(Pattern)
def _(value: Pattern) -> Pattern:
    return value


@to_pattern.register(re.Pattern)
@to_literal_pattern.register(re.Pattern)
def _(value: re.Pattern[str]) -> Pattern:
    return Pattern(value)
