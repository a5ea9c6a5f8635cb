"""
Strings indexed by code point.

`CodePointString` holds text as a list of *units*, i.e., strings of exactly
one code point each. Indexing, length, and searching count units, so a
character outside the basic multilingual plane is a single, indivisible unit,
even if the text it was created from encoded the character as a surrogate
pair. The API comprises the usual string and array methods, spelled in snake
case, and falls into four groups:

  * Accessors: `at()`, `char_at()`, `code_point_at()`, `length`.
  * Searches: `index_of()`, `last_index_of()`, `includes()`, `starts_with()`,
    `ends_with()`, `match()`, `match_all()`.
  * Transforms: `concat()`, `slice()`, `pad_start()`, `pad_end()`,
    `repeat()`, `replace()`, `replace_all()`, case mapping, trimming,
    `reverse()`, `sort()`, and the higher-order `filter()`, `map()`, ...
  * Mutators: `push()`, `unshift()`, `pop()`, `shift()`, `splice()`.

Only the mutators modify a string in place. All other methods leave their
receiver untouched and return either a scalar or a new string that shares no
storage with the receiver.

Arguments that are "a string or text" may be a `CodePointString`, a `str`, a
`CodePoint`, or a list or tuple of units. They are all resolved with
`unistr.convert.to_units()`. Accessors and searches signal absence with `None`
or `-1` instead of raising an exception.
"""

import builtins
import codecs
from collections.abc import Iterable, Iterator
from functools import cmp_to_key
import operator
import re
from typing import Any, Callable, overload, SupportsIndex, TypeAlias, TypeVar

from .codepoint import CodePoint, decode
from .convert import to_text, to_units, validate_units
from .error import InvalidArgument, InvalidUnit
from .pattern import Pattern, Replacement, to_literal_pattern, to_pattern


T = TypeVar('T')

Text: TypeAlias = 'str | CodePoint | CodePointString | list[str] | tuple[str, ...]'
PatternArg: TypeAlias = 'Text | Pattern | re.Pattern[str]'
Callback: TypeAlias = Callable[[str, int, 'CodePointString'], T]


class CodePointString:

    __slots__ = ('_units',)

    _units: list[str]

    def __init__(self, value: str | Iterable[str] = '') -> None:
        if isinstance(value, str):
            self._units = list(decode(value))
        else:
            self._units = validate_units(value)

    @classmethod
    def from_text(cls, text: str) -> 'CodePointString':
        """Decode the text into a string of code points."""
        if not isinstance(text, str):
            raise TypeError(f'expected str, got {type(text).__name__}')
        return cls(text)

    @classmethod
    def from_units(cls, units: Iterable[str]) -> 'CodePointString':
        """
        Create a string from the units. Each unit must be a `str` with exactly
        one code point or this method raises an `InvalidUnit` error. The
        string copies the units and does not retain the iterable.
        """
        return cls._wrap(validate_units(units))

    @classmethod
    def from_bytes(cls, data: bytes, encoding: str = 'utf-8') -> 'CodePointString':
        return cls(data.decode(encoding, errors=_errors_for(encoding)))

    @classmethod
    def _wrap(cls, units: list[str]) -> 'CodePointString':
        # Takes ownership of already validated units.
        string = cls.__new__(cls)
        string._units = units
        return string

    # ----------------------------------------------------------------------------------
    # Accessors

    @property
    def length(self) -> int:
        """The number of code points."""
        return len(self._units)

    def at(self, index: SupportsIndex) -> None | str:
        """
        Return the unit at the index. Negative indices count from the end.
        Indices out of range yield `None`.
        """
        index = operator.index(index)
        if index < 0:
            index += len(self._units)
        if 0 <= index < len(self._units):
            return self._units[index]
        return None

    def char_at(self, index: SupportsIndex = 0) -> None | str:
        """
        Return the unit at the index. Unlike `at()`, negative indices yield the
        empty string. Positive indices out of range yield `None`.
        """
        if operator.index(index) < 0:
            return ''
        return self.at(index)

    def code_point_at(self, index: SupportsIndex = 0) -> None | CodePoint:
        """
        Return the code point at the index. Negative indices as well as indices
        out of range yield `None`.
        """
        index = operator.index(index)
        if not (0 <= index < len(self._units)):
            return None
        return CodePoint(ord(self._units[index]))

    char_code_at = code_point_at

    # ----------------------------------------------------------------------------------
    # Searches

    def _matches_at(self, needle: list[str], position: int) -> bool:
        return self._units[position:position + len(needle)] == needle

    def index_of(self, needle: Text, start_position: SupportsIndex = 0) -> int:
        """
        Return the first position at or after `start_position`, where the units
        of the needle appear in this string, or -1. A negative start position
        counts as zero. An empty needle matches at the start position.
        """
        units = to_units(needle)
        start = max(operator.index(start_position), 0)
        length = len(self._units)
        if start > length:
            return -1

        for position in range(start, length - len(units) + 1):
            if self._matches_at(units, position):
                return position
        return -1

    def last_index_of(
        self,
        needle: Text,
        end_position: None | SupportsIndex = None,
    ) -> int:
        """
        Return the last position at or before `end_position`, where the units
        of the needle appear in this string, or -1. A negative end position
        counts as zero, a missing one as the last index. The needle may extend
        past the end position.
        """
        units = to_units(needle)
        last = len(self._units) - 1
        if end_position is not None:
            last = min(max(operator.index(end_position), 0), last)

        for position in range(min(last, len(self._units) - len(units)), -1, -1):
            if self._matches_at(units, position):
                return position
        return -1

    def includes(self, needle: Text, start_position: SupportsIndex = 0) -> bool:
        return self.index_of(needle, start_position) > -1

    def starts_with(self, needle: Text, start_position: SupportsIndex = 0) -> bool:
        """
        Determine whether the units of the needle appear at the start position.
        The start position is clamped to this string's bounds.
        """
        units = to_units(needle)
        start = min(max(operator.index(start_position), 0), len(self._units))
        return self._matches_at(units, start)

    def ends_with(
        self,
        needle: Text,
        end_position: None | SupportsIndex = None,
    ) -> bool:
        """
        Determine whether the units of the needle appear right before the end
        position, which defaults to this string's length and is clamped to its
        bounds.
        """
        units = to_units(needle)
        length = len(self._units)
        end = length
        if end_position is not None:
            end = min(max(operator.index(end_position), 0), length)

        start = end - len(units)
        return start >= 0 and self._units[start:end] == units

    def match(self, pattern: PatternArg) -> 'list[CodePointString]':
        """
        Match this string against the pattern. Text is compiled as a regular
        expression, which is not global, so that at most one match results. A
        global `Pattern` results in all non-overlapping matches from left to
        right. No match results in an empty list.
        """
        compiled = to_pattern(pattern)
        return [CodePointString._wrap(list(m)) for m in compiled.matches(self.to_text())]

    def match_all(self, pattern: PatternArg) -> Iterator[re.Match[str]]:
        """
        Iterate over all non-overlapping matches of the pattern, whether global
        or not. Unlike `match()`, this method yields `re.Match` objects, which
        also provide captured groups. Their positions index the text form.
        """
        return to_pattern(pattern).iter_matches(self.to_text())

    # ----------------------------------------------------------------------------------
    # Transforms

    def concat(self, *values: Text) -> 'CodePointString':
        units = list(self._units)
        for value in values:
            units.extend(to_units(value))
        return CodePointString._wrap(units)

    def slice(
        self,
        start_index: SupportsIndex = 0,
        end_index: None | SupportsIndex = None,
    ) -> 'CodePointString':
        """
        Return the units from the start index (inclusive) to the end index
        (exclusive). Negative indices count from the end, indices out of range
        are clamped.
        """
        start = operator.index(start_index)
        end = None if end_index is None else operator.index(end_index)
        return CodePointString._wrap(self._units[start:end])

    def _padding(self, target_length: SupportsIndex, pad: Text) -> list[str]:
        pad_units = to_units(pad)
        missing = operator.index(target_length) - len(self._units)
        if missing <= 0 or not pad_units:
            return []
        count, remainder = divmod(missing, len(pad_units))
        return pad_units * count + pad_units[:remainder]

    def pad_end(self, target_length: SupportsIndex, pad: Text = ' ') -> 'CodePointString':
        """
        Pad this string at the end to the target length. The padding repeats
        the units of `pad`, truncating the final repetition as necessary.
        """
        return CodePointString._wrap(self._units + self._padding(target_length, pad))

    def pad_start(self, target_length: SupportsIndex, pad: Text = ' ') -> 'CodePointString':
        """Like `pad_end()` but pad at the start."""
        return CodePointString._wrap(self._padding(target_length, pad) + self._units)

    def repeat(self, count: SupportsIndex) -> 'CodePointString':
        count = operator.index(count)
        if count < 0:
            raise InvalidArgument(f'repeat count {count} is negative')
        return CodePointString._wrap(self._units * count)

    def replace(self, pattern: PatternArg, replacement: 'Text | Replacement') -> 'CodePointString':
        """
        Replace occurrences of the pattern. Text patterns are literals and
        replace only their first occurrence. Regular expressions replace all
        matches if global and the first match otherwise.
        """
        compiled = to_literal_pattern(pattern)
        return CodePointString._wrap(list(
            compiled.substitute(_to_replacement(replacement), self.to_text())
        ))

    def replace_all(self, pattern: PatternArg, replacement: 'Text | Replacement') -> 'CodePointString':
        """
        Replace all occurrences of the pattern. Regular expressions must be
        global or this method raises an `InvalidArgument` error.
        """
        compiled = to_literal_pattern(pattern)
        if not compiled.is_literal and not compiled.is_global:
            raise InvalidArgument(f'replace_all() requires global pattern, not {compiled!r}')
        return CodePointString._wrap(list(
            compiled.to_global().substitute(_to_replacement(replacement), self.to_text())
        ))

    def to_lower_case(self) -> 'CodePointString':
        return CodePointString._wrap([
            mapped for unit in self._units for mapped in unit.lower()
        ])

    def to_upper_case(self) -> 'CodePointString':
        return CodePointString._wrap([
            mapped for unit in self._units for mapped in unit.upper()
        ])

    def _trimmed(self, start: bool, end: bool) -> 'CodePointString':
        begin, stop = 0, len(self._units)
        while start and begin < stop and _is_whitespace(self._units[begin]):
            begin += 1
        while end and begin < stop and _is_whitespace(self._units[stop - 1]):
            stop -= 1
        return CodePointString._wrap(self._units[begin:stop])

    def trim(self) -> 'CodePointString':
        """Remove leading and trailing white space and line terminators."""
        return self._trimmed(True, True)

    def trim_start(self) -> 'CodePointString':
        return self._trimmed(True, False)

    def trim_end(self) -> 'CodePointString':
        return self._trimmed(False, True)

    def reverse(self) -> 'CodePointString':
        return CodePointString._wrap(self._units[::-1])

    def sort(
        self,
        compare: None | Callable[[str, str], int] = None,
    ) -> 'CodePointString':
        """
        Return a string with the units sorted in ascending code point order or,
        if given, the order determined by the comparison function. The latter
        returns a negative number, zero, or a positive number.
        """
        if compare is None:
            return CodePointString._wrap(sorted(self._units))
        return CodePointString._wrap(sorted(self._units, key=cmp_to_key(compare)))

    def is_well_formed(self) -> bool:
        """Determine whether this string is free of lone surrogates."""
        return not any(CodePoint(ord(unit)).is_surrogate() for unit in self._units)

    def to_well_formed(self) -> 'CodePointString':
        """Replace each lone surrogate with U+FFFD REPLACEMENT CHARACTER."""
        replacement = str(CodePoint.REPLACEMENT_CHARACTER)
        return CodePointString._wrap([
            replacement if CodePoint(ord(unit)).is_surrogate() else unit
            for unit in self._units
        ])

    # ----------------------------------------------------------------------------------
    # Higher-order traversals. Callbacks receive unit, index, and this string.

    def _enumerate(self) -> Iterator[tuple[int, str]]:
        # Iterate over a snapshot, so that callbacks may mutate this string.
        return enumerate(list(self._units))

    def filter(self, predicate: Callback[Any]) -> 'CodePointString':
        return CodePointString._wrap([
            unit for index, unit in self._enumerate() if predicate(unit, index, self)
        ])

    def map(self, function: Callback[Any]) -> 'CodePointString':
        """
        Map each unit to a new unit. The function may return any text, as long
        as it has exactly one code point, or this method raises `InvalidUnit`.
        """
        units = []
        for index, unit in self._enumerate():
            result = function(unit, index, self)
            mapped = to_units(result)
            if len(mapped) != 1:
                raise InvalidUnit(result, index)
            units.append(mapped[0])
        return CodePointString._wrap(units)

    def flat_map(self, function: Callback[Any]) -> 'CodePointString':
        """Map each unit to text of any length and concatenate the results."""
        units = []
        for index, unit in self._enumerate():
            units.extend(to_units(function(unit, index, self)))
        return CodePointString._wrap(units)

    def every(self, predicate: Callback[Any]) -> bool:
        return all(predicate(unit, index, self) for index, unit in self._enumerate())

    def some(self, predicate: Callback[Any]) -> bool:
        return any(predicate(unit, index, self) for index, unit in self._enumerate())

    def _find(self, predicate: Callback[Any], reverse: bool) -> tuple[int, None | str]:
        entries = list(self._enumerate())
        if reverse:
            entries.reverse()
        for index, unit in entries:
            if predicate(unit, index, self):
                return index, unit
        return -1, None

    def find(self, predicate: Callback[Any]) -> None | str:
        return self._find(predicate, False)[1]

    def find_index(self, predicate: Callback[Any]) -> int:
        return self._find(predicate, False)[0]

    def find_last(self, predicate: Callback[Any]) -> None | str:
        return self._find(predicate, True)[1]

    def find_last_index(self, predicate: Callback[Any]) -> int:
        return self._find(predicate, True)[0]

    def for_each(self, function: Callback[Any]) -> None:
        for index, unit in self._enumerate():
            function(unit, index, self)

    # ----------------------------------------------------------------------------------
    # Mutators. They validate all arguments before modifying this string.

    def push(self, *units: str) -> int:
        """Append the units and return the new length."""
        self._units.extend(validate_units(units))
        return len(self._units)

    def unshift(self, *units: str) -> int:
        """Prepend the units and return the new length."""
        self._units[:0] = validate_units(units)
        return len(self._units)

    def pop(self) -> None | str:
        return self._units.pop() if self._units else None

    def shift(self) -> None | str:
        return self._units.pop(0) if self._units else None

    def splice(
        self,
        start: SupportsIndex = 0,
        delete_count: None | SupportsIndex = None,
        *items: str,
    ) -> list[str]:
        """
        Remove `delete_count` units at `start`, insert the items in their place,
        and return the removed units. A negative start counts from the end. A
        missing delete count removes all units from the start onward.
        """
        inserted = validate_units(items)

        length = len(self._units)
        begin = operator.index(start)
        if begin < 0:
            begin = max(length + begin, 0)
        else:
            begin = min(begin, length)

        if delete_count is None:
            end = length
        else:
            end = begin + min(max(operator.index(delete_count), 0), length - begin)

        removed = self._units[begin:end]
        self._units[begin:end] = inserted
        return removed

    # ----------------------------------------------------------------------------------
    # Conversions

    def to_text(self) -> str:
        return ''.join(self._units)

    def to_unit_list(self) -> list[str]:
        return list(self._units)

    def to_bytes(self, encoding: str = 'utf-8') -> bytes:
        return self.to_text().encode(encoding, errors=_errors_for(encoding))

    def __units__(self) -> list[str]:
        return self.to_unit_list()

    # ----------------------------------------------------------------------------------
    # Python protocols

    def __len__(self) -> int:
        return len(self._units)

    def __iter__(self) -> Iterator[str]:
        return iter(self._units)

    def __reversed__(self) -> Iterator[str]:
        return reversed(self._units)

    def __contains__(self, needle: object) -> bool:
        return self.includes(needle)  # type: ignore[arg-type]

    @overload
    def __getitem__(self, index: SupportsIndex) -> str: ...
    @overload
    def __getitem__(self, index: builtins.slice) -> 'CodePointString': ...
    def __getitem__(self, index: SupportsIndex | builtins.slice) -> 'str | CodePointString':
        if isinstance(index, builtins.slice):
            return CodePointString._wrap(self._units[index])
        return self._units[index]

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CodePointString):
            return self._units == other._units
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __add__(self, other: object) -> 'CodePointString':
        try:
            units = to_units(other)
        except TypeError:
            return NotImplemented
        return CodePointString._wrap(self._units + units)

    def __radd__(self, other: object) -> 'CodePointString':
        try:
            units = to_units(other)
        except TypeError:
            return NotImplemented
        return CodePointString._wrap(units + self._units)

    def __mul__(self, count: object) -> 'CodePointString':
        if not isinstance(count, int):
            return NotImplemented
        return self.repeat(count)

    __rmul__ = __mul__

    def __repr__(self) -> str:
        return f'CodePointString({self.to_text()!r})'

    def __str__(self) -> str:
        return self.to_text()


# --------------------------------------------------------------------------------------


@to_units.register
def _(value: CodePointString) -> list[str]:
    return value.to_unit_list()


def _is_whitespace(unit: str) -> bool:
    return CodePoint(ord(unit)).is_whitespace()


def _to_replacement(replacement: 'Text | Replacement') -> Replacement:
    if callable(replacement):
        return replacement
    return to_text(replacement)


def _errors_for(encoding: str) -> str:
    # Only UTF-16 and UTF-32 can represent lone surrogates losslessly.
    name = codecs.lookup(encoding).name
    if name.startswith(('utf-16', 'utf-32')):
        return 'surrogatepass'
    return 'strict'
