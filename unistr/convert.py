"""
Conversion of arguments into units.

Operations that accept "a string or text" resolve their argument with
`to_units()` at the call boundary. The function dispatches on the argument's
type, with one registered conversion per accepted variant: text, a code point,
or an explicit list or tuple of units, which is validated. `CodePointString`
registers its own conversion in `unistr.ustring`. Third-party types can
participate either by registering with `to_units.register()` or by
implementing a `__units__()` method that returns an iterable of units.
"""

from collections.abc import Iterable
from functools import singledispatch
import logging

from .codepoint import CodePoint, decode, is_unit
from .error import InvalidUnit


_logger = logging.getLogger(__name__)


@singledispatch
def to_units(value: object) -> list[str]:
    """Convert the value into a fresh list of units."""
    method = getattr(type(value), '__units__', None)
    if method is None:
        raise TypeError(
            f'{type(value).__name__} is not convertible to code point units'
        )
    return validate_units(method(value))


@to_units.register
def _(value: str) -> list[str]:
    return list(decode(value))


@to_units.register
def _(value: CodePoint) -> list[str]:
    return [chr(value)]


@to_units.register(list)
@to_units.register(tuple)
def _(value: list[str] | tuple[str, ...]) -> list[str]:
    return validate_units(value)


def to_text(value: object) -> str:
    """Convert the value into text with all surrogate pairs decoded."""
    return ''.join(to_units(value))


def validate_units(units: Iterable[object]) -> list[str]:
    """
    Validate that every element of the iterable is a unit and return a fresh
    list with the decoded units. Surrogate pairs count as one code point and
    hence are valid units. Non-strings raise a `TypeError`, strings with zero
    or more than one code point raise an `InvalidUnit` error naming the element
    and its position.
    """
    result: list[str] = []
    for position, unit in enumerate(units):
        if not isinstance(unit, str):
            raise TypeError(
                f'unit at position {position} is {type(unit).__name__}, not str'
            )
        if not is_unit(unit):
            _logger.debug('rejecting unit %r at position %d', unit, position)
            raise InvalidUnit(unit, position)
        result.append(decode(unit))
    return result
