"""Strings that index, measure, and search by Unicode code point."""

from .codepoint import CodePoint, codepoint_length, decode, is_unit
from .convert import to_text, to_units
from .error import InvalidArgument, InvalidUnit, UnistrError
from .pattern import Pattern
from .ustring import CodePointString


__all__ = (
    'CodePoint',
    'CodePointString',
    'InvalidArgument',
    'InvalidUnit',
    'Pattern',
    'UnistrError',
    'codepoint_length',
    'decode',
    'is_unit',
    'to_text',
    'to_units',
)

__version__ = '0.1.0'
