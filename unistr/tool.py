"""
Unistr's command line tool.
"""

import argparse
from collections.abc import Sequence
from contextlib import AbstractContextManager
import logging
import re
import sys
from textwrap import dedent
import traceback
from types import TracebackType
from typing import TextIO

from .codepoint import CodePoint
from .error import InvalidArgument
from .pattern import Pattern
from .ustring import CodePointString
from . import __version__


_logger = logging.getLogger(__name__)


# Both BMP and supplementary escapes, so that surrogate pairs can be spelled out.
ESCAPE = re.compile(r'\\u([0-9A-Fa-f]{4})|\\U([0-9A-Fa-f]{8})')


# --------------------------------------------------------------------------------------


class UserError(Exception):
    """
    An error indicating invalid user input. When code raises this error, it
    probably is *not* helpful to print an exception trace.
    """


class user_error(AbstractContextManager['user_error']):
    """
    A context manager to turn one or more exceptions into a user error. If the
    context manager tries to exit with one of the listed exception types, it
    instead raises a `UserError` with the message `msg.format(*args, **kwargs)`.
    """

    def __init__(
        self,
        exc_types: type[BaseException] | Sequence[type[BaseException]],
        msg: str,
        *args: object,
        **kwargs: object,
    ) -> None:
        if isinstance(exc_types, type):
            exc_types = (exc_types,)

        self._exc_types = tuple(exc_types)
        self._msg = msg
        self._args = args
        self._kwargs = kwargs

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        _: TracebackType | None,
    ) -> None:
        if exc_type is not None and issubclass(exc_type, self._exc_types):
            msg = self._msg.format(*self._args, **self._kwargs)
            raise UserError(msg) from exc_value


def unescape(text: str) -> str:
    """Replace `\\uXXXX` and `\\UXXXXXXXX` escapes with the code units they name."""
    return ESCAPE.sub(lambda m: chr(int(m.group(1) or m.group(2), 16)), text)


# --------------------------------------------------------------------------------------


def width_limited_formatter(prog: str) -> argparse.HelpFormatter:
    return argparse.RawTextHelpFormatter(prog, width=70)


def configure_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='unistr',
        description='Measure, search, and transform text by Unicode code point.',
        epilog=dedent("""
            Use "-" as text to read it from standard input. With --escape,
            \\uXXXX and \\UXXXXXXXX escapes in the text are decoded first, so
            "\\ud83d\\ude04" is a single code point, just like "\\U0001F604".
        """),
        formatter_class=width_limited_formatter,
    )

    parser.add_argument(
        '--escape', '-e',
        action='store_true',
        help='decode \\u and \\U escapes in text arguments',
    )
    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='use verbose mode to enable instructive logging',
    )
    parser.add_argument(
        '--version', '-V',
        action='store_true',
        help='display the tool version and exit',
    )

    operations = parser.add_subparsers(dest='operation', metavar='OPERATION')

    def add(name: str, help: str) -> argparse.ArgumentParser:
        subparser = operations.add_parser(
            name, help=help, formatter_class=width_limited_formatter
        )
        subparser.add_argument('text', help='the text to operate on')
        return subparser

    add('length', 'count the code points')
    add('units', 'list the code points, one per line')
    add('reverse', 'reverse the code points')
    add('upper', 'convert to upper case')
    add('lower', 'convert to lower case')
    add('trim', 'remove leading and trailing white space')

    index_of = add('index-of', 'find the first position of the needle')
    index_of.add_argument('needle')
    index_of.add_argument('--start', type=int, default=0)

    slicing = add('slice', 'extract code points from START up to END')
    slicing.add_argument('start', type=int)
    slicing.add_argument('end', type=int, nargs='?')

    for name, where in (('pad-end', 'end'), ('pad-start', 'start')):
        pad = add(name, f'pad the {where} to LENGTH code points')
        pad.add_argument('target_length', metavar='LENGTH', type=int)
        pad.add_argument('pad', nargs='?', default=' ')

    repeat = add('repeat', 'repeat COUNT times')
    repeat.add_argument('count', type=int)

    match = add('match', 'print the matches of a regular expression')
    match.add_argument('pattern')
    match.add_argument(
        '--global', '-g',
        dest='is_global',
        action='store_true',
        help='print all matches and not just the first one',
    )
    match.add_argument(
        '--ignore-case', '-i',
        action='store_true',
        help='match without regard to case',
    )

    return parser


# --------------------------------------------------------------------------------------


def run(arguments: Sequence[str], stdin: TextIO | None = None, stdout: TextIO | None = None) -> int:
    # ------------------------------------------------------------- Parse the options
    parser = configure_parser()
    options = parser.parse_args(arguments[1:])

    logging.basicConfig(
        format='[%(levelname)s] %(name)s: %(message)s',
        level=logging.INFO if options.verbose else logging.WARNING,
    )

    stdin = stdin or sys.stdin
    stdout = stdout or sys.stdout

    try:
        return process(options, stdin, stdout)
    except UserError as x:
        stdout.write(f'Error: {x.args[0]}\n')
        if x.__context__ and x.__context__.args:
            stdout.write(f'In particular: {x.__context__.args[0]}\n')
        return 1
    except Exception as x:
        stdout.write(
            'Unistr encountered an unexpected error. For details, please see the\n'
            'exception trace below.\n'
        )
        stdout.write(''.join(traceback.format_exception(x)))
        return 1


def process(options: argparse.Namespace, stdin: TextIO, stdout: TextIO) -> int:
    if options.version:
        stdout.write(f'unistr {__version__}\n')
        return 0

    if options.operation is None:
        raise UserError('There is no operation to perform. Try "-h" for all options.')

    # ------------------------------------------------------------ Prepare the text
    def prepare(text: str) -> str:
        return unescape(text) if options.escape else text

    raw = stdin.read().rstrip('\n') if options.text == '-' else options.text
    text = CodePointString(prepare(raw))
    _logger.info('operating on %d code points with "%s"', text.length, options.operation)

    # ---------------------------------------------------------- Perform operation
    result: int | CodePointString | list[CodePointString]
    match options.operation:
        case 'length':
            result = text.length
        case 'units':
            for unit in text:
                stdout.write(f'{CodePoint.of(unit)!r}\n')
            return 0
        case 'reverse':
            result = text.reverse()
        case 'upper':
            result = text.to_upper_case()
        case 'lower':
            result = text.to_lower_case()
        case 'trim':
            result = text.trim()
        case 'index-of':
            result = text.index_of(prepare(options.needle), options.start)
        case 'slice':
            result = text.slice(options.start, options.end)
        case 'pad-end':
            result = text.pad_end(options.target_length, prepare(options.pad))
        case 'pad-start':
            result = text.pad_start(options.target_length, prepare(options.pad))
        case 'repeat':
            with user_error(InvalidArgument, '{} is not a valid repeat count', options.count):
                result = text.repeat(options.count)
        case 'match':
            flags = ('g' if options.is_global else '') + ('i' if options.ignore_case else '')
            with user_error(re.error, '"{}" is not a valid regular expression', options.pattern):
                pattern = Pattern.of(prepare(options.pattern), flags)
            result = text.match(pattern)
        case _:
            raise UserError(f'"{options.operation}" is not a known operation')

    # ------------------------------------------------------------- Print result
    if isinstance(result, int):
        stdout.write(f'{result}\n')
    elif isinstance(result, list):
        for item in result:
            stdout.write(f'{item.to_well_formed()}\n')
    else:
        # Lone surrogates cannot be printed in most encodings.
        stdout.write(f'{result.to_well_formed()}\n')
    return 0
