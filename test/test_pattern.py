import re
import unittest

from unistr.error import InvalidArgument
from unistr.pattern import Pattern, to_literal_pattern, to_pattern
from unistr.ustring import CodePointString


PAIR = '\ud83d\ude04'
SMILE = '\U0001F604'


class TestPattern(unittest.TestCase):

    def test_flags(self) -> None:
        pattern = Pattern.of('a', 'gim')
        self.assertTrue(pattern.is_global)
        self.assertFalse(pattern.is_literal)
        self.assertEqual(pattern.flags, 'gim')
        self.assertTrue(pattern.regex.flags & re.IGNORECASE)
        self.assertTrue(pattern.regex.flags & re.MULTILINE)

        self.assertEqual(Pattern.of('a').flags, '')
        self.assertEqual(Pattern.of('a', 'sx').flags, 'sx')

        with self.assertRaises(InvalidArgument):
            Pattern.of('a', 'gg')
        with self.assertRaises(InvalidArgument):
            Pattern.of('a', 'u')
        with self.assertRaises(re.error):
            Pattern.of('(')

    def test_source(self) -> None:
        self.assertEqual(Pattern.of(PAIR).source, SMILE)
        self.assertEqual(repr(Pattern.of('a+', 'g')), '/a+/g')
        self.assertEqual(Pattern.literal('a.b').source, re.escape('a.b'))

    def test_matches(self) -> None:
        text = f'{SMILE} and {SMILE}'
        self.assertEqual(Pattern.of(PAIR).matches(text), [SMILE])
        self.assertEqual(Pattern.of(PAIR, 'g').matches(text), [SMILE, SMILE])
        self.assertEqual(Pattern.of('x', 'g').matches(text), [])
        self.assertEqual(Pattern.of('x').matches(text), [])
        self.assertEqual(Pattern.literal('a.b', True).matches('axb a.b'), ['a.b'])

    def test_to_global(self) -> None:
        pattern = Pattern.of('a')
        self.assertTrue(pattern.to_global().is_global)
        self.assertFalse(pattern.is_global)

        global_pattern = Pattern.of('a', 'g')
        self.assertIs(global_pattern.to_global(), global_pattern)
        self.assertTrue(Pattern.literal('a').to_global().is_literal)

    def test_substitute(self) -> None:
        self.assertEqual(Pattern.of('-').substitute('+', 'a-b-c'), 'a+b-c')
        self.assertEqual(Pattern.of('-', 'g').substitute('+', 'a-b-c'), 'a+b+c')
        self.assertEqual(
            Pattern.of(r'(\w)-', 'g').substitute(r'\1=', 'a-b-c'), 'a=b=c'
        )
        self.assertEqual(
            Pattern.literal('-').substitute(r'\1', 'a-b'), 'a\\1b'
        )
        self.assertEqual(
            Pattern.of('[a-c]', 'g').substitute(lambda m: m.group(0).upper(), 'a-b-c'),
            'A-B-C',
        )
        self.assertEqual(Pattern.of('x').substitute(PAIR, 'axb'), f'a{SMILE}b')

    def test_conversion(self) -> None:
        pattern = Pattern.of('a')
        self.assertIs(to_pattern(pattern), pattern)
        self.assertIs(to_literal_pattern(pattern), pattern)

        compiled = re.compile('x+')
        self.assertIs(to_pattern(compiled).regex, compiled)
        self.assertFalse(to_pattern(compiled).is_global)
        self.assertFalse(to_literal_pattern(compiled).is_literal)

        self.assertFalse(to_pattern('x+').is_literal)
        self.assertFalse(to_pattern(CodePointString('x+')).is_literal)
        self.assertTrue(to_literal_pattern('x+').is_literal)
        self.assertTrue(to_literal_pattern(CodePointString('x+')).is_literal)
