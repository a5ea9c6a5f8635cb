import unittest

from unistr.error import InvalidUnit
from unistr.ustring import CodePointString


PAIR = '\ud83d\ude04'
SMILE = '\U0001F604'


class TestMutation(unittest.TestCase):

    def test_push(self) -> None:
        string = CodePointString('abc')
        self.assertEqual(string.push('d', PAIR), 5)
        self.assertEqual(string.to_text(), f'abcd{SMILE}')
        self.assertEqual(string.length, 5)
        self.assertEqual(string.push(), 5)

        with self.assertRaises(InvalidUnit) as context:
            string.push('e', 'xy')
        self.assertEqual(context.exception.unit, 'xy')
        self.assertEqual(context.exception.position, 1)
        self.assertEqual(string.to_text(), f'abcd{SMILE}')

    def test_unshift(self) -> None:
        string = CodePointString('abc')
        self.assertEqual(string.unshift('x', 'y'), 5)
        self.assertEqual(string.to_text(), 'xyabc')

        with self.assertRaises(InvalidUnit):
            string.unshift('')
        with self.assertRaises(TypeError):
            string.unshift(CodePointString('z'))  # type: ignore
        self.assertEqual(string.to_text(), 'xyabc')

    def test_pop_and_shift(self) -> None:
        string = CodePointString(f'a{PAIR}b')
        self.assertEqual(string.pop(), 'b')
        self.assertEqual(string.pop(), SMILE)
        self.assertEqual(string.shift(), 'a')
        self.assertEqual(string.length, 0)
        self.assertIsNone(string.pop())
        self.assertIsNone(string.shift())
        self.assertEqual(string.to_text(), '')

    def test_splice(self) -> None:
        string = CodePointString('abcdef')
        self.assertEqual(string.splice(1, 2), ['b', 'c'])
        self.assertEqual(string.to_text(), 'adef')

        self.assertEqual(string.splice(-2, 1, 'X', 'Y'), ['e'])
        self.assertEqual(string.to_text(), 'adXYf')

        self.assertEqual(string.splice(1, 0, PAIR), [])
        self.assertEqual(string.to_text(), f'a{SMILE}dXYf')

        self.assertEqual(string.splice(10), [])
        self.assertEqual(string.splice(4, 100), ['Y', 'f'])
        self.assertEqual(string.splice(1, -3), [])
        self.assertEqual(string.to_text(), f'a{SMILE}dX')

        self.assertEqual(string.splice(-100, 1), ['a'])
        self.assertEqual(string.splice(), [SMILE, 'd', 'X'])
        self.assertEqual(string.length, 0)

    def test_splice_validates_first(self) -> None:
        string = CodePointString('abc')
        with self.assertRaises(InvalidUnit):
            string.splice(0, 1, 'x', 'yz')
        self.assertEqual(string.to_text(), 'abc')

    def test_observable(self) -> None:
        string = CodePointString('ab')
        string.push('c')
        self.assertEqual((string.length, string.to_text()), (3, 'abc'))
        string.shift()
        self.assertEqual((string.length, string.to_text()), (2, 'bc'))
        string.splice(1, 1)
        self.assertEqual((string.length, string.to_text()), (1, 'b'))
