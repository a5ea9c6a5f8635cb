import io
import unittest

from unistr import __version__
from unistr.tool import run, unescape, user_error, UserError


class TestTool(unittest.TestCase):

    def invoke(self, *arguments: str, stdin: str = '') -> tuple[int, str]:
        stdout = io.StringIO()
        status = run(['unistr', *arguments], stdin=io.StringIO(stdin), stdout=stdout)
        return status, stdout.getvalue()

    def test_unescape(self) -> None:
        self.assertEqual(unescape('\\ud83d\\ude04'), '\ud83d\ude04')
        self.assertEqual(unescape('\\U0001F604!'), '\U0001F604!')
        self.assertEqual(unescape('plain'), 'plain')

    def test_user_error(self) -> None:
        with self.assertRaises(UserError) as context:
            with user_error(ValueError, '{} is bad', 'input'):
                raise ValueError('details')
        self.assertEqual(context.exception.args[0], 'input is bad')
        self.assertIsInstance(context.exception.__cause__, ValueError)

        with self.assertRaises(KeyError):
            with user_error(ValueError, 'unused'):
                raise KeyError('other')

    def test_version(self) -> None:
        self.assertEqual(self.invoke('--version'), (0, f'unistr {__version__}\n'))

    def test_no_operation(self) -> None:
        status, output = self.invoke()
        self.assertEqual(status, 1)
        self.assertTrue(output.startswith('Error: There is no operation'))

    def test_length(self) -> None:
        self.assertEqual(self.invoke('length', 'abc'), (0, '3\n'))
        self.assertEqual(
            self.invoke('--escape', 'length', '\\ud83d\\ude04 and \\ud83d\\ude04'),
            (0, '7\n'),
        )

    def test_units(self) -> None:
        self.assertEqual(
            self.invoke('-e', 'units', 'a\\ud83d\\ude04'), (0, 'U+0061\nU+1F604\n')
        )

    def test_transforms(self) -> None:
        self.assertEqual(self.invoke('reverse', 'abc'), (0, 'cba\n'))
        self.assertEqual(self.invoke('upper', 'straße'), (0, 'STRASSE\n'))
        self.assertEqual(self.invoke('lower', 'ABC'), (0, 'abc\n'))
        self.assertEqual(self.invoke('trim', '  abc '), (0, 'abc\n'))
        self.assertEqual(self.invoke('slice', 'Hello', '1', '3'), (0, 'el\n'))
        self.assertEqual(self.invoke('slice', 'Hello', '2'), (0, 'llo\n'))
        self.assertEqual(self.invoke('pad-end', 'foo', '9', 'bar'), (0, 'foobarbar\n'))
        self.assertEqual(self.invoke('pad-start', 'foo', '9', 'bar'), (0, 'barbarfoo\n'))
        self.assertEqual(self.invoke('pad-end', 'foo', '5'), (0, 'foo  \n'))
        self.assertEqual(self.invoke('repeat', 'ab', '3'), (0, 'ababab\n'))

    def test_stdin(self) -> None:
        self.assertEqual(self.invoke('reverse', '-', stdin='abc\n'), (0, 'cba\n'))

    def test_index_of(self) -> None:
        self.assertEqual(self.invoke('index-of', 'Hello, World!', 'o'), (0, '4\n'))
        self.assertEqual(
            self.invoke('index-of', 'Hello, World!', 'o', '--start', '5'), (0, '8\n')
        )
        self.assertEqual(
            self.invoke('-e', 'index-of', '\\ud83d\\ude04 and \\ud83d\\ude04', 'and'),
            (0, '2\n'),
        )

    def test_match(self) -> None:
        self.assertEqual(self.invoke('match', 'a1b2', '[0-9]'), (0, '1\n'))
        self.assertEqual(self.invoke('match', '-g', 'a1b2', '[0-9]'), (0, '1\n2\n'))
        self.assertEqual(self.invoke('match', '-g', '-i', 'aAb', 'a'), (0, 'a\nA\n'))
        self.assertEqual(self.invoke('match', 'abc', 'x'), (0, ''))

    def test_user_errors(self) -> None:
        status, output = self.invoke('repeat', 'ab', '-1')
        self.assertEqual(status, 1)
        self.assertTrue(output.startswith('Error: -1 is not a valid repeat count'))
        self.assertIn('In particular: repeat count -1 is negative', output)

        status, output = self.invoke('match', 'abc', '(')
        self.assertEqual(status, 1)
        self.assertTrue(output.startswith('Error: "(" is not a valid regular expression'))
