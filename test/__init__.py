import importlib
import pathlib
import unittest


# Re-export every TestCase from the test_*.py modules in this package, so that
# `python -m unittest test` discovers them without a pattern.

for path in sorted(pathlib.Path(__file__).parent.glob('test_*.py')):
    module = importlib.import_module(f'test.{path.stem}')
    for name, value in vars(module).items():
        if (
            not name.startswith('_')
            and isinstance(value, type)
            and issubclass(value, unittest.TestCase)
        ):
            globals()[name] = value
