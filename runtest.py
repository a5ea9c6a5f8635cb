#!/usr/bin/env python3

import os
import sys
import traceback
import unittest


if __name__ == '__main__':
    successful = False
    stream = sys.stdout

    def println(s: str = '') -> None:
        if s:
            stream.write(s)
        stream.write('\n')
        stream.flush()

    def printbar(title: str) -> None:
        println()
        println(f'─── {title} {"─" * (70 - len(title))}')

    try:
        println('§0  Setup')
        printbar('Python')
        println(f'    {sys.executable}')
        printbar('Current Directory')
        println(f'    {os.getcwd()}')
        println('\n')

        println('§1  Unit Testing')
        runner = unittest.main(
            module='test',
            exit=False,
            testRunner=unittest.TextTestRunner(stream=stream, verbosity=2),
        )
        successful = runner.result.wasSuccessful()

    except Exception as x:
        println(''.join(traceback.format_exception(x)))

    sys.exit(not successful)
