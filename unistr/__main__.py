import sys


REQUIRED_VERSION = (3, 11)


def main() -> None:
    if sys.version_info < REQUIRED_VERSION:
        found = '.'.join(str(v) for v in sys.version_info[:3])
        required = '.'.join(str(v) for v in REQUIRED_VERSION)
        sys.stderr.write(
            f'Error: unistr requires Python {required} or later '
            f'but is running on Python {found}.\n'
        )
        sys.exit(1)

    # The tool uses syntax unavailable before 3.11, so import only after the check.
    from .tool import run
    sys.exit(run(sys.argv))


if __name__ == '__main__':
    main()
