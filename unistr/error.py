class UnistrError(Exception):
    """The base class of all errors raised by unistr."""


class InvalidUnit(UnistrError, ValueError):
    """
    An error indicating that a value expected to be a unit, i.e., a string
    holding exactly one code point, is empty or holds more than one code point.
    The offending value is available as `unit` and, when the value was one of
    several arguments, its index as `position`.
    """

    def __init__(self, unit: object, position: None | int = None) -> None:
        if position is None:
            message = f'{unit!r} is not a single code point'
        else:
            message = f'{unit!r} at position {position} is not a single code point'
        super().__init__(message)
        self.unit = unit
        self.position = position


class InvalidArgument(UnistrError, ValueError):
    """An error indicating an argument with an out-of-range or malformed value."""
