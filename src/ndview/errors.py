from __future__ import annotations

__all__ = [
    "BaseNDViewError",
    "IncompatibleDimensionsError",
    "InvalidArrayIndexError",
    "InvalidRangeError",
]


class BaseNDViewError(Exception):
    """
    Base error which all ndview errors are sub-classed from.
    """

    _msg: str = "{}"

    def __init__(self, *args: object) -> None:
        """
        If a single argument is passed, treat it as a pre-formatted message.

        If multiple arguments are passed, they are used as arguments for the template string
        class variable.
        """
        if len(args) == 1:
            super().__init__(args[0])
        else:
            super().__init__(self._msg.format(*args))


class InvalidArrayIndexError(BaseNDViewError, IndexError):
    """
    Raised when an index falls outside of the dimension it addresses, after negative
    wraparound and zero-as-end resolution.
    """

    _msg = "index {} out of bounds for dimension with length {}"

    def __init__(self, index: int, dimension: int, is_end: bool = False) -> None:
        self.index = index
        self.dimension = dimension
        self.is_end = is_end
        if is_end:
            super().__init__(f"end index {index} out of bounds for dimension with length {dimension}")
        else:
            super().__init__(index, dimension)


class InvalidRangeError(BaseNDViewError, IndexError):
    """
    Raised when a span does not select anything, i.e. its resolved start is not strictly
    before its resolved end.
    """

    _msg = "invalid range [{}, {}) for dimension with length {}"

    def __init__(self, *args: object) -> None:
        if len(args) == 3:
            self.start, self.end, self.dimension = args
        super().__init__(*args)


class IncompatibleDimensionsError(BaseNDViewError, ValueError):
    """
    Raised when shapes disagree: a selection with the wrong number of axes, a source array
    whose shape differs from the view it is written into, or mapped results of varying shape.
    """

    _msg = "incompatible dimensions; expected {!r}, got {!r}"

    def __init__(self, *args: object) -> None:
        if len(args) == 2:
            self.expected, self.actual = args
        super().__init__(*args)
