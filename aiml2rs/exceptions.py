"""
# aiml2rs: exceptions.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Exception classes.
"""


class CommittedMutateException(Exception):
    pass


class MalformedAimlException(Exception):
    _line_number: int
    _column_number: int

    def __init__(self, message: str, line_number: int, column_number: int):
        super().__init__(message)
        self._line_number = line_number
        self._column_number = column_number

    @property
    def line_number(self) -> int:
        return self._line_number

    @property
    def column_number(self) -> int:
        return self._column_number
