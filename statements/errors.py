"""
Exceptions raised while building statements.

Every error is raised synchronously at the call that detected it (escape,
render or bulk preparation); nothing in this package retries or collects
errors for later.
"""


class StatementError(Exception):
    """Base class for statement construction errors."""
    pass


class UnescapableValueError(StatementError, TypeError):
    """Raised when a value has no SQL literal representation."""
    pass


class InvalidColumnNameError(StatementError, ValueError):
    """Raised by the strict identifier helper for disallowed characters."""
    pass


class UnsupportedColumnExpressionError(StatementError, TypeError):
    """Raised for a column entry that is not a name, pair, Raw or sub-select."""
    pass


class EmptyRowSetError(StatementError, ValueError):
    """Raised when a bulk statement is given no rows."""
    pass


class DuplicateColumnNameError(StatementError, ValueError):
    """Raised when extra bulk columns repeat a column of the rows."""
    pass


class RowShapeMismatchError(StatementError, ValueError):
    """Raised when a bulk row's columns differ from the first row's.

    Attributes:
        row_number: 1-based position of the offending row
        expected: Column signature of the first row
        actual: Column signature of the offending row
    """

    def __init__(self, row_number: int, expected: str, actual: str):
        self.row_number = row_number
        self.expected = expected
        self.actual = actual
        super().__init__(
            f"invalid rows[{row_number}], keys no match: {expected} and {actual}"
        )


class MalformedFetchShapeError(StatementError, ValueError):
    """Raised when a result set does not have the shape a fetch helper needs."""
    pass


class EmptyAssignmentListError(StatementError, ValueError):
    """Raised when an UPDATE is rendered without any SET assignment."""
    pass
