"""
UPDATE statement.

Grammar (https://dev.mysql.com/doc/refman/8.4/en/update.html)::

    UPDATE [IGNORE] table [AS alias] [PARTITION (p,...)]
        SET col=value,... [WHERE ...] [ORDER BY ...] [LIMIT n]
"""

from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Union

from statements.conditional import TableStatement, WhereArg
from statements.errors import EmptyAssignmentListError
from statements.helpers import Name, escape_name_unsafe
from statements.ordering import OrderBy

if TYPE_CHECKING:
    from connect.base import ConnectInterface


class Update(TableStatement):
    """Single-table UPDATE builder.

    Values are escaped when the assignment is added; a Raw value such as
    ``Raw('`hits`+%s', 1)`` is rendered as an expression.

    Attributes:
        assignment_list: Rendered ``col=value`` pairs in insertion order
    """

    def __init__(
        self,
        connect: 'ConnectInterface',
        table: str,
        assignments: Optional[Mapping[str, Any]] = None,
        where: WhereArg = None,
        order: Optional[Union[OrderBy, str]] = None,
        limit: Optional[int] = None
    ):
        super().__init__(connect, table, where, order, limit)
        self.assignment_list: List[str] = []
        if assignments:
            self.assignments(assignments)

    def query(self) -> str:
        """
        Render the UPDATE statement.

        Raises:
            EmptyAssignmentListError: If no assignment was added
        """
        if not self.assignment_list:
            raise EmptyAssignmentListError(f"UPDATE of `{self.table}` has no SET assignments")
        return (
            'UPDATE'
            + (' IGNORE' if self.ignore else '')
            + f" {self._target()}"
            + ' SET ' + ','.join(self.assignment_list)
            + self._tail()
        )

    def assignment(self, name: Name, value: Any) -> 'Update':
        self.assignment_list.append(f"{escape_name_unsafe(name)}={self.connect.escape(value)}")
        return self

    def assignments(self, assignments: Mapping[str, Any]) -> 'Update':
        """Add ``column=value`` pairs from a mapping, in mapping order."""
        for name, value in assignments.items():
            self.assignment(name, value)
        return self
