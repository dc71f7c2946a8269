"""
=================
SELECT statement.
=================

Grammar (https://dev.mysql.com/doc/refman/8.4/en/select.html)::

    SELECT [DISTINCT] [STRAIGHT_JOIN] [SQL_SMALL_RESULT | SQL_BIG_RESULT]
        columns FROM table [joins] [WHERE ...] [GROUP BY ...] [HAVING ...]
        [ORDER BY ...] [LIMIT n [OFFSET m]]

Columns accept:
- ``'name'`` -> `name`
- ``('table', 'name')`` -> `table`.`name`
- ``Raw('COUNT(*)')`` -> COUNT(*)
- a Select -> (SELECT ...)
- a dict ``{'alias': column}`` -> column AS `alias`

Example:
    >>> connect.select('users', ['id', {'label': 'name'}]).where_eq('id', 1).query()
    "SELECT `id`,`name` AS `label` FROM `users` WHERE `id`=1"

A Select is bound to the connection it was created for; to run it elsewhere
use ``other.exec(select.query())`` and make sure both connections share a
charset.
"""

from typing import TYPE_CHECKING, Any, List, Mapping, Optional, Sequence, Tuple, Union

from statements.base import condition_shortcuts
from statements.conditional import ConditionalStatement, WhereArg, to_where
from statements.errors import UnsupportedColumnExpressionError
from statements.helpers import escape_name_unsafe, prepare_limit, prepare_where
from statements.ordering import GroupBy, OrderBy
from statements.raw import Raw
from statements.table import CROSS, INNER, LEFT, RIGHT, Join, TableRef, render_table
from statements.where import Where

if TYPE_CHECKING:
    from connect.base import ConnectInterface

Column = Union[str, Sequence[str], Raw, 'Select']
Columns = Sequence[Union[Column, Mapping[str, Column]]]

# Result size hints; None renders neither
SMALL_RESULT = 'SQL_SMALL_RESULT'
BIG_RESULT = 'SQL_BIG_RESULT'


@condition_shortcuts('having', 'having_object')
class Select(ConditionalStatement):
    """SELECT statement builder.

    Attributes:
        table: Name, (schema, table) pair or TableFactor
        columns: Normalized ``(alias, column)`` entries; empty selects ``*``
        where: Where builder, mapping or None
        having: Where builder, mapping or None
        group: GroupBy, raw GROUP BY text or None
        order: OrderBy, raw ORDER BY text or None
        limit: Row limit or None
        offset: Rows to skip; only rendered together with a limit
        joins: JOIN clauses in the order they were added
    """

    def __init__(
        self,
        connect: 'ConnectInterface',
        table: TableRef,
        columns: Optional[Columns] = None,
        where: WhereArg = None,
        having: WhereArg = None,
        group: Optional[Union[GroupBy, str]] = None,
        order: Optional[Union[OrderBy, str]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        distinct: bool = False
    ):
        super().__init__(connect, where)
        self.table = table
        self.columns: List[Tuple[Optional[str], Column]] = []
        self.having = having
        self.group = group
        self.order = order
        self.limit = limit
        self.offset = offset
        self.is_distinct = distinct
        self.is_straight_join = False
        self.result_size: Optional[str] = None
        self.joins: List[Join] = []
        if columns:
            self.set_columns(columns)

    # -------------------------------------------------------------------------
    # Rendering
    # -------------------------------------------------------------------------

    def _column(self, column: Column) -> str:
        if isinstance(column, Raw):
            return column.render(self.connect)
        if isinstance(column, Select):
            return f"({column.query()})"
        return escape_name_unsafe(column)

    def _columns_clause(self) -> str:
        if not self.columns:
            return '*'
        return ','.join(
            self._column(column) + (f" AS `{alias}`" if alias is not None else '')
            for alias, column in self.columns
        )

    @staticmethod
    def _terms_clause(keyword: str, terms: Optional[Union[GroupBy, OrderBy, str]]) -> str:
        if terms is None:
            return ''
        rendered = terms if isinstance(terms, str) else terms.query()
        return f" {keyword} {rendered}" if rendered else ''

    def query(self) -> str:
        """Render the SELECT statement."""
        return (
            'SELECT '
            + ('DISTINCT ' if self.is_distinct else '')
            + ('STRAIGHT_JOIN ' if self.is_straight_join else '')
            + (f"{self.result_size} " if self.result_size else '')
            + f"{self._columns_clause()} FROM {render_table(self.table)}"
            + ''.join(join.query() for join in self.joins)
            + self._where_clause()
            + self._terms_clause('GROUP BY', self.group)
            + prepare_where(self.connect, 'HAVING', self.having)
            + self._terms_clause('ORDER BY', self.order)
            + prepare_limit(self.limit, self.offset)
        )

    # -------------------------------------------------------------------------
    # Setters
    # -------------------------------------------------------------------------

    def set_table(self, table: TableRef) -> 'Select':
        self.table = table
        return self

    def set_columns(self, columns: Columns) -> 'Select':
        """
        Replace the column list.

        A single alias mapping may be passed instead of a list, so
        ``{'label': 'name'}`` selects `name` AS `label`.

        Raises:
            UnsupportedColumnExpressionError: If an entry is not a name,
                qualified name, Raw, Select or alias mapping of those, or if
                a bare string is given instead of a list
        """
        if isinstance(columns, Mapping):
            columns = [columns]
        elif isinstance(columns, (str, bytes)):
            raise UnsupportedColumnExpressionError(
                f"columns must be a list of columns, got a string: {columns!r}"
            )

        normalized: List[Tuple[Optional[str], Column]] = []
        for entry in columns:
            if isinstance(entry, Mapping):
                for alias, column in entry.items():
                    normalized.append((alias, self._check_column(column)))
            else:
                normalized.append((None, self._check_column(entry)))
        self.columns = normalized
        return self

    @staticmethod
    def _check_column(column: Any) -> Column:
        if isinstance(column, (str, Raw, Select)):
            return column
        if isinstance(column, (list, tuple)) and column and all(isinstance(part, str) for part in column):
            return column
        raise UnsupportedColumnExpressionError(
            f"Column must be a name, a qualified name, Raw or Select, got {type(column).__name__}"
        )

    def set_limit(self, limit: Optional[int], offset: Optional[int] = None) -> 'Select':
        self.limit = limit
        self.offset = offset
        return self

    def set_having(self, having: WhereArg) -> 'Select':
        self.having = having
        return self

    def distinct(self, distinct: bool = True) -> 'Select':
        self.is_distinct = distinct
        return self

    def straight_join(self, straight_join: bool = True) -> 'Select':
        self.is_straight_join = straight_join
        return self

    def sql_small_result(self) -> 'Select':
        self.result_size = SMALL_RESULT
        return self

    def sql_big_result(self) -> 'Select':
        self.result_size = BIG_RESULT
        return self

    def sql_def_result(self) -> 'Select':
        self.result_size = None
        return self

    # -------------------------------------------------------------------------
    # Builders
    # -------------------------------------------------------------------------

    def having_object(self) -> Where:
        """Get the HAVING builder, converting a mapping or None on first use."""
        self.having = to_where(self.connect, self.having)
        return self.having

    def group_by(self) -> GroupBy:
        """Get the GROUP BY builder; raw text is kept as its first expression."""
        if not isinstance(self.group, GroupBy):
            group = GroupBy(self.connect)
            if self.group:
                group.expr(self.group)
            self.group = group
        return self.group

    def order_by(self) -> OrderBy:
        """Get the ORDER BY builder; raw text is kept as its first expression."""
        if not isinstance(self.order, OrderBy):
            order = OrderBy(self.connect)
            if self.order:
                order.expr_asc(self.order)
            self.order = order
        return self.order

    # -------------------------------------------------------------------------
    # Joins
    # -------------------------------------------------------------------------

    def inner_join(self, table: TableRef, on=None, using: Optional[List[str]] = None) -> 'Select':
        """
        Add ``INNER JOIN table ON ...`` or ``... USING (...)``.

        Args:
            table: Name, (schema, table) pair or TableFactor
            on: Where builder or ``(('items', 'user_id'), ('users', 'id'))``
            using: Column names shared by both tables

        Example:
            >>> connect.select('users').inner_join('items', on=(('items', 'user_id'), ('users', 'id')))
        """
        self.joins.append(Join(INNER, table, on, list(using or [])))
        return self

    def left_join(self, table: TableRef, on=None, using: Optional[List[str]] = None) -> 'Select':
        self.joins.append(Join(LEFT, table, on, list(using or [])))
        return self

    def right_join(self, table: TableRef, on=None, using: Optional[List[str]] = None) -> 'Select':
        self.joins.append(Join(RIGHT, table, on, list(using or [])))
        return self

    def cross_join(self, table: TableRef) -> 'Select':
        self.joins.append(Join(CROSS, table))
        return self
