"""
Statements with a WHERE clause.

Classes:
- ConditionalStatement: WHERE handling and ``where_*`` shortcuts
- TableStatement: Shared single-table part of UPDATE and DELETE

SELECT, UPDATE and DELETE keep their WHERE either as a plain mapping
(``{'id': 1}``, rendered as equality conditions joined by AND) or as a
Where builder. The mapping form is cheaper; where_object() upgrades it to a
builder the first time one of the ``where_*`` shortcuts is used.
"""

from typing import TYPE_CHECKING, Any, Mapping, Optional, Union

from statements.base import Executable, condition_shortcuts
from statements.helpers import escape_name_unsafe, prepare_limit, prepare_where
from statements.ordering import Expression, OrderBy, Term
from statements.where import Where

if TYPE_CHECKING:
    from connect.base import ConnectInterface

WhereArg = Optional[Union[Where, Mapping[str, Any]]]


def to_where(connect: 'ConnectInterface', where: WhereArg) -> Where:
    """Return ``where`` as a Where builder, converting a mapping or None."""
    if isinstance(where, Where):
        return where

    builder = Where(connect)
    for name, value in (where or {}).items():
        builder.eq(name, value)
    return builder


@condition_shortcuts('where', 'where_object')
class ConditionalStatement(Executable):
    """Executable statement with a WHERE clause.

    Attributes:
        where: Where builder, mapping of column to value, or None
    """

    def __init__(self, connect: 'ConnectInterface', where: WhereArg = None):
        super().__init__(connect)
        self.where = where

    def set_where(self, where: WhereArg):
        self.where = where
        return self

    def where_object(self) -> Where:
        """Get the WHERE builder, converting a mapping or None on first use."""
        self.where = to_where(self.connect, self.where)
        return self.where

    def _where_clause(self) -> str:
        return prepare_where(self.connect, 'WHERE', self.where)


class TableStatement(ConditionalStatement):
    """Single-table UPDATE/DELETE with alias, partitions, ORDER BY and LIMIT.

    Attributes:
        table: Table name; a qualified name may be written as schema`.`table
        table_alias: Alias rendered as AS `alias`
        partitions: Partition list rendered inside PARTITION (...)
        ignore: Render the IGNORE modifier
        order: OrderBy, raw ORDER BY text or None
        limit: Row limit or None
    """

    def __init__(
        self,
        connect: 'ConnectInterface',
        table: str,
        where: WhereArg = None,
        order: Optional[Union[OrderBy, str]] = None,
        limit: Optional[int] = None
    ):
        super().__init__(connect, where)
        self.table = table
        self.table_alias = ''
        self.partitions = ''
        self.ignore = False
        self.order = order
        self.limit = limit

    def _target(self) -> str:
        return (
            escape_name_unsafe(self.table)
            + (f" AS `{self.table_alias}`" if self.table_alias else '')
            + (f" PARTITION ({self.partitions})" if self.partitions else '')
        )

    def _tail(self) -> str:
        order = self.order if isinstance(self.order, str) else (self.order.query() if self.order else '')
        return (
            self._where_clause()
            + (f" ORDER BY {order}" if order else '')
            + prepare_limit(self.limit)
        )

    def set_table(self, table: str):
        self.table = table
        return self

    def set_table_alias(self, table_alias: str):
        self.table_alias = table_alias
        return self

    def set_partitions(self, partitions: str):
        self.partitions = partitions
        return self

    def set_ignore(self, ignore: bool = True):
        self.ignore = ignore
        return self

    def set_limit(self, limit: Optional[int]):
        self.limit = limit
        return self

    def order_by(self) -> OrderBy:
        """Get the ORDER BY builder; raw text is kept as its first expression."""
        if not isinstance(self.order, OrderBy):
            order = OrderBy(self.connect)
            if self.order:
                order.expr_asc(self.order)
            self.order = order
        return self.order

    def order_asc(self, name: Term):
        """Order by a column (or 1-based position); ``('o', 'col')`` for aliases."""
        self.order_by().asc(name)
        return self

    def order_desc(self, name: Term):
        self.order_by().desc(name)
        return self

    def order_expr(self, expression: Expression):
        self.order_by().expr_asc(expression)
        return self

    def order_expr_desc(self, expression: Expression):
        self.order_by().expr_desc(expression)
        return self
