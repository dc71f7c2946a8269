"""
Table references for FROM and JOIN clauses.

Classes:
- TableFactor: Table name or derived table with alias, partition and index hints
- Join: One JOIN clause of a SELECT

Functions:
- render_table: Render any accepted table reference
"""

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional, Sequence, Union

from statements.helpers import Name, escape_name_unsafe, prepare_join_on

if TYPE_CHECKING:
    from statements.select import Select
    from statements.where import Where

INNER = 'INNER JOIN'
LEFT = 'LEFT JOIN'
RIGHT = 'RIGHT JOIN'
CROSS = 'CROSS JOIN'


@dataclass
class TableFactor:
    """
    Table reference with optional alias, partition and index hints.

    Attributes:
        table: Table name, (schema, table) pair, or a Select used as a
            derived table
        alias: Name after AS
        partition: Partition list, e.g. 'p0,p1' (names only)
        index_hint_list: Index hint text such as 'USE INDEX (idx_created)';
            see https://dev.mysql.com/doc/refman/8.4/en/index-hints.html

    Example:
        >>> TableFactor('orders', alias='o', partition='p2024').query()
        '`orders` PARTITION (p2024) AS `o`'
    """

    table: Union[Name, 'Select']
    alias: str = ''
    partition: str = ''
    index_hint_list: str = ''

    def query(self) -> str:
        if isinstance(self.table, (str, list, tuple)):
            return (
                escape_name_unsafe(self.table)
                + (f" PARTITION ({self.partition})" if self.partition else '')
                + (f" AS `{self.alias}`" if self.alias else '')
                + (f" {self.index_hint_list}" if self.index_hint_list else '')
            )
        return f"({self.table.query()})" + (f" AS `{self.alias}`" if self.alias else '')


TableRef = Union[Name, TableFactor]


def render_table(table: TableRef) -> str:
    """Render a name, qualified pair or TableFactor."""
    if isinstance(table, TableFactor):
        return table.query()
    return escape_name_unsafe(table)


@dataclass
class Join:
    """
    Single JOIN clause.

    Attributes:
        kind: One of INNER, LEFT, RIGHT, CROSS
        table: Joined table reference
        on: Where builder or ``((table, column), (table, column))`` pair
        using: Column names for a USING clause (ignored when ``on`` is set)
    """

    kind: str
    table: TableRef
    on: Optional[Union['Where', Sequence[Sequence[str]]]] = None
    using: List[str] = field(default_factory=list)

    def query(self) -> str:
        clause = f" {self.kind} {render_table(self.table)}"
        if self.on is not None:
            return clause + prepare_join_on(self.on)
        if self.using:
            return clause + ' USING (' + ','.join(escape_name_unsafe(col) for col in self.using) + ')'
        return clause
