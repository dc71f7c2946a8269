"""
=================================================
INSERT statements (single, SELECT-sourced, bulk).
=================================================

Grammar (https://dev.mysql.com/doc/refman/8.4/en/insert.html)::

    INSERT [IGNORE] table [PARTITION (p,...)] (cols) VALUE (values)
        [ON DUPLICATE KEY UPDATE col=value,...]
    INSERT [IGNORE] table [PARTITION (p,...)] [(cols)] SELECT ...
        [ON DUPLICATE KEY UPDATE col=value,...]

Example:
    >>> connect.insert('table', {'id': 1, 'label': 'hello'}).query()
    "INSERT `table`(`id`,`label`) VALUE (1,'hello')"
    >>> connect.insert('counters', {'key': 'home', 'hits': 1},
    ...                on_dup_key_update={'hits': Raw('`hits`+1')}).query()
    "INSERT `counters`(`key`,`hits`) VALUE ('home',1) ON DUPLICATE KEY UPDATE `hits`=`hits`+1"
"""

from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence

from statements.base import Executable
from statements.bulk import BulkStatement, Row
from statements.helpers import prepare_cols, prepare_on_dup_key_update, prepare_row

if TYPE_CHECKING:
    from connect.base import ConnectInterface
    from statements.select import Select


def _on_dup_key_update(connect: 'ConnectInterface', update: Optional[Mapping[str, Any]]) -> str:
    if not update:
        return ''
    return ' ' + prepare_on_dup_key_update(connect, update)


class Insert(Executable):
    """Single-row INSERT.

    Attributes:
        table: Target table name
        row: Mapping of column to value
        ignore: Render the IGNORE modifier
        on_dup_key_update: Mapping of column to value for duplicate keys
        partition: Partition list
    """

    def __init__(
        self,
        connect: 'ConnectInterface',
        table: str,
        row: Row,
        ignore: bool = False,
        on_dup_key_update: Optional[Mapping[str, Any]] = None,
        partition: str = ''
    ):
        super().__init__(connect)
        self.table = table
        self.row = row
        self.ignore = ignore
        self.on_dup_key_update = on_dup_key_update
        self.partition = partition

    def query(self) -> str:
        return (
            'INSERT '
            + ('IGNORE ' if self.ignore else '')
            + f"`{self.table}`"
            + (f" PARTITION ({self.partition})" if self.partition else '')
            + prepare_row(self.connect, self.row)
            + _on_dup_key_update(self.connect, self.on_dup_key_update)
        )

    def exec_and_get_last_id(self) -> int:
        """Execute and return the AUTO_INCREMENT id generated by this insert."""
        self.exec()
        return self.connect.last_insert_id()

    def set_table(self, table: str) -> 'Insert':
        self.table = table
        return self

    def set_row(self, row: Row) -> 'Insert':
        self.row = row
        return self

    def set_ignore(self, ignore: bool = True) -> 'Insert':
        self.ignore = ignore
        return self

    def set_partition(self, partition: str) -> 'Insert':
        self.partition = partition
        return self

    def set_on_dup_key_update(self, on_dup_key_update: Optional[Mapping[str, Any]]) -> 'Insert':
        self.on_dup_key_update = on_dup_key_update
        return self


class InsertSelect(Executable):
    """INSERT ... SELECT.

    Attributes:
        table: Target table name
        select: Source Select, rendered when query() is called
        cols: Target columns; empty inserts into the table's column order
        ignore: Render the IGNORE modifier
        on_dup_key_update: Mapping of column to value for duplicate keys
        partition: Partition list
    """

    def __init__(
        self,
        connect: 'ConnectInterface',
        table: str,
        select: 'Select',
        cols: Optional[Sequence[str]] = None,
        ignore: bool = False,
        on_dup_key_update: Optional[Mapping[str, Any]] = None,
        partition: str = ''
    ):
        super().__init__(connect)
        self.table = table
        self.select = select
        self.cols = list(cols or [])
        self.ignore = ignore
        self.on_dup_key_update = on_dup_key_update
        self.partition = partition

    def query(self) -> str:
        return (
            'INSERT '
            + ('IGNORE ' if self.ignore else '')
            + f"`{self.table}`"
            + (f" PARTITION ({self.partition})" if self.partition else '')
            + prepare_cols(self.cols)
            + ' ' + self.select.query()
            + _on_dup_key_update(self.connect, self.on_dup_key_update)
        )

    def set_table(self, table: str) -> 'InsertSelect':
        self.table = table
        return self

    def set_select(self, select: 'Select') -> 'InsertSelect':
        self.select = select
        return self

    def set_cols(self, cols: Sequence[str]) -> 'InsertSelect':
        self.cols = list(cols)
        return self

    def set_ignore(self, ignore: bool = True) -> 'InsertSelect':
        self.ignore = ignore
        return self

    def set_partition(self, partition: str) -> 'InsertSelect':
        self.partition = partition
        return self

    def set_on_dup_key_update(self, on_dup_key_update: Optional[Mapping[str, Any]]) -> 'InsertSelect':
        self.on_dup_key_update = on_dup_key_update
        return self


class InsertBulk(BulkStatement):
    """Multi-row INSERT split into batches.

    Example:
        >>> rows = [{'id': 1, 'label': 'a'}, {'id': 2, 'label': 'b'}, {'id': 3, 'label': 'c'}]
        >>> list(connect.insert_bulk('table', rows, batch=2).queries())
        ["INSERT `table`(`id`,`label`) VALUE (1,'a'),(2,'b')",
         "INSERT `table`(`id`,`label`) VALUE (3,'c')"]
    """

    verb = 'INSERT'

    def __init__(
        self,
        connect: 'ConnectInterface',
        table: str,
        rows: Sequence[Row],
        batch: Optional[int] = None,
        add_to_row: Optional[Row] = None,
        ignore: bool = False,
        partition: str = '',
        on_dup_key_update: Optional[Mapping[str, Any]] = None,
        deep_validation: Optional[bool] = None
    ):
        super().__init__(connect, table, rows, batch, add_to_row, partition, deep_validation)
        self.ignore = ignore
        self.on_dup_key_update = on_dup_key_update

    def _suffix(self) -> str:
        return _on_dup_key_update(self.connect, self.on_dup_key_update)

    def set_ignore(self, ignore: bool = True) -> 'InsertBulk':
        self.ignore = ignore
        return self

    def set_on_dup_key_update(self, on_dup_key_update: Optional[Mapping[str, Any]]) -> 'InsertBulk':
        self.on_dup_key_update = on_dup_key_update
        return self
