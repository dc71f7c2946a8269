"""
REPLACE statements (single, SELECT-sourced, bulk).

REPLACE works like INSERT, except that an old row with the same PRIMARY KEY
or UNIQUE index value is deleted before the new row is inserted
(https://dev.mysql.com/doc/refman/8.4/en/replace.html). It has no IGNORE
modifier and no ON DUPLICATE KEY UPDATE clause.
"""

from typing import TYPE_CHECKING, Optional, Sequence

from statements.base import Executable
from statements.bulk import BulkStatement, Row
from statements.helpers import prepare_cols, prepare_row

if TYPE_CHECKING:
    from connect.base import ConnectInterface
    from statements.select import Select


class Replace(Executable):
    """Single-row REPLACE."""

    def __init__(self, connect: 'ConnectInterface', table: str, row: Row, partition: str = ''):
        super().__init__(connect)
        self.table = table
        self.row = row
        self.partition = partition

    def query(self) -> str:
        return (
            f"REPLACE `{self.table}`"
            + (f" PARTITION ({self.partition})" if self.partition else '')
            + prepare_row(self.connect, self.row)
        )

    def set_table(self, table: str) -> 'Replace':
        self.table = table
        return self

    def set_row(self, row: Row) -> 'Replace':
        self.row = row
        return self

    def set_partition(self, partition: str) -> 'Replace':
        self.partition = partition
        return self


class ReplaceSelect(Executable):
    """REPLACE ... SELECT."""

    def __init__(
        self,
        connect: 'ConnectInterface',
        table: str,
        select: 'Select',
        cols: Optional[Sequence[str]] = None,
        partition: str = ''
    ):
        super().__init__(connect)
        self.table = table
        self.select = select
        self.cols = list(cols or [])
        self.partition = partition

    def query(self) -> str:
        return (
            f"REPLACE `{self.table}`"
            + (f" PARTITION ({self.partition})" if self.partition else '')
            + prepare_cols(self.cols)
            + ' ' + self.select.query()
        )

    def set_table(self, table: str) -> 'ReplaceSelect':
        self.table = table
        return self

    def set_select(self, select: 'Select') -> 'ReplaceSelect':
        self.select = select
        return self

    def set_cols(self, cols: Sequence[str]) -> 'ReplaceSelect':
        self.cols = list(cols)
        return self

    def set_partition(self, partition: str) -> 'ReplaceSelect':
        self.partition = partition
        return self


class ReplaceBulk(BulkStatement):
    """Multi-row REPLACE split into batches."""

    verb = 'REPLACE'
