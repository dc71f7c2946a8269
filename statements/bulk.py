"""
=========================================
Bulk row batching for INSERT and REPLACE.
=========================================

Splits a row set into multi-row ``VALUE (...),(...)`` statements of at most
``batch`` rows each. The row set is validated when bulk_runner() is called;
the statements themselves are produced lazily, one per iteration step, so a
bad row set never leaves a half-written table behind.

Classes:
- BulkStatement: Shared settings and execution of InsertBulk / ReplaceBulk

Functions:
- bulk_runner: Validate rows and return a generator of statements

Example:
    >>> rows = [{'id': 1, 'label': 'hello'}, {'id': 2, 'label': 'world'}]
    >>> list(bulk_runner(connect, 'INSERT', '', 'table', rows, batch=1000))
    ["INSERT `table`(`id`,`label`) VALUE (1,'hello'),(2,'world')"]
"""

import logging
from typing import TYPE_CHECKING, Any, Iterator, List, Mapping, Optional, Sequence

from core.config import config
from statements.errors import DuplicateColumnNameError, EmptyRowSetError, RowShapeMismatchError

if TYPE_CHECKING:
    from connect.base import ConnectInterface

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


def _signature(names: Sequence[str]) -> str:
    return ':'.join(names)


def bulk_runner(
    connect: 'ConnectInterface',
    verb: str,
    suffix: str,
    table: str,
    rows: Sequence[Row],
    batch: int,
    add_to_row: Optional[Row] = None,
    ignore: bool = False,
    partition: str = '',
    deep_validation: bool = True
) -> Iterator[str]:
    """
    Validate a row set and return a lazy generator of bulk statements.

    Args:
        connect: Connection used for escaping
        verb: 'INSERT' or 'REPLACE'
        suffix: Text appended to every statement (e.g. ON DUPLICATE KEY UPDATE)
        table: Target table name
        rows: Rows sharing the same ordered column names
        batch: Maximum rows per statement
        add_to_row: Columns prepended to every row, e.g. ``{'batch_id': 7}``
        ignore: Render the IGNORE modifier
        partition: Partition list rendered inside PARTITION (...)
        deep_validation: Check every row's columns against the first row and
            add_to_row against the row columns

    Returns:
        Generator yielding one SQL statement per batch

    Raises:
        EmptyRowSetError: If rows is empty
        ValueError: If batch is smaller than 1
        DuplicateColumnNameError: If add_to_row repeats a row column
        RowShapeMismatchError: If a row's columns differ from the first row's
    """
    rows = list(rows)
    if not rows:
        raise EmptyRowSetError('rows must have data')
    if batch < 1:
        raise ValueError(f"batch must be at least 1, got {batch}")

    add_to_row = add_to_row or {}
    row_names = list(rows[0].keys())

    if deep_validation:
        for name in row_names:
            if name in add_to_row:
                raise DuplicateColumnNameError(f"rows have duplicate with add_to_row name: {name}")

        expected = _signature(row_names)
        for number, row in enumerate(rows, start=1):
            actual = _signature(list(row.keys()))
            if actual != expected:
                raise RowShapeMismatchError(number, expected, actual)

    all_names = list(add_to_row.keys()) + row_names
    prefix = (
        verb
        + (' IGNORE' if ignore else '')
        + f" `{table}`"
        + (f" PARTITION ({partition})" if partition else '')
        + '(`' + '`,`'.join(all_names) + '`) VALUE '
    )
    extra = [connect.escape(value) for value in add_to_row.values()]

    return _emit(connect, prefix, suffix, rows, batch, extra)


def _emit(
    connect: 'ConnectInterface',
    prefix: str,
    suffix: str,
    rows: List[Row],
    batch: int,
    extra: List[str]
) -> Iterator[str]:
    for start in range(0, len(rows), batch):
        chunk = rows[start:start + batch]
        values = ','.join(
            '(' + ','.join(extra + [connect.escape(value) for value in row.values()]) + ')'
            for row in chunk
        )
        logger.debug(f"Bulk batch rows {start + 1}-{start + len(chunk)} of {len(rows)}")
        yield prefix + values + suffix


class BulkStatement:
    """
    Multi-statement bulk writer.

    Not a single statement: queries() yields one statement per batch and
    exec() runs them in order on the connection.

    Attributes:
        connect: Connection used for escaping and execution
        table: Target table name
        rows: Row set (see bulk_runner)
        batch: Rows per statement (defaults to config.bulk_batch_size)
        add_to_row: Columns prepended to every row
        ignore: Render the IGNORE modifier (INSERT only)
        partition: Partition list
        deep_validation: Row shape checking (defaults to config.bulk_deep_validation)
    """

    verb = ''

    def __init__(
        self,
        connect: 'ConnectInterface',
        table: str,
        rows: Sequence[Row],
        batch: Optional[int] = None,
        add_to_row: Optional[Row] = None,
        partition: str = '',
        deep_validation: Optional[bool] = None
    ):
        self.connect = connect
        self.table = table
        self.rows = rows
        self.batch = config.bulk_batch_size if batch is None else batch
        self.add_to_row = dict(add_to_row or {})
        self.ignore = False
        self.partition = partition
        self.deep_validation = config.bulk_deep_validation if deep_validation is None else deep_validation

    def _suffix(self) -> str:
        return ''

    def queries(self) -> Iterator[str]:
        """Validate the rows and return a fresh generator of statements."""
        return bulk_runner(
            self.connect,
            self.verb,
            self._suffix(),
            self.table,
            self.rows,
            self.batch,
            self.add_to_row,
            self.ignore,
            self.partition,
            self.deep_validation
        )

    def exec(self) -> bool:
        """Execute every batch; returns True once all of them ran."""
        for query in self.queries():
            self.connect.exec(query)
        return True

    def exec_with_affected_rows(self) -> int:
        """Execute every batch and return the summed affected row count."""
        affected = 0
        for query in self.queries():
            self.connect.exec(query)
            affected += self.connect.last_affected_rows()
        return affected

    def set_table(self, table: str):
        self.table = table
        return self

    def set_rows(self, rows: Sequence[Row]):
        self.rows = rows
        return self

    def set_batch(self, batch: int):
        self.batch = batch
        return self

    def set_add_to_row(self, add_to_row: Row):
        self.add_to_row = dict(add_to_row)
        return self

    def set_partition(self, partition: str):
        self.partition = partition
        return self

    def set_deep_validation(self, deep_validation: bool):
        self.deep_validation = deep_validation
        return self
