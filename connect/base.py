"""
=============================================
Connection contract and statement factories.
=============================================

ConnectInterface is what every statement talks to: it escapes values for
the connection's charset, executes SQL text and reports the last insert id
and affected row count. Connect (live MySQL) and ConnectDebug (no network)
implement it.

Value escaping is shared; only the string-literal rule differs between
implementations (see escape_string()).

Example:
    >>> connect.escape("O'Brien")
    "'O\\\\'Brien'"
    >>> connect.escape(None), connect.escape(True), connect.escape(1.5)
    ('null', '1', '1.5')
"""

import json
import math
from abc import ABC, abstractmethod
from typing import Any, Optional, Sequence

from statements.delete import Delete
from statements.errors import UnescapableValueError
from statements.insert import Insert, InsertBulk, InsertSelect
from statements.raw import Raw
from statements.replace import Replace, ReplaceBulk, ReplaceSelect
from statements.select import Columns, Select
from statements.table import TableRef
from statements.update import Update
from statements.where import Where


class ConnectStatements:
    """Factory methods creating statements bound to this connection.

    Every factory takes the statement's required arguments positionally and
    forwards any keyword arguments to the statement constructor.
    """

    def select(self, table: TableRef, columns: Optional[Columns] = None, **kwargs) -> Select:
        return Select(self, table, columns, **kwargs)

    def insert(self, table: str, row, **kwargs) -> Insert:
        return Insert(self, table, row, **kwargs)

    def insert_select(self, table: str, select: Select, cols: Optional[Sequence[str]] = None, **kwargs) -> InsertSelect:
        return InsertSelect(self, table, select, cols, **kwargs)

    def insert_bulk(self, table: str, rows, **kwargs) -> InsertBulk:
        return InsertBulk(self, table, rows, **kwargs)

    def replace(self, table: str, row, **kwargs) -> Replace:
        return Replace(self, table, row, **kwargs)

    def replace_select(self, table: str, select: Select, cols: Optional[Sequence[str]] = None, **kwargs) -> ReplaceSelect:
        return ReplaceSelect(self, table, select, cols, **kwargs)

    def replace_bulk(self, table: str, rows, **kwargs) -> ReplaceBulk:
        return ReplaceBulk(self, table, rows, **kwargs)

    def update(self, table: str, assignments=None, **kwargs) -> Update:
        return Update(self, table, assignments, **kwargs)

    def delete(self, table: str, where=None, **kwargs) -> Delete:
        return Delete(self, table, where, **kwargs)

    def where(self) -> Where:
        """Create an empty condition builder bound to this connection."""
        return Where(self)


class ConnectInterface(ConnectStatements, ABC):
    """Executor and value escaper for one MySQL connection."""

    @abstractmethod
    def exec(self, query: str) -> Any:
        """Execute SQL text and return the driver result."""

    @abstractmethod
    def last_insert_id(self) -> int:
        """AUTO_INCREMENT id generated by the last INSERT."""

    @abstractmethod
    def last_affected_rows(self) -> int:
        """Rows changed by the last statement."""

    @abstractmethod
    def escape_string(self, value: str) -> str:
        """Escape the body of a string literal (without the quotes)."""

    def escape(self, value: Any) -> str:
        """
        Render a value as SQL literal text.

        Args:
            value: str, bool, None, int, float, Raw, or a list/tuple/dict
                which is stored as a JSON string

        Returns:
            SQL-safe literal text

        Raises:
            UnescapableValueError: For any other type, a non-finite float, or
                a list/tuple/dict JSON cannot encode
        """
        if isinstance(value, str):
            return f"'{self.escape_string(value)}'"
        if isinstance(value, bool):
            return '1' if value else '0'
        if value is None:
            return 'null'
        if isinstance(value, int):
            return str(value)
        if isinstance(value, float):
            if not math.isfinite(value):
                raise UnescapableValueError(f"this value can't be escaped: {value}")
            return str(value)
        if isinstance(value, Raw):
            return value.render(self)
        if isinstance(value, (list, tuple, dict)):
            try:
                encoded = json.dumps(value, separators=(',', ':'), ensure_ascii=False, allow_nan=False)
            except (TypeError, ValueError) as e:
                raise UnescapableValueError(f"this value can't be stored as JSON: {e}") from e
            return f"'{self.escape_string(encoded)}'"
        raise UnescapableValueError(f"this value can't be escaped: {type(value).__name__}")
