"""
===================================================
Identifier quoting and row/column clause rendering.
===================================================

Pure functions shared by every statement type. Values always go through
``connect.escape()``; identifiers are only wrapped in backticks.

Functions:
- escape_name_unsafe: Fast identifier quoting, no validation
- escape_name: Strict identifier quoting for names of outside origin
- prepare_row: ``(`a`,`b`) VALUE (1,'x')``
- prepare_cols: ``(`a`,`b`)``
- prepare_on_dup_key_update: ``ON DUPLICATE KEY UPDATE `a`=1``
- prepare_where: `` WHERE ...`` / `` HAVING ...`` from a Where or a mapping
- prepare_join_on: `` ON ...`` from a Where or a column pair

Usage:
    from statements.helpers import escape_name_unsafe, prepare_row

    escape_name_unsafe(("o", "amount"))       # `o`.`amount`
    prepare_row(connect, {"id": 1, "label": "hello"})
"""

import re
from typing import TYPE_CHECKING, Any, Mapping, Optional, Sequence, Union

from statements.errors import InvalidColumnNameError, UnsupportedColumnExpressionError

if TYPE_CHECKING:
    from connect.base import ConnectInterface
    from statements.where import Where

Name = Union[str, Sequence[str]]

_SAFE_NAME = re.compile(r'[A-Za-z0-9_]+(\.[A-Za-z0-9_]+)*')


def escape_name_unsafe(name: Name) -> str:
    """
    Wrap an identifier in backticks without validating it.

    Args:
        name: Column/table name, or a sequence such as ``("table", "column")``.
            A string may also be written as ``o`.`column`` to get `o`.`column`.
            Never derive it from user input; see escape_name().

    Returns:
        Quoted identifier
    """
    if isinstance(name, str):
        return f"`{name.strip('`')}`"

    parts = list(name)
    for part in parts:
        if not isinstance(part, str):
            raise InvalidColumnNameError('all elements must be strings')
    return '`' + '`.`'.join(parts) + '`'


def escape_name(name: str) -> str:
    """
    Validate and quote an identifier that came from outside.

    Only letters, digits and underscores are allowed, with dots separating
    qualified parts (``schema.table.column``). Slower than escape_name_unsafe,
    use it only where the name is not a constant.

    Raises:
        InvalidColumnNameError: If the name contains anything else
    """
    if not isinstance(name, str) or not _SAFE_NAME.fullmatch(name):
        raise InvalidColumnNameError(f"Invalid format for name: {name}")
    return '`' + name.replace('.', '`.`') + '`'


def prepare_row(connect: 'ConnectInterface', row: Mapping[str, Any]) -> str:
    """
    Render a single row as a column list and a VALUE tuple.

    Column order follows the mapping's order.
    """
    names = []
    values = []
    for name, value in row.items():
        names.append(f"`{name}`")
        values.append(connect.escape(value))
    return f"({','.join(names)}) VALUE ({','.join(values)})"


def prepare_cols(cols: Sequence[str]) -> str:
    """Render a parenthesized column list, or '' when there are no columns."""
    if not cols:
        return ''
    return '(' + ','.join(f"`{col}`" for col in cols) + ')'


def prepare_on_dup_key_update(connect: 'ConnectInterface', update: Mapping[str, Any]) -> str:
    """Render ``ON DUPLICATE KEY UPDATE`` assignments in mapping order."""
    assignments = ','.join(
        f"`{name}`={connect.escape(value)}" for name, value in update.items()
    )
    return f"ON DUPLICATE KEY UPDATE {assignments}"


def prepare_where(
    connect: 'ConnectInterface',
    keyword: str,
    where: Union['Where', Mapping[str, Any], None]
) -> str:
    """
    Render a WHERE/HAVING clause with a leading space.

    A mapping is the fast path: every item becomes `` `name`=value `` joined
    with AND. An empty mapping, an empty Where and None render nothing.

    Args:
        connect: Connection used for escaping
        keyword: 'WHERE' or 'HAVING'
        where: Where builder, mapping of column to value, or None
    """
    if where is None:
        return ''

    if isinstance(where, Mapping):
        if not where:
            return ''
        conditions = ' AND '.join(
            f"{escape_name_unsafe(name)}={connect.escape(value)}"
            for name, value in where.items()
        )
        return f" {keyword} {conditions}"

    conditions = where.query()
    return f" {keyword} {conditions}" if conditions else ''


def prepare_join_on(
    on: Union['Where', Sequence[Sequence[str]], None]
) -> str:
    """
    Render a join's ON clause with a leading space.

    Args:
        on: Where builder, or ``(("items", "user_id"), ("users", "id"))`` which
            renders as `` ON `items`.`user_id`=`users`.`id` ``

    Raises:
        UnsupportedColumnExpressionError: If a pair is not two two-part names
    """
    if on is None:
        return ''

    if isinstance(on, (list, tuple)):
        if not on:
            return ''
        if (
            len(on) == 2
            and all(isinstance(side, (list, tuple)) and len(side) == 2 for side in on)
        ):
            left, right = on
            return f" ON {escape_name_unsafe(left)}={escape_name_unsafe(right)}"
        raise UnsupportedColumnExpressionError(
            "join on pair must have format (('tbl1', 'field1'), ('tbl2', 'field2'))"
        )

    conditions = on.query()
    return f" ON {conditions}" if conditions else ''


def prepare_limit(limit: Optional[int], offset: Optional[int] = None) -> str:
    """Render `` LIMIT n[ OFFSET m]``; offset is ignored without a limit."""
    if limit is None:
        return ''
    if offset is None:
        return f" LIMIT {limit}"
    return f" LIMIT {limit} OFFSET {offset}"
