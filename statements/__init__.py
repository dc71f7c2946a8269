"""
================================
MySQL statement builder package.
================================

Composable builders that render MySQL-dialect SQL text. Values are escaped
by the connection a statement is bound to; identifiers are backtick-quoted.

Modules:
    where: WHERE / HAVING condition builder
    ordering: ORDER BY / GROUP BY builders
    table: TableFactor and JOIN clauses
    select, insert, update, delete, replace: Statement assemblers
    bulk: Batched multi-row INSERT / REPLACE
    helpers: Identifier quoting and row/column rendering
    raw: Unescaped SQL fragments with escaped parameters
    errors: Exception hierarchy

Example:
    >>> from connect import ConnectDebug
    >>> connect = ConnectDebug()
    >>> connect.select('users', ['id']).where_eq('name', "O'Brien").query()
    "SELECT `id` FROM `users` WHERE `name`='O\\\\'Brien'"
"""

__version__ = "0.1.0"
__all__ = [
    'Raw',
    'Where',
    'OrderBy',
    'GroupBy',
    'TableFactor',
    'Select',
    'Insert',
    'InsertSelect',
    'InsertBulk',
    'Update',
    'Delete',
    'Replace',
    'ReplaceSelect',
    'ReplaceBulk',
    'bulk_runner',
    'escape_name',
    'escape_name_unsafe',
    'StatementError',
    'UnescapableValueError',
    'InvalidColumnNameError',
    'UnsupportedColumnExpressionError',
    'EmptyRowSetError',
    'DuplicateColumnNameError',
    'RowShapeMismatchError',
    'MalformedFetchShapeError',
    'EmptyAssignmentListError',
]

from .bulk import bulk_runner
from .delete import Delete
from .errors import (
    DuplicateColumnNameError,
    EmptyAssignmentListError,
    EmptyRowSetError,
    InvalidColumnNameError,
    MalformedFetchShapeError,
    RowShapeMismatchError,
    StatementError,
    UnescapableValueError,
    UnsupportedColumnExpressionError,
)
from .helpers import escape_name, escape_name_unsafe
from .insert import Insert, InsertBulk, InsertSelect
from .ordering import GroupBy, OrderBy
from .raw import Raw
from .replace import Replace, ReplaceBulk, ReplaceSelect
from .select import Select
from .table import TableFactor
from .update import Update
from .where import Where
