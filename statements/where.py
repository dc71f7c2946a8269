"""
=======================================
Condition builder for WHERE and HAVING.
=======================================

A Where collects condition fragments, each tagged with the connector that
was chosen when it was added. Rendering joins them in insertion order and
drops the connector of the first fragment, so
``where.eq('id', 1).or_eq('label', 'hello')`` renders as::

    `id`=1 OR  `label`='hello'

Every method returns the builder. Values pass through ``connect.escape()``,
names are backtick-quoted without validation (see helpers.escape_name for
the strict variant).

Usage:
    from statements.where import Where

    where = Where(connect)
    where.gt('age', 18).in_('status', ['new', 'active'])
    where.or_sub_fn(lambda sub: sub.is_null('deleted_at').lt('score', 5))
"""

from typing import TYPE_CHECKING, Any, Callable, Iterable, List, Mapping, Tuple, Union

from statements.base import Executable, Statement
from statements.errors import UnsupportedColumnExpressionError
from statements.helpers import Name, escape_name_unsafe

if TYPE_CHECKING:
    from connect.base import ConnectInterface

AND = 'AND'
OR = 'OR'

# Text placed before a fragment, keyed by the fragment's connector
_SEPARATORS = {AND: ' AND ', OR: ' OR  '}

# Rendered for an empty literal IN / NOT IN list
EMPTY_IN = '0=1'
EMPTY_NOT_IN = '1=1'

ValueList = Union[Iterable[Any], Executable]


class Where(Statement):
    """Ordered, connector-tagged list of SQL conditions.

    Attributes:
        connect: Connection used to escape values
        conditions: ``(connector, fragment)`` pairs in insertion order
    """

    def __init__(self, connect: 'ConnectInterface'):
        super().__init__(connect)
        self.conditions: List[Tuple[str, str]] = []

    def query(self) -> str:
        """Render the conditions; an empty builder renders ''."""
        parts = []
        for index, (connector, fragment) in enumerate(self.conditions):
            if index:
                parts.append(_SEPARATORS[connector])
            parts.append(fragment)
        return ''.join(parts)

    def __bool__(self) -> bool:
        return bool(self.conditions)

    def __len__(self) -> int:
        return len(self.conditions)

    # -------------------------------------------------------------------------
    # Fragment rendering
    # -------------------------------------------------------------------------

    def _add(self, connector: str, fragment: str) -> 'Where':
        self.conditions.append((connector, fragment))
        return self

    def _cond(self, condition: str, values: Tuple[Any, ...]) -> str:
        if not values:
            return f"({condition})"
        escaped = tuple(self.connect.escape(value) for value in values)
        return f"({condition % escaped})"

    def _compare(self, name: Name, operator: str, value: Any) -> str:
        return f"{escape_name_unsafe(name)}{operator}{self.connect.escape(value)}"

    def _between(self, name: Name, start: Any, end: Any) -> str:
        return (
            f"{escape_name_unsafe(name)} BETWEEN "
            f"{self.connect.escape(start)} AND {self.connect.escape(end)}"
        )

    def _in(self, name: Name, values: ValueList, negate: bool) -> str:
        keyword = 'NOT IN' if negate else 'IN'
        if isinstance(values, Executable):
            return f"{escape_name_unsafe(name)} {keyword} ({values.query()})"
        if isinstance(values, (str, bytes, Mapping)):
            raise UnsupportedColumnExpressionError(
                f"{keyword} takes a list of values or a Select, got {type(values).__name__}"
            )

        escaped = [self.connect.escape(value) for value in values]
        if not escaped:
            return EMPTY_NOT_IN if negate else EMPTY_IN
        return f"{escape_name_unsafe(name)} {keyword} ({','.join(escaped)})"

    def _sub_fn(self, fn: Callable[['Where'], Any]) -> str:
        sub = Where(self.connect)
        fn(sub)
        return f"({sub.query()})"

    # -------------------------------------------------------------------------
    # AND conditions
    # -------------------------------------------------------------------------

    def cond(self, condition: str, *values: Any) -> 'Where':
        """
        Add a free-form condition.

        Args:
            condition: SQL with ``%s`` placeholders; never build it from user input
            *values: Values escaped into the placeholders in order

        Example:
            >>> where.cond('`a`+`b`>%s', 10)     # (`a`+`b`>10)
        """
        return self._add(AND, self._cond(condition, values))

    def eq(self, name: Name, value: Any) -> 'Where':
        return self._add(AND, self._compare(name, '=', value))

    def not_eq(self, name: Name, value: Any) -> 'Where':
        return self._add(AND, self._compare(name, '<>', value))

    def gt(self, name: Name, value: Any) -> 'Where':
        return self._add(AND, self._compare(name, '>', value))

    def lt(self, name: Name, value: Any) -> 'Where':
        return self._add(AND, self._compare(name, '<', value))

    def gte(self, name: Name, value: Any) -> 'Where':
        return self._add(AND, self._compare(name, '>=', value))

    def lte(self, name: Name, value: Any) -> 'Where':
        return self._add(AND, self._compare(name, '<=', value))

    def like(self, name: Name, value: Any) -> 'Where':
        return self._add(AND, self._compare(name, ' LIKE ', value))

    def not_like(self, name: Name, value: Any) -> 'Where':
        return self._add(AND, self._compare(name, ' NOT LIKE ', value))

    def is_null(self, name: Name) -> 'Where':
        return self._add(AND, f"{escape_name_unsafe(name)} IS NULL")

    def is_not_null(self, name: Name) -> 'Where':
        return self._add(AND, f"{escape_name_unsafe(name)} IS NOT NULL")

    def between(self, name: Name, start: Any, end: Any) -> 'Where':
        return self._add(AND, self._between(name, start, end))

    def in_(self, name: Name, values: ValueList) -> 'Where':
        """
        Add ``name IN (...)``.

        Args:
            name: Column name or (table, column) pair
            values: Literal values, or a Select rendered as a sub-query.
                An empty literal list renders ``0=1`` (matches nothing).

        Raises:
            UnsupportedColumnExpressionError: If values is a string or mapping
        """
        return self._add(AND, self._in(name, values, negate=False))

    def not_in(self, name: Name, values: ValueList) -> 'Where':
        """Add ``name NOT IN (...)``; an empty literal list renders ``1=1``."""
        return self._add(AND, self._in(name, values, negate=True))

    def exists(self, select: Executable) -> 'Where':
        return self._add(AND, f"EXISTS ({select.query()})")

    def not_exists(self, select: Executable) -> 'Where':
        return self._add(AND, f"NOT EXISTS ({select.query()})")

    def sub_where(self, where: 'Where') -> 'Where':
        """Add another builder's conditions as one parenthesized group."""
        return self._add(AND, f"({where.query()})")

    def sub_fn(self, fn: Callable[['Where'], Any]) -> 'Where':
        """
        Build a parenthesized group with a callback.

        The callback receives a fresh Where on the same connection; its
        return value is ignored.

        Example:
            >>> where.eq('a', 1).sub_fn(lambda sub: sub.eq('b', 2).or_eq('c', 3))
            >>> where.query()
            "`a`=1 AND (`b`=2 OR  `c`=3)"
        """
        return self._add(AND, self._sub_fn(fn))

    # -------------------------------------------------------------------------
    # OR conditions
    # -------------------------------------------------------------------------

    def or_cond(self, condition: str, *values: Any) -> 'Where':
        return self._add(OR, self._cond(condition, values))

    def or_eq(self, name: Name, value: Any) -> 'Where':
        return self._add(OR, self._compare(name, '=', value))

    def or_not_eq(self, name: Name, value: Any) -> 'Where':
        return self._add(OR, self._compare(name, '<>', value))

    def or_gt(self, name: Name, value: Any) -> 'Where':
        return self._add(OR, self._compare(name, '>', value))

    def or_lt(self, name: Name, value: Any) -> 'Where':
        return self._add(OR, self._compare(name, '<', value))

    def or_gte(self, name: Name, value: Any) -> 'Where':
        return self._add(OR, self._compare(name, '>=', value))

    def or_lte(self, name: Name, value: Any) -> 'Where':
        return self._add(OR, self._compare(name, '<=', value))

    def or_like(self, name: Name, value: Any) -> 'Where':
        return self._add(OR, self._compare(name, ' LIKE ', value))

    def or_not_like(self, name: Name, value: Any) -> 'Where':
        return self._add(OR, self._compare(name, ' NOT LIKE ', value))

    def or_is_null(self, name: Name) -> 'Where':
        return self._add(OR, f"{escape_name_unsafe(name)} IS NULL")

    def or_is_not_null(self, name: Name) -> 'Where':
        return self._add(OR, f"{escape_name_unsafe(name)} IS NOT NULL")

    def or_between(self, name: Name, start: Any, end: Any) -> 'Where':
        return self._add(OR, self._between(name, start, end))

    def or_in(self, name: Name, values: ValueList) -> 'Where':
        return self._add(OR, self._in(name, values, negate=False))

    def or_not_in(self, name: Name, values: ValueList) -> 'Where':
        return self._add(OR, self._in(name, values, negate=True))

    def or_exists(self, select: Executable) -> 'Where':
        return self._add(OR, f"EXISTS ({select.query()})")

    def or_not_exists(self, select: Executable) -> 'Where':
        return self._add(OR, f"NOT EXISTS ({select.query()})")

    def or_sub_where(self, where: 'Where') -> 'Where':
        return self._add(OR, f"({where.query()})")

    def or_sub_fn(self, fn: Callable[['Where'], Any]) -> 'Where':
        return self._add(OR, self._sub_fn(fn))
