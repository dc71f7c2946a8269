"""
ORDER BY and GROUP BY builders.

Terms are joined with ',' in the order they were added. Integers are
column positions and pass unquoted; names are backtick-quoted; expressions
(str or Raw) are inserted as written.

Example:
    >>> OrderBy(connect).expr_desc('DATE(`created_at`)').asc('order').query()
    'DATE(`created_at`) DESC,`order`'
"""

from typing import TYPE_CHECKING, List, Union

from statements.base import Statement
from statements.helpers import Name, escape_name_unsafe
from statements.raw import Raw

if TYPE_CHECKING:
    from connect.base import ConnectInterface

Term = Union[Name, int]
Expression = Union[str, Raw]


class _TermList(Statement):
    """Comma-separated list of rendered terms."""

    def __init__(self, connect: 'ConnectInterface'):
        super().__init__(connect)
        self.terms: List[str] = []

    def query(self) -> str:
        return ','.join(self.terms)

    def __bool__(self) -> bool:
        return bool(self.terms)

    def _term(self, term: Term) -> str:
        if isinstance(term, int) and not isinstance(term, bool):
            return str(term)
        return escape_name_unsafe(term)

    def _expr(self, expression: Expression) -> str:
        if isinstance(expression, Raw):
            return expression.render(self.connect)
        return expression


class OrderBy(_TermList):
    """ORDER BY term list."""

    def asc(self, name: Term) -> 'OrderBy':
        self.terms.append(self._term(name))
        return self

    def desc(self, name: Term) -> 'OrderBy':
        self.terms.append(f"{self._term(name)} DESC")
        return self

    def expr_asc(self, expression: Expression) -> 'OrderBy':
        self.terms.append(self._expr(expression))
        return self

    def expr_desc(self, expression: Expression) -> 'OrderBy':
        self.terms.append(f"{self._expr(expression)} DESC")
        return self


class GroupBy(_TermList):
    """GROUP BY term list."""

    def add(self, name: Term) -> 'GroupBy':
        self.terms.append(self._term(name))
        return self

    def expr(self, expression: Expression) -> 'GroupBy':
        self.terms.append(self._expr(expression))
        return self
