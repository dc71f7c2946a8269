"""
Raw SQL fragments.

A Raw carries trusted SQL text plus untrusted parameters. The parameters are
escaped by the connection and substituted into ``%s`` placeholders only when
the fragment is rendered.

Example:
    >>> Raw("`e`+%s", 1).render(connect)
    '`e`+1'
    >>> Raw("NOW()").render(connect)
    'NOW()'
"""

from typing import TYPE_CHECKING, Any, Tuple

if TYPE_CHECKING:
    from connect.base import ConnectInterface


class Raw:
    """Unescaped SQL expression with escaped positional parameters.

    Attributes:
        expression: SQL template; never build it from user input
        params: Values substituted into the template's ``%s`` placeholders
    """

    __slots__ = ('expression', 'params')

    def __init__(self, expression: str, *params: Any):
        object.__setattr__(self, 'expression', expression)
        object.__setattr__(self, 'params', tuple(params))

    def __setattr__(self, name, value):
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        return f"Raw({self.expression!r}{''.join(', ' + repr(p) for p in self.params)})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Raw):
            return NotImplemented
        return (self.expression, self.params) == (other.expression, other.params)

    def __hash__(self) -> int:
        return hash((self.expression, self.params))

    def render(self, connect: 'ConnectInterface') -> str:
        """Render the expression with every parameter escaped.

        Without parameters the expression is returned verbatim, so a literal
        ``%`` needs doubling only when parameters are given.

        Raises:
            TypeError: If placeholders and parameters do not match
        """
        if not self.params:
            return self.expression
        escaped: Tuple[str, ...] = tuple(connect.escape(param) for param in self.params)
        return self.expression % escaped
