"""
=====================================
Statement base classes and shortcuts.
=====================================

Every statement keeps a reference to the connection it was built for; the
connection escapes values while rendering and executes the final SQL.

Classes:
- Statement: Anything that renders to SQL text through query()
- Executable: A statement that can be sent to its connection with exec()

Functions:
- condition_shortcuts: Class decorator adding ``where_eq()``-style methods
"""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from connect.base import ConnectInterface

# Condition builder methods mirrored by statement shortcuts
CONDITION_METHODS = (
    'cond', 'eq', 'not_eq', 'gt', 'lt', 'gte', 'lte',
    'like', 'not_like', 'is_null', 'is_not_null', 'between',
    'in', 'not_in', 'exists', 'not_exists', 'sub_where', 'sub_fn',
)


class Statement(ABC):
    """Base class for objects that render to SQL text.

    Attributes:
        connect: Connection used for escaping and execution
    """

    def __init__(self, connect: 'ConnectInterface'):
        self.connect = connect

    @abstractmethod
    def query(self) -> str:
        """Render the current state as a single-line SQL string."""

    def __str__(self) -> str:
        return self.query()


class Executable(Statement):
    """Statement that can be executed on its connection."""

    def exec(self) -> Any:
        """Render the statement and hand it to the connection.

        Returns:
            Whatever the connection's exec() returns
        """
        return self.connect.exec(self.query())


def _shortcut(getter: str, method: str) -> Callable:
    def shortcut(self, *args, **kwargs):
        getattr(getattr(self, getter)(), method)(*args, **kwargs)
        return self

    shortcut.__doc__ = f"Shortcut for ``{getter}().{method}()``; returns the statement."
    return shortcut


def condition_shortcuts(prefix: str, getter: str) -> Callable[[type], type]:
    """
    Add condition shortcuts to a statement class.

    For every condition method ``m`` two methods are installed:
    ``{prefix}_m`` (AND) and ``or_{prefix}_m`` (OR). Both call the Where
    returned by ``getattr(self, getter)()`` and return the statement, so
    they chain like the rest of the builder.

    Args:
        prefix: Method name prefix, e.g. 'where' or 'having'
        getter: Name of the method returning the Where to modify

    Example:
        >>> @condition_shortcuts('where', 'where_object')
        ... class Delete(ConditionalStatement): ...
        >>> connect.delete('users').where_eq('id', 1).or_where_in('id', [2, 3])
    """
    def decorate(cls: type) -> type:
        for name in CONDITION_METHODS:
            and_method = 'in_' if name == 'in' else name
            for attr, method in (
                (f"{prefix}_{name}", and_method),
                (f"or_{prefix}_{name}", f"or_{name}"),
            ):
                shortcut = _shortcut(getter, method)
                shortcut.__name__ = attr
                shortcut.__qualname__ = f"{cls.__qualname__}.{attr}"
                setattr(cls, attr, shortcut)
        return cls

    return decorate
