"""
=========================
Connection layer package.
=========================

Executors that statements are bound to. A connection escapes values for
its charset, runs SQL text and creates statements through its factory
methods (select(), insert(), update(), ...).

Modules:
    base: ConnectInterface contract and statement factories
    connection: Live MySQL connection (SQLAlchemy + PyMySQL)
    debug: Recording connection that needs no server

Example:
    >>> from connect import ConnectDebug
    >>>
    >>> connect = ConnectDebug()
    >>> connect.delete('sessions', {'user_id': 5}).exec()
    True
    >>> connect.executed
    ['DELETE FROM `sessions` WHERE `user_id`=5']
"""

__version__ = "0.1.0"
__all__ = [
    'ConnectInterface',
    'ConnectStatements',
    'Connect',
    'ConnectDebug'
]

from .base import ConnectInterface, ConnectStatements
from .connection import Connect
from .debug import ConnectDebug
