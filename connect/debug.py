"""
Connection stand-in without a server.

ConnectDebug renders exactly the SQL a live connection would (given the
default server SQL mode) and records it instead of sending it. Use it to
inspect generated statements and in tests.
"""

import logging
from typing import List

from connect.base import ConnectInterface

logger = logging.getLogger(__name__)

# addslashes(): backslash first so added escapes are not doubled
_SLASHED = (('\\', '\\\\'), ("'", "\\'"), ('"', '\\"'), ('\x00', '\\0'))


class ConnectDebug(ConnectInterface):
    """No-op executor with self-contained string escaping.

    Attributes:
        executed: Every SQL string passed to exec(), in order
    """

    def __init__(self):
        self.executed: List[str] = []

    def exec(self, query: str) -> bool:
        self.executed.append(query)
        logger.debug(f"debug exec: {query}")
        return True

    def last_insert_id(self) -> int:
        return 0

    def last_affected_rows(self) -> int:
        return 0

    def escape_string(self, value: str) -> str:
        for char, replacement in _SLASHED:
            value = value.replace(char, replacement)
        return value
