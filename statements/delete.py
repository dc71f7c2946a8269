"""
DELETE statement.

Grammar (https://dev.mysql.com/doc/refman/8.4/en/delete.html)::

    DELETE [IGNORE] FROM table [AS alias] [PARTITION (p,...)]
        [WHERE ...] [ORDER BY ...] [LIMIT n]

Without a WHERE every row is deleted; set one before calling exec().
"""

from statements.conditional import TableStatement


class Delete(TableStatement):
    """Single-table DELETE builder.

    Example:
        >>> connect.delete('sessions', {'user_id': 5}).order_asc('created_at').set_limit(10).query()
        'DELETE FROM `sessions` WHERE `user_id`=5 ORDER BY `created_at` LIMIT 10'
    """

    def query(self) -> str:
        return (
            'DELETE'
            + (' IGNORE' if self.ignore else '')
            + f" FROM {self._target()}"
            + self._tail()
        )
