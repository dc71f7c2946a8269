"""
==================================================
Database engine utilities for MySQL.
==================================================

Provides engine construction for the connection layer.

This module keeps driver and pooling details out of connect.Connect, so
the statement builder only ever sees an engine.

Key Features:
    - SQLAlchemy engine creation (PyMySQL driver)
    - Connection settings defaulting to core.config
    - Connect timeout and isolation level passthrough

Example:
    >>> from utils.database_utils import create_sqlalchemy_engine
    >>>
    >>> engine = create_sqlalchemy_engine(database='shop', isolation_level='AUTOCOMMIT')
"""

from typing import Any, Dict, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import URL, Engine

from core.config import config


class DatabaseConnectionError(Exception):
    """Exception raised when database connection fails."""
    pass


def create_sqlalchemy_engine(
    host: str = None,
    port: int = None,
    user: str = None,
    password: str = None,
    database: str = None,
    charset: str = None,
    connect_timeout: Optional[float] = None,
    isolation_level: Optional[str] = None,
    echo: bool = False,
    pool_size: int = 5,
    max_overflow: int = 10
) -> Engine:
    """
    Create SQLAlchemy engine with connection pooling.

    Args:
        host: Database hostname (defaults to config.db_host)
        port: Database port (defaults to config.db_port)
        user: Database user (defaults to config.db_user)
        password: Database password (defaults to config.db_password)
        database: Default schema (defaults to config.db_name); '' selects none
        charset: Connection charset (defaults to config.db.charset)
        connect_timeout: Seconds to wait for the TCP/handshake
        isolation_level: e.g. 'AUTOCOMMIT'; driver default when None
        echo: Enable SQLAlchemy's own statement logging
        pool_size: Connection pool size
        max_overflow: Maximum overflow connections

    Returns:
        Configured SQLAlchemy Engine

    Example:
        >>> engine = create_sqlalchemy_engine(database='shop')
        >>> with engine.connect() as conn:
        ...     result = conn.exec_driver_sql("SELECT 1")
    """
    connection_url = URL.create(
        drivername='mysql+pymysql',
        username=user or config.db_user,
        password=password if password is not None else config.db_password,
        host=host or config.db_host,
        port=port or config.db_port,
        database=(database if database is not None else config.db_name) or None,
        query={'charset': charset or config.db.charset}
    )

    engine_kwargs: Dict[str, Any] = {
        'echo': echo,
        'pool_size': pool_size,
        'max_overflow': max_overflow,
        'pool_pre_ping': True  # Verify connections before using
    }
    if connect_timeout is not None:
        engine_kwargs['connect_args'] = {'connect_timeout': connect_timeout}
    if isolation_level is not None:
        engine_kwargs['isolation_level'] = isolation_level

    return create_engine(connection_url, **engine_kwargs)
