"""
==================================================
Live MySQL connection for the statement builder.
==================================================

Connect opens its connection lazily, on the first exec() or escape() of a
string, through a SQLAlchemy engine using the PyMySQL driver. Connecting is
retried ``connection_attempts`` times; ``init_commands`` run right after the
connection is established.

SQL text is sent with ``exec_driver_sql()`` and the ``no_parameters``
execution option: statements are fully rendered by the builder, so a
literal ``%`` must never be taken for a driver placeholder.

Every executed statement is logged at DEBUG on the ``connect.connection``
logger together with host, port, database and runtime.

Example:
    >>> from connect import Connect
    >>> from core.config import config
    >>>
    >>> connect = Connect.from_config(config)
    >>> connect.insert('users', {'name': 'Ann'}).exec_and_get_last_id()
    42
    >>> connect.close()
"""

import logging
import time
from typing import Any, Optional, Sequence

from sqlalchemy.engine import Connection, CursorResult, Engine
from sqlalchemy.exc import DBAPIError, SQLAlchemyError

from connect.base import ConnectInterface
from core.config import Config
from utils.database_utils import DatabaseConnectionError, create_sqlalchemy_engine

logger = logging.getLogger(__name__)


class Connect(ConnectInterface):
    """Lazily connected MySQL executor.

    Attributes:
        hostname: MySQL server hostname or IP address
        username: Database username
        password: Database password
        database: Default schema
        port: MySQL server port
        connection_attempts: Connection tries before giving up
        connection_timeout: Seconds to wait for each connection attempt
        init_commands: Statements executed right after connecting
        charset: Connection character set
    """

    def __init__(
        self,
        hostname: str,
        username: str,
        password: str,
        database: str,
        port: int = 3306,
        connection_attempts: int = 2,
        connection_timeout: float = 1.0,
        init_commands: Sequence[str] = (),
        charset: str = 'utf8mb4',
        engine: Optional[Engine] = None
    ):
        """Initialize connection settings; nothing is opened yet.

        Args:
            hostname: MySQL server hostname or IP address
            username: Database username
            password: Database password
            database: Default schema
            port: MySQL server port
            connection_attempts: Connection tries before giving up
            connection_timeout: Seconds to wait for each connection attempt
            init_commands: Statements executed right after connecting,
                e.g. ``["SET time_zone = '+00:00'"]``
            charset: Connection character set
            engine: Pre-built engine; created from the settings when None
        """
        self.hostname = hostname
        self.username = username
        self.password = password
        self.database = database
        self.port = port
        self.connection_attempts = max(1, connection_attempts)
        self.connection_timeout = connection_timeout
        self.init_commands = list(init_commands)
        self.charset = charset

        self._engine = engine
        self._connection: Optional[Connection] = None
        self._last_insert_id = 0
        self._last_affected_rows = 0

    @classmethod
    def from_config(cls, config: Config) -> 'Connect':
        """Create a connection from the MYSQL_* settings of a Config."""
        return cls(**config.get_connection_params())

    def _log(self, query: str, start: float) -> None:
        logger.debug(
            f"{query} [host={self.hostname} port={self.port} database={self.database} "
            f"runtime={time.perf_counter() - start:.6f}s]"
        )

    def _create_engine(self) -> Engine:
        return create_sqlalchemy_engine(
            host=self.hostname,
            port=self.port,
            user=self.username,
            password=self.password,
            database=self.database,
            charset=self.charset,
            connect_timeout=self.connection_timeout,
            isolation_level='AUTOCOMMIT',
            pool_size=1,
            max_overflow=0
        )

    def driver(self) -> Connection:
        """
        Get the open connection, connecting on first use.

        Returns:
            SQLAlchemy Connection configured for pre-rendered SQL

        Raises:
            DatabaseConnectionError: If every connection attempt failed
        """
        if self._connection is not None:
            return self._connection

        if self._engine is None:
            self._engine = self._create_engine()

        start = time.perf_counter()
        attempt = 0
        while True:
            attempt += 1
            try:
                connection = self._engine.connect()
                break
            except DBAPIError as e:
                if attempt >= self.connection_attempts:
                    logger.error(
                        f"Could not connect to MySQL at {self.hostname}:{self.port} "
                        f"after {attempt} attempt(s): {e}"
                    )
                    raise DatabaseConnectionError(
                        f"Could not connect to MySQL at {self.hostname}:{self.port}/{self.database}"
                    ) from e
                logger.warning(
                    f"Connection attempt {attempt}/{self.connection_attempts} "
                    f"to {self.hostname}:{self.port} failed, retrying"
                )

        self._connection = connection.execution_options(no_parameters=True)
        logger.info(f"Connected to MySQL at {self.hostname}:{self.port}/{self.database}")
        self._log('connect', start)

        for command in self.init_commands:
            self.exec(command)

        return self._connection

    def exec(self, query: str) -> CursorResult:
        """
        Execute a rendered statement.

        Args:
            query: Complete SQL text

        Returns:
            The driver result; rows can be fetched from it for SELECT

        Raises:
            SQLAlchemyError: If MySQL rejects the statement
        """
        # connect first so connection time is not counted as query runtime
        driver = self.driver()
        start = time.perf_counter()
        try:
            result = driver.exec_driver_sql(query)
        except SQLAlchemyError as e:
            logger.error(f"Query failed: {query} ({e})")
            raise

        self._last_affected_rows = result.rowcount
        self._last_insert_id = result.lastrowid or 0
        self._log(query, start)
        return result

    def escape_string(self, value: str) -> str:
        """Escape with the driver, honouring the server's SQL mode."""
        return self.driver().connection.driver_connection.escape_string(value)

    def last_insert_id(self) -> int:
        return int(self._last_insert_id)

    def last_affected_rows(self) -> int:
        return int(self._last_affected_rows)

    def close(self) -> None:
        """Close the connection and dispose of the engine."""
        if self._connection is not None:
            self._connection.close()
            self._connection = None
        if self._engine is not None:
            self._engine.dispose()
            self._engine = None
        logger.debug(f"Closed connection to {self.hostname}:{self.port}")

    def __repr__(self) -> str:
        return f"Connect({self.username}@{self.hostname}:{self.port}/{self.database})"

    def __enter__(self) -> 'Connect':
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
