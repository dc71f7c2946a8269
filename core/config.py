"""
======================================================
Configuration management for the statement builder.
======================================================

Loads all configuration from environment variables (.env file) and provides
a centralized Config singleton for application-wide access.

The configuration covers:
- MySQL connection settings used by connect.Connect
- Late-connection behaviour (attempts, timeout, init commands)
- Defaults for bulk INSERT/REPLACE batching

Example:
    >>> from connect import Connect
    >>> from core.config import config
    >>>
    >>> # Live connection
    >>> connect = Connect(**config.get_connection_params())
    >>>
    >>> # Access individual settings
    >>> print(f"Host: {config.db_host}, Port: {config.db_port}")
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent.parent / '.env'
load_dotenv(dotenv_path=env_path)


def _env_bool(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment ('1', 'true', 'yes', 'on')."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


def _env_list(name: str) -> List[str]:
    """Read a ';'-separated list from the environment, dropping blanks."""
    value = os.getenv(name, '')
    return [item.strip() for item in value.split(';') if item.strip()]


@dataclass
class DatabaseConfig:
    """MySQL connection settings.

    Attributes:
        host: MySQL server hostname or IP address
        port: MySQL server port number
        user: Database username
        password: Database password
        database: Default schema selected after connecting
        charset: Connection character set (drives string escaping)
        connection_attempts: How many times a late connection is attempted
        connection_timeout: Seconds to wait for each connection attempt
        init_commands: Statements executed right after connecting
    """

    host: str
    port: int
    user: str
    password: str
    database: str
    charset: str = 'utf8mb4'
    connection_attempts: int = 2
    connection_timeout: float = 1.0
    init_commands: List[str] = field(default_factory=list)

    def get_connection_params(self) -> dict:
        """Get connection parameters as dictionary.

        Returns:
            Dictionary with keys accepted by connect.Connect
        """
        return {
            'hostname': self.host,
            'port': self.port,
            'username': self.user,
            'password': self.password,
            'database': self.database,
            'charset': self.charset,
            'connection_attempts': self.connection_attempts,
            'connection_timeout': self.connection_timeout,
            'init_commands': list(self.init_commands),
        }


@dataclass
class BuilderConfig:
    """Defaults for statement assembly.

    Attributes:
        bulk_batch_size: Rows per statement for InsertBulk/ReplaceBulk
        bulk_deep_validation: Check that every bulk row has the same columns
    """

    bulk_batch_size: int = 1000
    bulk_deep_validation: bool = True


class Config:
    """Centralized configuration manager.

    Provides access to all configuration settings loaded from environment
    variables (.env file).

    Attributes:
        db: DatabaseConfig instance with MySQL connection settings
        builder: BuilderConfig instance with statement defaults

    Example:
        >>> config = Config()
        >>> params = config.get_connection_params()
        >>> print(f"Connecting to {config.db_host}:{config.db_port}")
    """

    def __init__(self):
        """Initialize configuration from environment variables."""
        self.db = DatabaseConfig(
            host=os.getenv('MYSQL_HOST', 'localhost'),
            port=int(os.getenv('MYSQL_PORT', '3306')),
            user=os.getenv('MYSQL_USER', 'root'),
            password=os.getenv('MYSQL_PASSWORD', ''),
            database=os.getenv('MYSQL_DATABASE', ''),
            charset=os.getenv('MYSQL_CHARSET', 'utf8mb4'),
            connection_attempts=int(os.getenv('MYSQL_CONNECTION_ATTEMPTS', '2')),
            connection_timeout=float(os.getenv('MYSQL_CONNECTION_TIMEOUT', '1.0')),
            init_commands=_env_list('MYSQL_INIT_COMMANDS')
        )

        self.builder = BuilderConfig(
            bulk_batch_size=int(os.getenv('BULK_BATCH_SIZE', '1000')),
            bulk_deep_validation=_env_bool('BULK_DEEP_VALIDATION', True)
        )

    @property
    def db_host(self) -> str:
        """Get database server hostname."""
        return self.db.host

    @property
    def db_port(self) -> int:
        """Get database server port number."""
        return self.db.port

    @property
    def db_user(self) -> str:
        """Get database username."""
        return self.db.user

    @property
    def db_password(self) -> str:
        """Get database password."""
        return self.db.password

    @property
    def db_name(self) -> str:
        """Get default schema name."""
        return self.db.database

    @property
    def bulk_batch_size(self) -> int:
        """Get default number of rows per bulk statement."""
        return self.builder.bulk_batch_size

    @property
    def bulk_deep_validation(self) -> bool:
        """Get default bulk row-shape validation flag."""
        return self.builder.bulk_deep_validation

    def get_connection_params(self) -> dict:
        """Get keyword arguments for connect.Connect.

        Example:
            >>> from connect import Connect
            >>> connect = Connect(**config.get_connection_params())
        """
        return self.db.get_connection_params()


# Global configuration instance
config = Config()
