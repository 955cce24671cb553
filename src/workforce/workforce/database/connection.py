from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

import mysql.connector
from mysql.connector import pooling
from mysql.connector.errors import PoolError

logger = logging.getLogger(__name__)

DEFAULT_POOL_SIZE = 10


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str
    pool_size: int = DEFAULT_POOL_SIZE

    @classmethod
    def from_dict(cls, db_config: dict) -> "DBConfig":
        """Build from a settings ``DB_CONFIG`` dict, filling MySQL defaults."""
        return cls(
            host=str(db_config.get("host", "localhost")),
            port=int(db_config.get("port", 3306)),
            user=str(db_config.get("user", "root")),
            password=str(db_config.get("password", "")),
            database=str(db_config.get("database", "workforce_db")),
            pool_size=int(db_config.get("pool_size", DEFAULT_POOL_SIZE)),
        )

    def connect_args(self) -> dict:
        return {
            "host": self.host,
            "port": self.port,
            "user": self.user,
            "password": self.password,
            "database": self.database,
        }


class DatabaseConnection:
    """Process-wide factory handing out pooled MySQL connections.

    Repositories borrow a connection per operation; ``close()`` on a pooled
    connection returns it to the pool instead of dropping the socket. When every
    pooled connection is busy a plain, unpooled connection is opened instead.
    """

    _instance: Optional["DatabaseConnection"] = None
    _instance_lock = threading.Lock()

    def __init__(self, config: DBConfig):
        self._config = config
        self._pool: Optional[pooling.MySQLConnectionPool] = None
        self._pool_lock = threading.Lock()

    @classmethod
    def get_instance(cls, config: DBConfig) -> "DatabaseConnection":
        with cls._instance_lock:
            if cls._instance is None or cls._instance.config != config:
                cls._instance = cls(config)
            return cls._instance

    @property
    def config(self) -> DBConfig:
        return self._config

    def _get_pool(self) -> pooling.MySQLConnectionPool:
        with self._pool_lock:
            if self._pool is None:
                logger.info(
                    "Opening MySQL pool (size=%d) to %s@%s:%s/%s",
                    self._config.pool_size,
                    self._config.user,
                    self._config.host,
                    self._config.port,
                    self._config.database,
                )
                self._pool = pooling.MySQLConnectionPool(
                    pool_name="workforce",
                    pool_size=self._config.pool_size,
                    pool_reset_session=True,
                    **self._config.connect_args(),
                )
            return self._pool

    def connect(self):
        pool = self._get_pool()
        try:
            return pool.get_connection()
        except PoolError:
            logger.warning("MySQL pool exhausted (size=%d); opening an unpooled connection", self._config.pool_size)
            return mysql.connector.connect(**self._config.connect_args())
