"""
PostgreSQL store for CRConfig synthesis.

Reads delivery services, regexes, static DNS entries and server profile
parameters for one CDN. A synthesis run takes a snapshot: one pooled
connection in a read-only REPEATABLE READ transaction, so that all four
queries observe the same database state.

Uses connection pooling so independent runs for different CDNs can
proceed in parallel.
"""

import os
from contextlib import contextmanager
from typing import Any, Callable, Generator, TypeVar
from urllib.parse import urlparse

import psycopg2
import psycopg2.extensions
import psycopg2.extras
from psycopg2 import pool

from ..errors import StoreError
from ..logging import store_logger
from ..models.rows import (
    DeliveryServiceRow,
    ProfileParameterRow,
    RegexRow,
    StaticDNSRow,
)
from .queries import (
    DELIVERY_SERVICES_SQL,
    REGEXES_SQL,
    SERVER_PROFILE_PARAMETERS_SQL,
    STATIC_DNS_ENTRIES_SQL,
)

logger = store_logger()

RowT = TypeVar("RowT")


class PostgresReader:
    """Store reader bound to one connection and transaction."""

    def __init__(self, conn: Any):
        self._conn = conn

    def _query(
        self,
        operation: str,
        sql: str,
        cdn: str,
        factory: Callable[[dict[str, Any]], RowT],
    ) -> list[RowT]:
        try:
            with self._conn.cursor(cursor_factory=psycopg2.extras.RealDictCursor) as cur:
                cur.execute(sql, (cdn,))
                records = cur.fetchall()
        except psycopg2.Error as e:
            raise StoreError(f"querying {operation}", e) from e

        try:
            rows = [factory(dict(record)) for record in records]
        except (KeyError, TypeError, ValueError) as e:
            raise StoreError(f"scanning {operation}", e) from e

        logger.debug("Store query complete", operation=operation, cdn=cdn, rows=len(rows))
        return rows

    def delivery_services(self, cdn: str) -> list[DeliveryServiceRow]:
        return self._query(
            "delivery services", DELIVERY_SERVICES_SQL, cdn, DeliveryServiceRow.from_dict
        )

    def static_dns_entries(self, cdn: str) -> list[StaticDNSRow]:
        return self._query(
            "static DNS entries", STATIC_DNS_ENTRIES_SQL, cdn, StaticDNSRow.from_dict
        )

    def regexes(self, cdn: str) -> list[RegexRow]:
        return self._query(
            "delivery service regexes", REGEXES_SQL, cdn, RegexRow.from_dict
        )

    def server_profile_parameters(self, cdn: str) -> list[ProfileParameterRow]:
        return self._query(
            "server profile parameters",
            SERVER_PROFILE_PARAMETERS_SQL,
            cdn,
            ProfileParameterRow.from_dict,
        )


class PostgresStore:
    """
    Traffic Ops PostgreSQL database with connection pooling.

    Provides:
    - Read-consistent snapshots for synthesis runs
    - Thread-safe connection pooling
    """

    DEFAULT_MIN_CONNECTIONS = 1
    DEFAULT_MAX_CONNECTIONS = 4

    def __init__(
        self,
        host: str | None = None,
        port: int | None = None,
        database: str | None = None,
        user: str | None = None,
        password: str | None = None,
        min_connections: int = DEFAULT_MIN_CONNECTIONS,
        max_connections: int = DEFAULT_MAX_CONNECTIONS,
        # URL-based connection (overrides host/port/user/password/database)
        url: str | None = None,
    ):
        url = url or os.environ.get("DATABASE_URL")
        if url:
            parsed = urlparse(url)
            host = parsed.hostname or "localhost"
            port = parsed.port or 5432
            user = parsed.username or "traffic_ops"
            password = parsed.password or ""
            database = parsed.path.lstrip("/") or "traffic_ops"

        self.connection_params = {
            "host": host or os.environ.get("POSTGRES_HOST", "localhost"),
            "port": port or int(os.environ.get("POSTGRES_PORT", "5432")),
            "database": database or os.environ.get("POSTGRES_DB", "traffic_ops"),
            "user": user or os.environ.get("POSTGRES_USER", "traffic_ops"),
            "password": password or os.environ.get("POSTGRES_PASSWORD", ""),
        }
        self._pool: pool.ThreadedConnectionPool | None = None
        self._min_connections = min_connections
        self._max_connections = max_connections

    def connect(self) -> None:
        """Create the connection pool."""
        try:
            self._pool = pool.ThreadedConnectionPool(
                minconn=self._min_connections,
                maxconn=self._max_connections,
                **self.connection_params,
            )
        except psycopg2.Error as e:
            raise StoreError("connecting to database", e) from e
        logger.info(
            "Database pool created",
            host=self.connection_params["host"],
            port=self.connection_params["port"],
            database=self.connection_params["database"],
        )

    def close(self) -> None:
        """Close all connections in the pool."""
        if self._pool:
            self._pool.closeall()
            self._pool = None
            logger.info("Database pool closed")

    @property
    def is_connected(self) -> bool:
        return self._pool is not None

    @contextmanager
    def get_connection(self) -> Generator[Any, None, None]:
        """Get a connection from the pool with automatic return."""
        if not self._pool:
            raise RuntimeError("Connection pool not initialized. Call connect() first.")

        conn = self._pool.getconn()
        try:
            yield conn
        finally:
            self._pool.putconn(conn)

    @contextmanager
    def snapshot(self) -> Generator[PostgresReader, None, None]:
        """Yield a reader inside a read-only REPEATABLE READ transaction."""
        with self.get_connection() as conn:
            try:
                conn.set_session(
                    isolation_level=psycopg2.extensions.ISOLATION_LEVEL_REPEATABLE_READ,
                    readonly=True,
                )
            except psycopg2.Error as e:
                raise StoreError("starting read transaction", e) from e
            try:
                yield PostgresReader(conn)
            finally:
                try:
                    conn.rollback()
                except psycopg2.Error as e:
                    logger.warning("Rollback of read transaction failed", error=str(e))


class MemoryStore:
    """
    In-memory store for tests and fixture-driven runs.

    Rows are kept per CDN; regexes are returned ordered by set number
    like the database query does.
    """

    def __init__(self):
        self._cdns: dict[str, dict[str, list]] = {}

    def _tables(self, cdn: str) -> dict[str, list]:
        return self._cdns.setdefault(cdn, {
            "delivery_services": [],
            "regexes": [],
            "static_dns_entries": [],
            "server_profile_parameters": [],
        })

    def add_delivery_service(self, cdn: str, row: DeliveryServiceRow) -> None:
        self._tables(cdn)["delivery_services"].append(row)

    def add_regex(self, cdn: str, row: RegexRow) -> None:
        self._tables(cdn)["regexes"].append(row)

    def add_static_dns_entry(self, cdn: str, row: StaticDNSRow) -> None:
        self._tables(cdn)["static_dns_entries"].append(row)

    def add_profile_parameter(self, cdn: str, row: ProfileParameterRow) -> None:
        self._tables(cdn)["server_profile_parameters"].append(row)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MemoryStore":
        """
        Create from {cdn: {table: [row dicts]}}.

        Tables: delivery_services, regexes, static_dns_entries,
        server_profile_parameters.
        """
        store = cls()
        for cdn, tables in (data or {}).items():
            tables = tables or {}
            for row in tables.get("delivery_services", []):
                store.add_delivery_service(cdn, DeliveryServiceRow.from_dict(row))
            for row in tables.get("regexes", []):
                store.add_regex(cdn, RegexRow.from_dict(row))
            for row in tables.get("static_dns_entries", []):
                store.add_static_dns_entry(cdn, StaticDNSRow.from_dict(row))
            for row in tables.get("server_profile_parameters", []):
                store.add_profile_parameter(cdn, ProfileParameterRow.from_dict(row))
        return store

    @contextmanager
    def snapshot(self) -> Generator["MemoryStore", None, None]:
        yield self

    def delivery_services(self, cdn: str) -> list[DeliveryServiceRow]:
        return list(self._tables(cdn)["delivery_services"])

    def static_dns_entries(self, cdn: str) -> list[StaticDNSRow]:
        return list(self._tables(cdn)["static_dns_entries"])

    def regexes(self, cdn: str) -> list[RegexRow]:
        return sorted(self._tables(cdn)["regexes"], key=lambda r: r.set_number)

    def server_profile_parameters(self, cdn: str) -> list[ProfileParameterRow]:
        return list(self._tables(cdn)["server_profile_parameters"])
