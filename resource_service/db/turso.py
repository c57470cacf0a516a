"""Async libSQL connection owned by the application.

A single ``TursoClient`` is created at startup and handed to the
repository; tests build their own against a temp file.
"""

import logging
from typing import Any

from libsql_client import Client, ResultSet, Statement, create_client

from resource_service.config import settings

logger = logging.getLogger(__name__)

BatchItem = str | tuple[str, list[Any]]


class TursoClient:
    """Thin async handle over ``libsql_client``.

    Local ``file:`` databases and remote Turso databases are both
    supported; the auth token is only sent to ``libsql://`` URLs.
    Errors from the engine are not caught here.
    """

    def __init__(self, url: str | None = None, auth_token: str | None = None):
        self.url = url or settings.database_url
        self.auth_token = auth_token or settings.database_auth_token
        self._client: Client | None = None

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        """Open the connection; a second call is a no-op."""
        if self._client is not None:
            return
        remote = bool(self.auth_token) and self.url.startswith("libsql://")
        self._client = (
            create_client(url=self.url, auth_token=self.auth_token)
            if remote
            else create_client(url=self.url)
        )
        logger.info(f"Opened database {self.url}")

    def _require_client(self) -> Client:
        if self._client is None:
            msg = "Not connected. Call connect() first."
            raise RuntimeError(msg)
        return self._client

    async def execute(self, sql: str, params: list[Any] | None = None) -> ResultSet:
        """Run one statement with ``?`` placeholders bound to ``params``."""
        return await self._require_client().execute(sql, params or [])

    async def execute_batch(self, statements: list[BatchItem]) -> list[ResultSet]:
        """Run statements atomically, in order.

        Args:
            statements: SQL strings, or (sql, params) pairs

        Returns:
            One ResultSet per statement
        """
        prepared = [
            Statement(item[0], item[1]) if isinstance(item, tuple) else item
            for item in statements
        ]
        return await self._require_client().batch(prepared)

    async def close(self) -> None:
        if self._client is None:
            return
        await self._client.close()
        self._client = None
        logger.info(f"Closed database {self.url}")

    async def is_healthy(self) -> bool:
        """True when connected and a trivial query succeeds."""
        if self._client is None:
            return False
        try:
            result = await self._client.execute("SELECT 1")
        except Exception:
            return False
        return len(result.rows) == 1
