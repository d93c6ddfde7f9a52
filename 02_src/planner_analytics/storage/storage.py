"""SQLite storage implementation."""

import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import aiosqlite

from ..config import resolve_db_path
from ..exceptions import StorageNotInitializedError
from ..models import AnalyticsEvent, BufferedEvent


def _to_db_timestamp(ts: datetime) -> str:
    if ts.tzinfo is None:
        ts = ts.replace(tzinfo=timezone.utc)
    return ts.astimezone(timezone.utc).isoformat()


def _from_db_timestamp(value: str) -> datetime:
    ts = datetime.fromisoformat(value)
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


class IStorage(Protocol):
    """Persistent storage for buffered and collected events (SQLite)."""

    async def init(self) -> None:
        """Initialize database and create tables."""
        ...

    async def close(self) -> None:
        """Close database connection."""
        ...

    # Local buffer
    async def buffer_event(self, event: AnalyticsEvent) -> int:
        """Append an event to the local buffer, return its sequence number."""
        ...

    async def count_buffered(self) -> int:
        """Number of events waiting in the local buffer."""
        ...

    async def get_buffered(self, limit: int | None = None) -> list[BufferedEvent]:
        """Oldest buffered events first."""
        ...

    async def delete_buffered(self, seqs: list[int]) -> None:
        """Remove buffered events by sequence number."""
        ...

    async def trim_buffered(self, keep: int) -> int:
        """Drop the oldest buffered events beyond `keep`, return how many."""
        ...

    # Collected events
    async def save_collected_events(self, events: list[AnalyticsEvent]) -> int:
        """Store received events, skipping known ids. Return number stored."""
        ...

    async def get_collected_events(
        self,
        after: datetime | None = None,
        names: list[str] | None = None,
        limit: int = 100,
    ) -> list[AnalyticsEvent]:
        """Get collected events (newest first) with optional filters."""
        ...

    async def count_collected_by_name(self) -> dict[str, int]:
        """Number of collected events per event name."""
        ...

    async def get_session_events(self, names: list[str]) -> list[AnalyticsEvent]:
        """Collected events with a session id and one of `names`, oldest first."""
        ...

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        ...


class Storage:
    """SQLite storage implementation."""

    def __init__(self, db_path: str | Path | None = None):
        if db_path is None:
            self._db_path = resolve_db_path()
        else:
            self._db_path = resolve_db_path(db_path)
        self._conn: aiosqlite.Connection | None = None

    def _require_conn(self) -> aiosqlite.Connection:
        if not self._conn:
            raise StorageNotInitializedError()
        return self._conn

    async def init(self) -> None:
        """Initialize database and create tables."""
        self._conn = await aiosqlite.connect(self._db_path)

        schema_path = Path(__file__).parent / "schema.sql"
        with open(schema_path, "r", encoding="utf-8") as f:
            schema_sql = f.read()
        await self._conn.executescript(schema_sql)
        await self._conn.commit()

    async def close(self) -> None:
        """Close database connection."""
        if self._conn:
            await self._conn.close()
            self._conn = None

    # Local buffer
    async def buffer_event(self, event: AnalyticsEvent) -> int:
        """Append an event to the local buffer, return its sequence number."""
        conn = self._require_conn()

        cursor = await conn.execute(
            """
            INSERT INTO buffered_events (id, name, properties, session_id, timestamp)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                event.id,
                event.name,
                json.dumps(event.properties),
                event.session_id,
                _to_db_timestamp(event.timestamp),
            ),
        )
        await conn.commit()
        return cursor.lastrowid

    async def count_buffered(self) -> int:
        """Number of events waiting in the local buffer."""
        conn = self._require_conn()

        cursor = await conn.execute("SELECT COUNT(*) FROM buffered_events")
        row = await cursor.fetchone()
        return row[0]

    async def get_buffered(self, limit: int | None = None) -> list[BufferedEvent]:
        """Oldest buffered events first."""
        conn = self._require_conn()

        query = """
            SELECT seq, id, name, properties, session_id, timestamp
            FROM buffered_events
            ORDER BY seq ASC
        """
        params: tuple = ()
        if limit is not None:
            query += " LIMIT ?"
            params = (limit,)

        cursor = await conn.execute(query, params)
        rows = await cursor.fetchall()

        return [
            BufferedEvent(
                seq=row[0],
                event=AnalyticsEvent(
                    id=row[1],
                    name=row[2],
                    properties=json.loads(row[3]),
                    session_id=row[4],
                    timestamp=_from_db_timestamp(row[5]),
                ),
            )
            for row in rows
        ]

    async def delete_buffered(self, seqs: list[int]) -> None:
        """Remove buffered events by sequence number."""
        conn = self._require_conn()
        if not seqs:
            return

        placeholders = ",".join("?" * len(seqs))
        await conn.execute(
            f"DELETE FROM buffered_events WHERE seq IN ({placeholders})",
            list(seqs),
        )
        await conn.commit()

    async def trim_buffered(self, keep: int) -> int:
        """Drop the oldest buffered events beyond `keep`, return how many."""
        conn = self._require_conn()

        cursor = await conn.execute(
            """
            DELETE FROM buffered_events
            WHERE seq NOT IN (
                SELECT seq FROM buffered_events ORDER BY seq DESC LIMIT ?
            )
            """,
            (keep,),
        )
        await conn.commit()
        return cursor.rowcount

    # Collected events
    async def save_collected_events(self, events: list[AnalyticsEvent]) -> int:
        """Store received events, skipping known ids. Return number stored."""
        conn = self._require_conn()

        received_at = _to_db_timestamp(datetime.now(timezone.utc))
        stored = 0
        for event in events:
            cursor = await conn.execute(
                """
                INSERT OR IGNORE INTO collected_events
                (id, name, properties, session_id, timestamp, received_at)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    event.id,
                    event.name,
                    json.dumps(event.properties),
                    event.session_id,
                    _to_db_timestamp(event.timestamp),
                    received_at,
                ),
            )
            stored += cursor.rowcount

        await conn.commit()
        return stored

    async def get_collected_events(
        self,
        after: datetime | None = None,
        names: list[str] | None = None,
        limit: int = 100,
    ) -> list[AnalyticsEvent]:
        """Get collected events (newest first) with optional filters."""
        conn = self._require_conn()

        conditions = []
        params: list = []

        if after:
            conditions.append("timestamp > ?")
            params.append(_to_db_timestamp(after))
        if names:
            placeholders = ",".join("?" * len(names))
            conditions.append(f"name IN ({placeholders})")
            params.extend(names)

        where_clause = f"WHERE {' AND '.join(conditions)}" if conditions else ""

        query = f"""
            SELECT id, name, properties, session_id, timestamp
            FROM collected_events
            {where_clause}
            ORDER BY timestamp DESC
            LIMIT ?
        """
        params.append(limit)

        cursor = await conn.execute(query, params)
        rows = await cursor.fetchall()

        return [self._row_to_event(row) for row in rows]

    async def count_collected_by_name(self) -> dict[str, int]:
        """Number of collected events per event name."""
        conn = self._require_conn()

        cursor = await conn.execute(
            """
            SELECT name, COUNT(*)
            FROM collected_events
            GROUP BY name
            ORDER BY name ASC
            """
        )
        rows = await cursor.fetchall()
        return {row[0]: row[1] for row in rows}

    async def get_session_events(self, names: list[str]) -> list[AnalyticsEvent]:
        """Collected events with a session id and one of `names`, oldest first."""
        conn = self._require_conn()
        if not names:
            return []

        placeholders = ",".join("?" * len(names))
        cursor = await conn.execute(
            f"""
            SELECT id, name, properties, session_id, timestamp
            FROM collected_events
            WHERE session_id IS NOT NULL AND name IN ({placeholders})
            ORDER BY timestamp ASC, rowid ASC
            """,
            list(names),
        )
        rows = await cursor.fetchall()
        return [self._row_to_event(row) for row in rows]

    @staticmethod
    def _row_to_event(row) -> AnalyticsEvent:
        return AnalyticsEvent(
            id=row[0],
            name=row[1],
            properties=json.loads(row[2]),
            session_id=row[3],
            timestamp=_from_db_timestamp(row[4]),
        )

    # Lifecycle
    async def clear(self) -> None:
        """Clear all data."""
        conn = self._require_conn()

        for table in ["buffered_events", "collected_events"]:
            await conn.execute(f"DELETE FROM {table}")

        await conn.commit()
