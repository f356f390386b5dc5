from typing import Any

import psycopg
from psycopg.rows import dict_row

from clause_worker.database.connection import get_connection
from clause_worker.database.models import JobRecord

_COLUMNS = """
    id, contract_id, source_uri, status, attempts,
    error_message, locked_at, created_at, updated_at
"""


def _to_job(row: dict[str, Any]) -> JobRecord:
    return JobRecord(
        id=row["id"],
        contract_id=row["contract_id"],
        source_uri=row["source_uri"],
        status=row["status"],
        attempts=row["attempts"],
        error_message=row.get("error_message"),
        locked_at=row.get("locked_at"),
        created_at=row.get("created_at"),
        updated_at=row.get("updated_at"),
    )


class JobRepository:
    """Hand-off queue between the API and the worker (contract_jobs table)."""

    def __init__(self, max_attempts: int) -> None:
        self._max_attempts = max_attempts

    def enqueue(self, contract_id: str, source_uri: str) -> JobRecord:
        """Queue a pipeline run for a contract and return the pending job."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO contract_jobs (contract_id, source_uri, status, attempts)
                    VALUES (%s, %s, 'pending', 0)
                    RETURNING {_COLUMNS}
                    """,
                    (contract_id, source_uri),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError(f"Enqueue for contract {contract_id} returned no row")
        return _to_job(row)

    def claim_next_job(self, conn: psycopg.Connection[Any]) -> JobRecord | None:
        """Claim the next pending job using SELECT FOR UPDATE SKIP LOCKED."""
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                """
                SELECT id, contract_id, source_uri, status, attempts
                FROM contract_jobs
                WHERE status = 'pending'
                  AND attempts < %s
                ORDER BY created_at
                LIMIT 1
                FOR UPDATE SKIP LOCKED
                """,
                (self._max_attempts,),
            )
            row = cur.fetchone()

        if row is None:
            conn.commit()
            return None

        conn.execute(
            """
            UPDATE contract_jobs
            SET status = 'processing', locked_at = NOW(), updated_at = NOW()
            WHERE id = %s
            """,
            (row["id"],),
        )
        conn.commit()

        return JobRecord(
            id=row["id"],
            contract_id=row["contract_id"],
            source_uri=row["source_uri"],
            status="processing",
            attempts=row["attempts"],
        )

    def release_stale_jobs(self, stale_after_seconds: int) -> int:
        """Return jobs locked for longer than the threshold to pending.

        Covers worker crashes mid-run. Returns the number of jobs released.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE contract_jobs
                    SET status = 'pending', locked_at = NULL, updated_at = NOW()
                    WHERE status = 'processing'
                      AND locked_at < NOW() - %s * INTERVAL '1 second'
                    """,
                    (stale_after_seconds,),
                )
                released = cur.rowcount
            conn.commit()
        return released

    def mark_done(self, job_id: int) -> None:
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE contract_jobs
                SET status = 'done', locked_at = NULL, updated_at = NOW()
                WHERE id = %s
                """,
                (job_id,),
            )
            conn.commit()

    def mark_failed(self, job_id: int, error: str) -> None:
        """Mark a job as permanently failed."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE contract_jobs
                SET status = 'failed', error_message = %s,
                    locked_at = NULL, updated_at = NOW()
                WHERE id = %s
                """,
                (error, job_id),
            )
            conn.commit()

    def increment_attempts(self, job_id: int) -> None:
        """Increment attempt count and return job to pending."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE contract_jobs
                SET attempts = attempts + 1, status = 'pending',
                    locked_at = NULL, updated_at = NOW()
                WHERE id = %s
                """,
                (job_id,),
            )
            conn.commit()

    def find_by_id(self, job_id: int) -> JobRecord | None:
        """Find a job by ID. Useful for tests."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM contract_jobs WHERE id = %s",
                    (job_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return _to_job(row)
