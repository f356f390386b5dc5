import uuid
from typing import Any

from psycopg.rows import dict_row

from clause_worker.database.connection import get_connection
from clause_worker.database.models import ContractRecord, ContractStatus
from clause_worker.processor.exceptions import ContractNotFoundError

_COLUMNS = """
    id, file_name, uploaded_at, status, progress,
    indemnification_text, termination_text
"""


def _to_record(row: dict[str, Any]) -> ContractRecord:
    return ContractRecord(
        id=row["id"],
        file_name=row["file_name"],
        status=ContractStatus(row["status"]),
        progress=row["progress"],
        indemnification_text=row["indemnification_text"],
        termination_text=row["termination_text"],
        uploaded_at=row["uploaded_at"],
    )


class ContractRepository:
    """Record store for the contracts table."""

    def create(self, file_name: str) -> ContractRecord:
        """Insert a new record in the pending state with progress 0."""
        contract_id = str(uuid.uuid4())
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    INSERT INTO contracts (id, file_name, status, progress)
                    VALUES (%s, %s, 'pending', 0)
                    RETURNING {_COLUMNS}
                    """,
                    (contract_id, file_name),
                )
                row = cur.fetchone()
            conn.commit()
        if row is None:
            raise RuntimeError(f"Insert of contract {contract_id} returned no row")
        return _to_record(row)

    def find_by_id(self, contract_id: str) -> ContractRecord:
        """Fetch one record.

        Raises:
            ContractNotFoundError: if no contract with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_COLUMNS} FROM contracts WHERE id = %s",
                    (contract_id,),
                )
                row = cur.fetchone()

        if row is None:
            raise ContractNotFoundError(f"Contract {contract_id} not found")
        return _to_record(row)

    def list_all(self) -> list[ContractRecord]:
        """All records, most recently uploaded first."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(f"SELECT {_COLUMNS} FROM contracts ORDER BY uploaded_at DESC")
                rows = cur.fetchall()
        return [_to_record(row) for row in rows]

    def update_status(
        self,
        contract_id: str,
        status: ContractStatus,
        *,
        progress: int | None = None,
        indemnification_text: str | None = None,
        termination_text: str | None = None,
    ) -> ContractRecord | None:
        """Apply a status update unless the record is already terminal.

        Clause columns and progress are only written when given; progress never
        moves backwards.

        Returns:
            The updated record, or None when the record exists but is already
            completed or failed (the update is ignored).

        Raises:
            ContractNotFoundError: if no contract with this ID exists.
        """
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"""
                    UPDATE contracts
                    SET status = %s::contract_status,
                        progress = GREATEST(progress, COALESCE(%s, progress)),
                        indemnification_text = COALESCE(%s, indemnification_text),
                        termination_text = COALESCE(%s, termination_text)
                    WHERE id = %s
                      AND status NOT IN ('completed', 'failed')
                    RETURNING {_COLUMNS}
                    """,
                    (
                        status.value,
                        progress,
                        indemnification_text,
                        termination_text,
                        contract_id,
                    ),
                )
                row = cur.fetchone()
                if row is None:
                    cur.execute("SELECT 1 FROM contracts WHERE id = %s", (contract_id,))
                    exists = cur.fetchone() is not None
            conn.commit()

        if row is not None:
            return _to_record(row)
        if not exists:
            raise ContractNotFoundError(f"Contract {contract_id} not found")
        return None
