import os
from collections.abc import Generator
from typing import Any

import psycopg
import pytest

from clause_worker.config.settings import Settings
from clause_worker.database.connection import apply_schema, close_pool, get_connection, init_pool
from clause_worker.database.models import ContractRecord, JobRecord
from clause_worker.database.repositories.contract_repository import ContractRepository
from clause_worker.database.repositories.job_repository import JobRepository


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "contracts_test")
    return Settings()


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        apply_schema()
    except Exception as e:
        close_pool()
        pytest.skip(f"PostgreSQL test DB not available: {e}. Set DB_* env to run.")
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def db_conn(integration_pool: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def created_contracts(integration_pool: None) -> Generator[list[str], None, None]:
    """Contract ids to delete after the test; jobs go with them (ON DELETE CASCADE)."""
    ids: list[str] = []
    yield ids
    if not ids:
        return
    with get_connection() as conn:
        conn.execute("DELETE FROM contracts WHERE id = ANY(%s)", (ids,))
        conn.commit()


@pytest.fixture
def seed_contract(created_contracts: list[str]) -> ContractRecord:
    record = ContractRepository().create("integration.pdf")
    created_contracts.append(record.id)
    return record


@pytest.fixture
def seed_job(seed_contract: ContractRecord) -> JobRecord:
    return JobRepository(max_attempts=3).enqueue(seed_contract.id, "gs://bucket/input/a.pdf")
