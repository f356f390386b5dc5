import pytest

from clause_worker.database.models import ContractRecord, ContractStatus
from clause_worker.database.repositories.contract_repository import ContractRepository
from clause_worker.processor.exceptions import ContractNotFoundError


@pytest.mark.integration
class TestContractStore:
    def test_create_starts_pending(self, seed_contract: ContractRecord) -> None:
        assert seed_contract.status is ContractStatus.PENDING
        assert seed_contract.progress == 0
        assert seed_contract.uploaded_at is not None

    def test_find_by_id(self, seed_contract: ContractRecord) -> None:
        found = ContractRepository().find_by_id(seed_contract.id)
        assert found.file_name == "integration.pdf"

    def test_find_missing_raises(self, integration_pool: None) -> None:
        with pytest.raises(ContractNotFoundError):
            ContractRepository().find_by_id("does-not-exist")

    def test_list_newest_first(self, created_contracts: list[str]) -> None:
        repo = ContractRepository()
        older = repo.create("older.pdf")
        newer = repo.create("newer.pdf")
        created_contracts.extend([older.id, newer.id])

        ids = [r.id for r in repo.list_all()]

        assert ids.index(newer.id) < ids.index(older.id)


@pytest.mark.integration
class TestContractStatusUpdates:
    def test_progress_never_moves_backwards(self, seed_contract: ContractRecord) -> None:
        repo = ContractRepository()
        repo.update_status(seed_contract.id, ContractStatus.PROCESSING, progress=50)

        record = repo.update_status(seed_contract.id, ContractStatus.PROCESSING, progress=10)

        assert record is not None
        assert record.progress == 50

    def test_completed_sets_both_clauses(self, seed_contract: ContractRecord) -> None:
        record = ContractRepository().update_status(
            seed_contract.id,
            ContractStatus.COMPLETED,
            progress=100,
            indemnification_text="I",
            termination_text="T",
        )

        assert record is not None
        assert record.status is ContractStatus.COMPLETED
        assert (record.indemnification_text, record.termination_text) == ("I", "T")

    def test_terminal_record_ignores_updates(self, seed_contract: ContractRecord) -> None:
        repo = ContractRepository()
        repo.update_status(seed_contract.id, ContractStatus.COMPLETED, progress=100)

        result = repo.update_status(seed_contract.id, ContractStatus.FAILED)

        assert result is None
        assert repo.find_by_id(seed_contract.id).status is ContractStatus.COMPLETED

    def test_update_missing_raises(self, integration_pool: None) -> None:
        with pytest.raises(ContractNotFoundError):
            ContractRepository().update_status("does-not-exist", ContractStatus.FAILED)
