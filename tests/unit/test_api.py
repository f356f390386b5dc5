from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from clause_worker.api.server import create_app, upload_path
from clause_worker.config.settings import Settings
from clause_worker.database.models import ContractRecord, ContractStatus
from clause_worker.database.repositories.contract_repository import ContractRepository
from clause_worker.database.repositories.job_repository import JobRepository
from clause_worker.processor.exceptions import ContractNotFoundError
from clause_worker.storage.local_adapter import LocalBlobStore


def _make_record(contract_id: str = "c-1", **overrides: object) -> ContractRecord:
    values: dict = {
        "id": contract_id,
        "file_name": "msa.pdf",
        "status": ContractStatus.PENDING,
        "progress": 0,
        "uploaded_at": datetime(2025, 3, 1, tzinfo=UTC),
    }
    values.update(overrides)
    return ContractRecord(**values)


@pytest.fixture()
def contract_repo() -> MagicMock:
    repo = MagicMock(spec=ContractRepository)
    repo.find_by_id.return_value = _make_record()
    repo.create.return_value = _make_record("c-new")
    return repo


@pytest.fixture()
def job_repo() -> MagicMock:
    return MagicMock(spec=JobRepository)


@pytest.fixture()
def blob_store(tmp_path: Path) -> LocalBlobStore:
    return LocalBlobStore(tmp_path)


@pytest.fixture()
def client(
    contract_repo: MagicMock, job_repo: MagicMock, blob_store: LocalBlobStore
) -> TestClient:
    app = create_app(
        Settings(),
        contract_repo=contract_repo,
        job_repo=job_repo,
        blob_store=blob_store,
        manage_pool=False,
    )
    return TestClient(app)


class TestProcessDocument:
    def test_enqueues_and_acknowledges(self, client: TestClient, job_repo: MagicMock) -> None:
        response = client.post(
            "/process_document", json={"id": "c-1", "filename": "gs://b/input/a.pdf"}
        )

        assert response.status_code == 200
        body = response.json()
        assert body["success"] is True
        assert body["data"]["id"] == "c-1"
        assert body["data"]["filename"] == "gs://b/input/a.pdf"
        assert "timestamp" in body["data"]
        job_repo.enqueue.assert_called_once_with("c-1", "gs://b/input/a.pdf")

    @pytest.mark.parametrize(
        "payload",
        [{}, {"id": "c-1"}, {"filename": "gs://b/a.pdf"}, {"id": " ", "filename": "x"}],
    )
    def test_missing_fields_rejected(
        self, client: TestClient, job_repo: MagicMock, payload: dict
    ) -> None:
        response = client.post("/process_document", json=payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Missing required fields"
        job_repo.enqueue.assert_not_called()

    def test_unknown_contract_returns_404(
        self, client: TestClient, contract_repo: MagicMock, job_repo: MagicMock
    ) -> None:
        contract_repo.find_by_id.side_effect = ContractNotFoundError("Contract x not found")

        response = client.post("/process_document", json={"id": "x", "filename": "gs://b/a.pdf"})

        assert response.status_code == 404
        job_repo.enqueue.assert_not_called()

    def test_enqueue_failure_returns_500(self, client: TestClient, job_repo: MagicMock) -> None:
        job_repo.enqueue.side_effect = RuntimeError("db down")

        response = client.post("/process_document", json={"id": "c-1", "filename": "gs://b/a.pdf"})

        assert response.status_code == 500
        assert response.json()["error"] == "Internal server error"


class TestUpload:
    def test_stores_file_creates_record_and_enqueues(
        self,
        client: TestClient,
        contract_repo: MagicMock,
        job_repo: MagicMock,
        blob_store: LocalBlobStore,
    ) -> None:
        response = client.post(
            "/contracts/upload",
            files={"pdf": ("msa.pdf", b"%PDF-1.4 fake", "application/pdf")},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["contractId"] == "c-new"
        assert body["fileUri"].startswith("file://")
        contract_repo.create.assert_called_once_with("msa.pdf")
        job_repo.enqueue.assert_called_once_with("c-new", body["fileUri"])
        stored = blob_store.list("input/")
        assert len(stored) == 1
        assert stored[0].name.endswith("-msa.pdf")

    def test_missing_file_returns_400(self, client: TestClient) -> None:
        response = client.post("/contracts/upload")

        assert response.status_code == 400
        assert response.json() == {"error": "No file uploaded"}

    def test_store_failure_returns_500(
        self, client: TestClient, contract_repo: MagicMock
    ) -> None:
        contract_repo.create.side_effect = RuntimeError("db down")

        response = client.post(
            "/contracts/upload",
            files={"pdf": ("msa.pdf", b"%PDF", "application/pdf")},
        )

        assert response.status_code == 500

    def test_upload_path_uses_base_name(self) -> None:
        path = upload_path("../../etc/msa.pdf")
        assert path.startswith("input/")
        assert path.endswith("-msa.pdf")
        assert ".." not in path


class TestContracts:
    def test_list_uses_camel_case(self, client: TestClient, contract_repo: MagicMock) -> None:
        contract_repo.list_all.return_value = [
            _make_record(
                "c-2",
                status=ContractStatus.COMPLETED,
                progress=100,
                indemnification_text="I",
                termination_text="T",
            ),
            _make_record("c-1"),
        ]

        response = client.get("/contracts")

        assert response.status_code == 200
        first = response.json()[0]
        assert first["id"] == "c-2"
        assert first["fileName"] == "msa.pdf"
        assert first["status"] == "completed"
        assert first["indemnificationText"] == "I"
        assert first["terminationText"] == "T"
        assert "uploadedAt" in first

    def test_get_one(self, client: TestClient) -> None:
        response = client.get("/contracts/c-1")

        assert response.status_code == 200
        assert response.json()["status"] == "pending"

    def test_get_missing_returns_404(self, client: TestClient, contract_repo: MagicMock) -> None:
        contract_repo.find_by_id.side_effect = ContractNotFoundError("Contract nope not found")

        response = client.get("/contracts/nope")

        assert response.status_code == 404
        assert response.json() == {"error": "Contract not found"}
