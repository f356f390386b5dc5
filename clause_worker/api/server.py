"""HTTP intake for contracts: uploads, job submission and record reads.

The API only records and enqueues; the worker process runs the pipeline.
"""

import time
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from datetime import UTC, datetime
from pathlib import PurePosixPath

import uvicorn
from fastapi import Depends, FastAPI, File, Request, UploadFile
from fastapi.responses import JSONResponse

from clause_worker.api.schemas import (
    ContractResponse,
    ProcessDocumentData,
    ProcessDocumentRequest,
    ProcessDocumentResponse,
    UploadResponse,
)
from clause_worker.config.settings import Settings
from clause_worker.database.connection import close_pool, init_pool
from clause_worker.database.repositories.contract_repository import ContractRepository
from clause_worker.database.repositories.job_repository import JobRepository
from clause_worker.logging.logger import Log
from clause_worker.processor.exceptions import ContractNotFoundError
from clause_worker.storage.base import BaseBlobStore
from clause_worker.storage.factory import BlobStoreFactory


def get_contract_repo(request: Request) -> ContractRepository:
    return request.app.state.contract_repo


def get_job_repo(request: Request) -> JobRepository:
    return request.app.state.job_repo


def get_blob_store(request: Request) -> BaseBlobStore:
    return request.app.state.blob_store


def upload_path(file_name: str) -> str:
    """Blob path for an uploaded PDF: input/<epoch ms>-<base name>."""
    base_name = PurePosixPath(file_name.replace("\\", "/")).name or "upload.pdf"
    return f"input/{int(time.time() * 1000)}-{base_name}"


def create_app(
    settings: Settings,
    *,
    contract_repo: ContractRepository | None = None,
    job_repo: JobRepository | None = None,
    blob_store: BaseBlobStore | None = None,
    manage_pool: bool = True,
) -> FastAPI:
    """Build the FastAPI application.

    Pass manage_pool=False when the connection pool is owned elsewhere
    (tests, or an embedding process).
    """

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        if manage_pool:
            init_pool(settings)
        try:
            yield
        finally:
            if manage_pool:
                close_pool()

    app = FastAPI(title="Contract Clause Extraction", lifespan=lifespan)
    app.state.contract_repo = contract_repo or ContractRepository()
    app.state.job_repo = job_repo or JobRepository(settings.max_job_attempts)
    app.state.blob_store = blob_store or BlobStoreFactory.create(settings)

    @app.post("/process_document", response_model=ProcessDocumentResponse)
    def process_document(
        body: ProcessDocumentRequest,
        contracts: ContractRepository = Depends(get_contract_repo),
        jobs: JobRepository = Depends(get_job_repo),
    ):
        contract_id = (body.id or "").strip()
        filename = (body.filename or "").strip()
        if not contract_id or not filename:
            return JSONResponse(
                status_code=400,
                content={
                    "error": "Missing required fields",
                    "details": "Both id and filename are required",
                },
            )

        try:
            contracts.find_by_id(contract_id)
        except ContractNotFoundError:
            return JSONResponse(status_code=404, content={"error": "Contract not found"})

        try:
            jobs.enqueue(contract_id, filename)
        except Exception as exc:
            Log.exception(f"Failed to enqueue document: {exc}", contract_id=contract_id)
            return JSONResponse(
                status_code=500,
                content={
                    "error": "Internal server error",
                    "message": "Failed to process document request",
                },
            )

        Log.info("Document processing request received", contract_id=contract_id)
        return ProcessDocumentResponse(
            message="Document processing started",
            data=ProcessDocumentData(
                id=contract_id, filename=filename, timestamp=datetime.now(UTC)
            ),
        )

    @app.post("/contracts/upload", response_model=UploadResponse)
    def upload_contract(
        pdf: UploadFile | None = File(None),
        contracts: ContractRepository = Depends(get_contract_repo),
        jobs: JobRepository = Depends(get_job_repo),
        store: BaseBlobStore = Depends(get_blob_store),
    ):
        if pdf is None:
            return JSONResponse(status_code=400, content={"error": "No file uploaded"})

        file_name = pdf.filename or "upload.pdf"
        path = upload_path(file_name)
        try:
            store.write(path, pdf.file.read(), pdf.content_type or "application/pdf")
            record = contracts.create(file_name)
            file_uri = store.uri(path)
            jobs.enqueue(record.id, file_uri)
        except Exception as exc:
            Log.exception(f"Failed to process upload {file_name}: {exc}")
            return JSONResponse(status_code=500, content={"error": "Failed to process file"})

        Log.info(f"Uploaded {file_name} to {file_uri}", contract_id=record.id)
        return UploadResponse(
            message="File uploaded successfully",
            contract_id=record.id,
            file_uri=file_uri,
        )

    @app.get("/contracts", response_model=list[ContractResponse])
    def list_contracts(contracts: ContractRepository = Depends(get_contract_repo)):
        return [ContractResponse.from_record(record) for record in contracts.list_all()]

    @app.get("/contracts/{contract_id}", response_model=ContractResponse)
    def get_contract(
        contract_id: str,
        contracts: ContractRepository = Depends(get_contract_repo),
    ):
        try:
            record = contracts.find_by_id(contract_id)
        except ContractNotFoundError:
            return JSONResponse(status_code=404, content={"error": "Contract not found"})
        return ContractResponse.from_record(record)

    return app


def serve() -> None:
    """Entry point for the HTTP API."""
    settings = Settings()
    Log.configure(settings.log_level)
    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    serve()
