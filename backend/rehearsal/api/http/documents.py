"""HTTP endpoint for document text extraction."""

from __future__ import annotations

from fastapi import APIRouter, Depends, File, UploadFile

from rehearsal.api.http.dependencies import get_document_service
from rehearsal.domains.documents.service import DocumentExtractionService
from rehearsal.exceptions import MissingFieldError
from rehearsal.schemas.documents import ExtractTextMeta, ExtractTextResponse

router = APIRouter(prefix="/api/v1", tags=["documents"])


@router.post("/extract-text", response_model=ExtractTextResponse)
async def extract_text(
    file: UploadFile | None = File(default=None),
    service: DocumentExtractionService = Depends(get_document_service),
) -> ExtractTextResponse:
    if file is None:
        raise MissingFieldError("file")

    data = await file.read()
    document = await service.extract(file.filename, file.content_type, data)
    return ExtractTextResponse(
        text=document.text,
        meta=ExtractTextMeta(
            pages=document.pages,
            chars=document.chars,
            file_type=document.file_type,
            processed_by=document.processed_by,
        ),
    )
