"""Schemas for document text extraction."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

FileType = Literal["text", "pdf", "pptx", "image", "other"]


class ExtractTextMeta(BaseModel):
    pages: int
    chars: int
    file_type: FileType
    processed_by: str | None = None


class ExtractTextResponse(BaseModel):
    """Text pulled out of an uploaded document."""

    text: str
    meta: ExtractTextMeta
