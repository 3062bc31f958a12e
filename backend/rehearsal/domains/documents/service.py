"""Text extraction from uploaded documents.

Plain-text uploads are decoded directly. PDFs, slide decks, images and
anything else are handed to the generative provider with a prompt suited to
the file type.
"""

import logging
import math
import re
import time
from collections.abc import Iterable
from dataclasses import dataclass

from rehearsal.ai.providers.base import LLMProvider
from rehearsal.exceptions import (
    DocumentExtractionError,
    DocumentTooLargeError,
    ProviderError,
    UnsupportedDocumentError,
)

logger = logging.getLogger("documents")

PDF_MIME = "application/pdf"
PPTX_MIME = "application/vnd.openxmlformats-officedocument.presentationml.presentation"
DEFAULT_MIME = "application/octet-stream"

CHARS_PER_PAGE = 3000
DOCUMENT_EXCERPT_CHARS = 2000

_PDF_RE = re.compile(r"\.pdf$", re.IGNORECASE)
_PPTX_RE = re.compile(r"\.pptx$", re.IGNORECASE)
_IMAGE_RE = re.compile(r"\.(jpg|jpeg|png|gif|webp)$", re.IGNORECASE)
_TEXT_RE = re.compile(r"\.(txt|md|csv)$", re.IGNORECASE)
_PNG_RE = re.compile(r"\.png$", re.IGNORECASE)
_JPEG_RE = re.compile(r"\.jpe?g$", re.IGNORECASE)

DOCUMENT_PROMPT = (
    "Please extract and return ALL the text content from this document.\n"
    "Include all slides, pages, headers, bullet points, and any text visible in the document.\n"
    "If there are images with text, describe them briefly.\n"
    "Format the output as plain text, maintaining the document's structure with clear "
    "separations between sections/slides.\n"
    "Do not summarize - extract everything."
)
IMAGE_PROMPT = (
    "Please extract any text visible in this image.\n"
    "If there is no text, describe what you see in the image.\n"
    "If there are charts or diagrams, describe their content."
)
GENERIC_PROMPT = "Please extract and return all text content from this file."

PROMPTS = {
    "pdf": DOCUMENT_PROMPT,
    "pptx": DOCUMENT_PROMPT,
    "image": IMAGE_PROMPT,
    "other": GENERIC_PROMPT,
}


@dataclass(frozen=True)
class ExtractedDocument:
    text: str
    pages: int
    chars: int
    file_type: str
    processed_by: str | None = None


def classify(filename: str | None, content_type: str | None) -> str:
    """File type from the declared content type or, failing that, the extension.

    A text content type or extension wins over everything else.
    """
    name = filename or ""
    mime = content_type or ""
    if mime.startswith("text/") or _TEXT_RE.search(name):
        return "text"
    if mime == PDF_MIME or _PDF_RE.search(name):
        return "pdf"
    if mime == PPTX_MIME or _PPTX_RE.search(name):
        return "pptx"
    if mime.startswith("image/") or _IMAGE_RE.search(name):
        return "image"
    return "other"


def infer_mime_type(filename: str | None, content_type: str | None, file_type: str) -> str:
    if content_type:
        return content_type
    name = filename or ""
    if file_type == "pdf":
        return PDF_MIME
    if file_type == "pptx":
        return PPTX_MIME
    if _PNG_RE.search(name):
        return "image/png"
    if _JPEG_RE.search(name):
        return "image/jpeg"
    return DEFAULT_MIME


def estimate_pages(text: str, file_type: str) -> int:
    if file_type in ("pdf", "pptx"):
        return max(1, math.ceil(len(text) / CHARS_PER_PAGE))
    return 1


def document_excerpt(text: str, limit: int = DOCUMENT_EXCERPT_CHARS) -> str:
    return text[:limit] + ("..." if len(text) > limit else "")


def compose_generation_context(
    base_prompt: str | None,
    extra_details: str | None = None,
    document_text: str | None = None,
) -> str:
    """Context handed to talking-point and flow generation.

    The scenario prompt comes first, then the user's own notes, then an
    excerpt of the uploaded document.
    """
    context = base_prompt or ""
    details = (extra_details or "").strip()
    if details:
        context += f"\n\nExtra details from user:\n{details}"
    if document_text:
        context += f"\n\nDocument content:\n{document_excerpt(document_text)}"
    return context


def extras_from_documents(documents: Iterable[ExtractedDocument], user_text: str | None = None) -> str:
    """Merge the user's notes and extracted document text into composer extras."""
    parts = []
    if user_text and user_text.strip():
        parts.append(user_text.strip())
    parts.extend(doc.text.strip() for doc in documents if doc.text and doc.text.strip())
    return "\n\n".join(parts)


class DocumentExtractionService:
    """Pulls plain text out of uploaded files.

    Args:
        llm_provider: Provider able to read binary documents
        model_id: Model override for extraction
        max_upload_bytes: Largest accepted upload
    """

    def __init__(
        self,
        llm_provider: LLMProvider,
        model_id: str | None = None,
        max_upload_bytes: int = 20 * 1024 * 1024,
    ):
        self.llm = llm_provider
        self.model_id = model_id
        self.max_upload_bytes = max_upload_bytes

    async def extract(
        self,
        filename: str | None,
        content_type: str | None,
        data: bytes,
    ) -> ExtractedDocument:
        """Extract text from one upload.

        Raises:
            DocumentTooLargeError: If the upload exceeds max_upload_bytes
            UnsupportedDocumentError: If the provider cannot read binary files
            DocumentExtractionError: If the provider call fails
        """
        if len(data) > self.max_upload_bytes:
            raise DocumentTooLargeError(len(data), self.max_upload_bytes)

        filename = filename or "upload.file"
        file_type = classify(filename, content_type)

        if file_type == "text":
            text = data.decode("utf-8", errors="replace")
            return self._done(ExtractedDocument(text=text, pages=1, chars=len(text), file_type="text"))

        mime_type = infer_mime_type(filename, content_type, file_type)
        start_time = time.time()
        try:
            response = await self.llm.extract_document_text(
                data,
                mime_type,
                PROMPTS[file_type],
                model=self.model_id,
            )
        except NotImplementedError as exc:
            raise UnsupportedDocumentError(
                message=f"{file_type} documents cannot be read by provider {self.llm.name}",
                details={"file_type": file_type, "mime_type": mime_type},
            ) from exc
        except ProviderError as exc:
            raise self._classify_failure(exc, file_type, data) from exc

        text = response.content
        logger.debug(
            "Provider extraction returned",
            extra={
                "service": "documents",
                "provider": self.llm.name,
                "file_type": file_type,
                "latency_ms": int((time.time() - start_time) * 1000),
            },
        )
        return self._done(
            ExtractedDocument(
                text=text,
                pages=estimate_pages(text, file_type),
                chars=len(text),
                file_type=file_type,
                processed_by=response.model,
            )
        )

    def _classify_failure(self, exc: ProviderError, file_type: str, data: bytes) -> Exception:
        message = exc.message or ""
        logger.error(
            "Document extraction failed",
            extra={
                "service": "documents",
                "provider": self.llm.name,
                "file_type": file_type,
                "error": message,
            },
        )
        if "File too large" in message:
            return DocumentTooLargeError(len(data), self.max_upload_bytes)
        if "API key" in message:
            return DocumentExtractionError(
                self.llm.name,
                "Invalid API key for document extraction",
                details={"reason": "invalid_api_key"},
                retryable=False,
            )
        if "quota" in message:
            return DocumentExtractionError(
                self.llm.name,
                "Provider quota exceeded. Please try again later.",
                details={"reason": "quota_exceeded"},
            )
        return DocumentExtractionError(self.llm.name, f"Failed to process document: {message}")

    def _done(self, document: ExtractedDocument) -> ExtractedDocument:
        logger.info(
            "Document text extracted",
            extra={
                "service": "documents",
                "file_type": document.file_type,
                "metadata": {"chars": document.chars, "pages": document.pages},
            },
        )
        return document
