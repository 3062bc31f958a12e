"""Document text extraction."""

from rehearsal.domains.documents.service import (
    DocumentExtractionService,
    ExtractedDocument,
    classify,
    compose_generation_context,
    extras_from_documents,
)

__all__ = [
    "DocumentExtractionService",
    "ExtractedDocument",
    "classify",
    "compose_generation_context",
    "extras_from_documents",
]
