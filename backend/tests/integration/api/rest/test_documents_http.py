"""Integration tests for the document extraction HTTP endpoint."""

from fastapi.testclient import TestClient

from rehearsal.ai.providers.llm.stub import StubLLMProvider
from rehearsal.api.http.dependencies import get_document_service
from rehearsal.domains.documents.service import DocumentExtractionService
from rehearsal.main import app


class TestExtractTextHTTP:
    def test_text_file(self, client: TestClient) -> None:
        resp = client.post(
            "/api/v1/extract-text",
            files={"file": ("notes.txt", b"Hello audience", "text/plain")},
        )
        assert resp.status_code == 200
        body = resp.json()

        assert body["text"] == "Hello audience"
        assert body["meta"] == {
            "pages": 1,
            "chars": 14,
            "file_type": "text",
            "processed_by": None,
        }

    def test_pdf_goes_through_provider(self, client: TestClient) -> None:
        resp = client.post(
            "/api/v1/extract-text",
            files={"file": ("deck.pdf", b"%PDF", "application/pdf")},
        )
        assert resp.status_code == 200
        body = resp.json()

        assert body["text"] == "Stub extracted text from application/pdf (4 bytes)"
        assert body["meta"]["file_type"] == "pdf"
        assert body["meta"]["processed_by"]

    def test_missing_file_returns_400(self, client: TestClient) -> None:
        resp = client.post("/api/v1/extract-text", data={"note": "no file"})
        assert resp.status_code == 400
        error = resp.json()["error"]

        assert error["code"] == "MISSING_FIELD"
        assert error["details"]["field"] == "file"

    def test_oversize_file_returns_413(self, client: TestClient) -> None:
        app.dependency_overrides[get_document_service] = lambda: DocumentExtractionService(
            StubLLMProvider(), max_upload_bytes=4
        )

        resp = client.post(
            "/api/v1/extract-text",
            files={"file": ("notes.txt", b"too long", "text/plain")},
        )

        assert resp.status_code == 413
        assert resp.json()["error"]["code"] == "DOCUMENT_TOO_LARGE"
