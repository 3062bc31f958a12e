"""Tests for the in-memory session record store."""

from rehearsal.domains.practice.records import InMemorySessionRecordStore, SessionRecord


def _record(scenario_id: str, score: int = 100) -> SessionRecord:
    return SessionRecord(
        scenario_id=scenario_id,
        date="2026-01-01T00:00:00+00:00",
        score=score,
        duration=60,
        difficulty="medium",
    )


class TestInMemorySessionRecordStore:
    """Test InMemorySessionRecordStore."""

    def test_starts_empty(self):
        """A new store has no records."""
        assert InMemorySessionRecordStore().records() == []

    def test_save_appends_in_order(self):
        """Records are kept in save order."""
        store = InMemorySessionRecordStore()
        store.save(_record("party", 10))
        store.save(_record("classroom", 20))

        assert [r.score for r in store.records()] == [10, 20]

    def test_filter_by_scenario(self):
        """records(scenario_id) keeps only that scenario's sessions."""
        store = InMemorySessionRecordStore()
        store.save(_record("party"))
        store.save(_record("classroom"))
        store.save(_record("party"))

        assert len(store.records("party")) == 2
        assert store.records("presentation") == []

    def test_records_returns_copy(self):
        """Mutating the returned list does not touch the store."""
        store = InMemorySessionRecordStore()
        store.save(_record("party"))
        store.records().clear()

        assert len(store.records()) == 1

    def test_to_dict(self):
        """Records serialize with their persisted field names."""
        assert _record("party").to_dict() == {
            "scenario_id": "party",
            "date": "2026-01-01T00:00:00+00:00",
            "score": 100,
            "duration": 60,
            "difficulty": "medium",
        }
