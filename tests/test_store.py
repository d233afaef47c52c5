"""
Tests for the analysis history store
"""

import sqlite3
import threading
from datetime import datetime, timedelta, timezone

import pytest

from document_geometry.models import DocumentAnalysis
from history import AnalysisStore, StoreError


BASE_TIME = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


def make_analysis(name="page.jpg", minutes=0):
    return DocumentAnalysis(
        paper_size="A4 Portrait",
        font_size_pt=11.5,
        top_margin=1.0,
        bottom_margin=1.2,
        left_margin=0.8,
        right_margin=0.75,
        source_image_path=name,
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


class TestAnalysisStore:

    @pytest.fixture
    def store(self):
        store = AnalysisStore(":memory:")
        yield store
        store.close()

    def test_create_and_get(self, store):
        record_id = store.create(make_analysis())
        stored = store.get(record_id)

        assert stored == make_analysis().with_id(record_id)

    def test_ids_are_distinct(self, store):
        first = store.create(make_analysis())
        second = store.create(make_analysis())
        assert first != second

    def test_get_missing(self, store):
        assert store.get(42) is None

    def test_list_newest_first(self, store):
        store.create(make_analysis("old.jpg", minutes=0))
        store.create(make_analysis("new.jpg", minutes=5))
        store.create(make_analysis("mid.jpg", minutes=2))

        names = [item.source_image_path for item in store.list_all()]
        assert names == ["new.jpg", "mid.jpg", "old.jpg"]

    def test_list_empty(self, store):
        assert store.list_all() == []

    def test_delete(self, store):
        record_id = store.create(make_analysis())
        assert store.delete(record_id)
        assert store.get(record_id) is None
        assert not store.delete(record_id)

    def test_clear(self, store):
        store.create(make_analysis())
        store.create(make_analysis())
        assert store.clear() == 2
        assert store.list_all() == []

    def test_shared_memory_store_across_threads(self, store):
        ids = []

        def worker(index):
            for i in range(20):
                ids.append(store.create(make_analysis(f"page-{index}-{i}.jpg", minutes=i)))
                store.list_all()

        threads = [threading.Thread(target=worker, args=(n,)) for n in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(set(ids)) == 80
        assert len(store.list_all()) == 80
        assert all(isinstance(item.id, int) for item in store.list_all())

    def test_file_database_persists(self, tmp_path):
        path = tmp_path / "nested" / "documents.db"
        record_id = AnalysisStore(str(path)).create(make_analysis())

        reopened = AnalysisStore(str(path))
        assert reopened.get(record_id).source_image_path == "page.jpg"

    def test_database_error_wrapped(self, tmp_path):
        path = str(tmp_path / "documents.db")
        store = AnalysisStore(path)
        with sqlite3.connect(path) as conn:
            conn.execute("DROP TABLE documents")

        with pytest.raises(StoreError):
            store.list_all()


class TestDocumentAnalysisRecord:

    def test_to_dict(self):
        data = make_analysis().with_id(7).to_dict()
        assert data == {
            "id": 7,
            "imagePath": "page.jpg",
            "paperSize": "A4 Portrait",
            "fontSize": 11.5,
            "topMargin": 1.0,
            "bottomMargin": 1.2,
            "leftMargin": 0.8,
            "rightMargin": 0.75,
            "createdAt": int(BASE_TIME.timestamp() * 1000),
        }

    def test_from_dict_round_trip(self):
        original = make_analysis().with_id(3)
        assert DocumentAnalysis.from_dict(original.to_dict()) == original
