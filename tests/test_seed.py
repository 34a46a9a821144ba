import json

import pytest

from sedekahje.models import Institution
from sedekahje.seed import load_institutions, main, seed_institutions
from sedekahje.slug import slugify


class FakeCollection:
    def __init__(self, documents=None):
        self.documents = list(documents or [])
        self.deleted_with = None

    def delete_many(self, query):
        self.deleted_with = query
        self.documents.clear()

    def insert_one(self, document):
        self.documents.append(dict(document))


RECORDS = [
    {
        "oldId": 7,
        "name": "Masjid Al-Test",
        "category": "mosque",
        "state": "Selangor",
        "city": "Shah Alam",
        "qrContent": "test-qr-content",
        "supportedPayment": ["fpx"],
        "coords": [3.0731, 101.5183],
    },
    {
        "name": "Surau Taman Contoh",
        "category": "surau",
        "state": "Johor",
        "city": "Muar",
        "qrContent": "other-qr",
        "supportedPayment": ["duitnow"],
        "coords": [2.05, 102.56],
    },
]


@pytest.fixture
def data_file(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps(RECORDS))
    return path


def test_load_institutions(data_file):
    assert load_institutions(data_file) == [Institution.from_dict(r) for r in RECORDS]


def test_load_null_is_empty(tmp_path):
    path = tmp_path / "null.json"
    path.write_text("null")
    assert load_institutions(path) == []


@pytest.mark.parametrize("content", ['{"name": "x"}', "not json", '[{"coords": "x"}]'])
def test_load_rejects_bad_data(tmp_path, content):
    path = tmp_path / "bad.json"
    path.write_text(content)
    with pytest.raises(ValueError):
        load_institutions(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_institutions(tmp_path / "absent.json")


def test_seed_replaces_and_slugifies(data_file):
    collection = FakeCollection([{"name": "stale"}])
    institutions = load_institutions(data_file)
    seeded = seed_institutions(collection, institutions)
    assert collection.deleted_with == {}
    assert [d["name"] for d in collection.documents] == [r["name"] for r in RECORDS]
    assert all(d["slug"] == slugify(d["name"]) for d in collection.documents)
    assert collection.documents == [i.to_dict() for i in seeded]


def test_seed_leaves_input_untouched(data_file):
    institutions = load_institutions(data_file)
    seed_institutions(FakeCollection(), institutions)
    assert all(i.slug == "" for i in institutions)


def test_seed_empty_still_clears():
    collection = FakeCollection([{"name": "stale"}])
    assert seed_institutions(collection, []) == []
    assert collection.documents == []


def test_main_missing_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("MONGO_URI", "mongodb://localhost:1")
    assert main([str(tmp_path / "absent.json")]) == 1


def test_main_without_uri(tmp_path, monkeypatch, data_file):
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MONGO_URI", raising=False)
    assert main([str(data_file)]) == 1