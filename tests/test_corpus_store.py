"""Tests for the corpus artifact store."""

import json

import pytest
from pydantic import ValidationError
from src.exceptions import ArtifactIOError, MalformedCorpusError
from src.schemas.record import Record
from src.services.corpus.store import CorpusStore


class TestCorpusStore:

    def test_round_trip_preserves_records_and_order(self, tmp_path, sample_records):
        store = CorpusStore(tmp_path / "dataset.json")

        store.write(sample_records)

        assert store.read() == sample_records

    def test_artifact_is_pretty_printed_json_array(self, tmp_path, sample_records):
        path = tmp_path / "dataset.json"
        CorpusStore(path).write(sample_records[:1])

        contents = path.read_text(encoding="utf-8")

        assert contents.startswith("[\n  {\n")
        assert json.loads(contents) == [
            {"name": "Luke Skywalker", "portrayal": "Mark Hamill", "description": "A farm boy turned Jedi."}
        ]

    def test_non_ascii_text_is_written_verbatim(self, tmp_path, sample_records):
        path = tmp_path / "dataset.json"
        CorpusStore(path).write(sample_records)

        assert "Padmé Amidala" in path.read_text(encoding="utf-8")

    def test_write_replaces_previous_corpus(self, tmp_path, sample_records):
        store = CorpusStore(tmp_path / "dataset.json")
        store.write(sample_records)

        store.write(sample_records[1:2])

        assert store.read() == [sample_records[1]]

    def test_empty_corpus(self, tmp_path):
        store = CorpusStore(tmp_path / "dataset.json")
        store.write([])

        assert store.read() == []

    def test_missing_file_raises_artifact_io_error(self, tmp_path):
        store = CorpusStore(tmp_path / "missing.json")

        assert not store.exists()
        with pytest.raises(ArtifactIOError):
            store.read()

    def test_unwritable_location_raises_artifact_io_error(self, tmp_path, sample_records):
        store = CorpusStore(tmp_path / "no-such-dir" / "dataset.json")

        with pytest.raises(ArtifactIOError):
            store.write(sample_records)

    @pytest.mark.parametrize(
        "contents",
        [
            "not json at all",
            '{"name": "Yoda"}',
            '[{"name": "Yoda", "portrayal": "Frank Oz"}]',
            '[{"name": 1, "portrayal": "Frank Oz", "description": "Jedi"}]',
            "[1, 2, 3]",
        ],
    )
    def test_malformed_artifact_raises_malformed_corpus_error(self, tmp_path, contents):
        path = tmp_path / "dataset.json"
        path.write_text(contents, encoding="utf-8")

        with pytest.raises(MalformedCorpusError):
            CorpusStore(path).read()

    def test_malformed_corpus_is_not_an_io_error(self, tmp_path):
        path = tmp_path / "dataset.json"
        path.write_text("{}", encoding="utf-8")

        with pytest.raises(MalformedCorpusError) as exc_info:
            CorpusStore(path).read()
        assert not isinstance(exc_info.value, ArtifactIOError)

    def test_records_are_immutable(self, tmp_path, sample_records):
        store = CorpusStore(tmp_path / "dataset.json")
        store.write(sample_records)
        record = store.read()[0]

        with pytest.raises(ValidationError):
            record.name = "Darth Vader"
        assert isinstance(record, Record)
