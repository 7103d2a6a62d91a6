"""Tests for CSV and JSON export."""

import json
from datetime import datetime
from pathlib import Path

import pytest

from temple_crowd.analytics.classifier import label_corpus
from temple_crowd.analytics.quantiles import global_quartiles
from temple_crowd.generation.corpus import Corpus
from temple_crowd.generation.observation import EXPORT_COLUMNS
from temple_crowd.utils.export import (
    corpus_to_csv,
    default_csv_name,
    export_csv,
    export_json_sample,
    preview_frame,
)


class TestCsvExport:
    """Tests for CSV export."""

    def test_header_quoted_in_order(self, sample_corpus: Corpus) -> None:
        """The header lists every export column, quoted, in order."""
        header = corpus_to_csv(sample_corpus).splitlines()[0]
        assert header == ",".join(f'"{c}"' for c in EXPORT_COLUMNS)

    def test_export_csv_writes_all_rows(
        self, sample_corpus: Corpus, tmp_path: Path
    ) -> None:
        """Every observation becomes one CSV row."""
        label_corpus(sample_corpus, global_quartiles(sample_corpus))
        path = export_csv(sample_corpus, str(tmp_path / "out" / "data.csv"))
        lines = path.read_text().splitlines()
        assert len(lines) == len(sample_corpus) + 1
        first = sample_corpus[0]
        assert f'"{first.location}"' in lines[1]
        assert f'"{first.density_label}"' in lines[1]

    def test_export_empty_corpus_rejected(self, tmp_path: Path) -> None:
        """Exporting before generation raises ValueError."""
        with pytest.raises(ValueError, match="not generated"):
            export_csv(Corpus(), str(tmp_path / "empty.csv"))

    def test_default_csv_name(self) -> None:
        """Default filenames carry a timestamp."""
        name = default_csv_name(datetime(2025, 1, 31, 18, 5, 0))
        assert name == "temple_crowd_dataset_2025-01-31-18-05-00.csv"


class TestJsonExport:
    """Tests for the JSON sample export."""

    def test_sample_limit(self, sample_corpus: Corpus, tmp_path: Path) -> None:
        """Only the first ``limit`` records are written."""
        path = export_json_sample(sample_corpus, str(tmp_path / "s.json"), limit=25)
        records = json.loads(path.read_text())
        assert len(records) == 25
        assert list(records[0]) == list(EXPORT_COLUMNS)
        assert records[0]["footfall"] == sample_corpus[0].footfall


class TestPreview:
    """Tests for the preview frame."""

    def test_preview_columns(self, sample_corpus: Corpus) -> None:
        """The preview uses short display columns and limits rows."""
        df = preview_frame(sample_corpus, rows=50)
        assert list(df.columns) == [
            "date", "hour", "location", "weather", "temp",
            "is_fest", "is_hol", "footfall", "density",
        ]
        assert len(df) == 50
