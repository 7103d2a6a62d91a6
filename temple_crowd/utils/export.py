"""CSV and JSON export of generated corpora.

Writes the full corpus as a quoted CSV in the fixed export column order,
a small JSON sample for quick inspection, and builds the preview frame
shown by the dashboard.
"""

import csv
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

import pandas as pd

from ..generation.corpus import Corpus

logger = logging.getLogger(__name__)

SAMPLE_JSON_NAME = "sample_temples.json"

PREVIEW_COLUMNS = {
    "date": "date",
    "hour": "hour",
    "location": "location",
    "weather": "weather",
    "temperature": "temp",
    "is_festival": "is_fest",
    "is_holiday": "is_hol",
    "footfall": "footfall",
    "density_label": "density",
}


def default_csv_name(now: Optional[datetime] = None) -> str:
    """Return a timestamped CSV filename such as
    ``temple_crowd_dataset_2025-01-31-18-05-00.csv``."""
    stamp = (now or datetime.now()).strftime("%Y-%m-%d-%H-%M-%S")
    return f"temple_crowd_dataset_{stamp}.csv"


def corpus_to_csv(corpus: Corpus) -> str:
    """Render a corpus as CSV text with every field quoted."""
    return corpus.to_dataframe().to_csv(index=False, quoting=csv.QUOTE_ALL)


def export_csv(corpus: Corpus, output_path: str) -> Path:
    """Write the full corpus to a CSV file.

    Args:
        corpus: Corpus to export; labels are exported when present.
        output_path: Destination file. Parent directories are created.

    Returns:
        Path of the written file.

    Raises:
        ValueError: If the corpus is empty.
    """
    if len(corpus) == 0:
        raise ValueError("Dataset not generated yet, nothing to export")

    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(corpus_to_csv(corpus))
    logger.info("Exported %d observations to %s", len(corpus), path)
    return path


def export_json_sample(corpus: Corpus, output_path: str, limit: int = 500) -> Path:
    """Write the first ``limit`` records to a JSON file.

    Args:
        corpus: Corpus to sample.
        output_path: Destination file. Parent directories are created.
        limit: Maximum number of records.

    Returns:
        Path of the written file.
    """
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    records = corpus.to_records(limit)
    with open(path, "w") as f:
        json.dump(records, f, indent=2)
    logger.info("Exported %d sample records to %s", len(records), path)
    return path


def preview_frame(corpus: Corpus, rows: int = 50) -> pd.DataFrame:
    """Return the first ``rows`` observations with short display columns."""
    df = corpus.to_dataframe(limit=rows)
    return df[list(PREVIEW_COLUMNS)].rename(columns=PREVIEW_COLUMNS)
