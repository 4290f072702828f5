from __future__ import annotations

import base64
import binascii
import io
import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

import pandas as pd

from dq_dashboard.core.dataset import Dataset, DatasetKind
from dq_dashboard.core.exceptions import IngestionError
from dq_dashboard.services.dataset_store import SOURCE_FILE, SOURCE_UPLOAD, DatasetStore

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 50_000_000


def _cell(value: Any, numeric: bool) -> Any:
    # Only empty cells are missing; "NA" or "null" in a text column is a value
    if pd.isna(value) or (not numeric and value == ""):
        return None
    if numeric:
        value = float(value)
        return int(value) if value.is_integer() else value
    return value


def parse_csv(kind: DatasetKind | str, text: str) -> List[Dict[str, Any]]:
    """
    Parse CSV text into rows using the declared schema of `kind`.

    - the header row gives the field names
    - blank lines are skipped
    - declared numeric fields are coerced to numbers (unparseable -> None)
    - every other column stays a string; empty cells become None

    Raises:
        IngestionError: if the text has no header or cannot be parsed
    """
    kind = DatasetKind.parse(kind)

    try:
        frame = pd.read_csv(io.StringIO(text), dtype=str, keep_default_na=False, skip_blank_lines=True)
    except pd.errors.EmptyDataError as e:
        raise IngestionError(f"No data found for {kind.value}") from e
    except pd.errors.ParserError as e:
        raise IngestionError(f"Malformed CSV for {kind.value}: {e}") from e

    frame.columns = [str(c).strip() for c in frame.columns]

    numeric = [c for c in frame.columns if kind.is_numeric(c)]
    for col in numeric:
        frame[col] = pd.to_numeric(frame[col].str.strip(), errors="coerce")

    undeclared = sorted(set(frame.columns) - set(kind.schema.fields))
    if undeclared:
        logger.info(
            "Keeping undeclared columns as text",
            extra={"kind": kind.value, "columns": undeclared},
        )

    numeric_set = set(numeric)
    return [
        {col: _cell(value, col in numeric_set) for col, value in record.items()}
        for record in frame.to_dict("records")
    ]


def read_file(kind: DatasetKind | str, path: Path) -> List[Dict[str, Any]]:
    """
    Read and parse one source file.

    Raises:
        IngestionError: if the file is missing, unreadable or malformed
    """
    path = Path(path)
    if not path.is_file():
        raise IngestionError(f"CSV file not found at {path}.")
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise IngestionError(f"Could not read {path}: {e}") from e
    return parse_csv(kind, text)


def decode_upload(contents: str) -> str:
    """
    Decode a dcc.Upload payload ("data:<mime>;base64,<data>") to text.

    Raises:
        IngestionError: if the payload is corrupt, too large or not UTF-8
    """
    try:
        _content_type, content_string = contents.split(",", 1)
        decoded = base64.b64decode(content_string, validate=True)
    except (ValueError, binascii.Error) as e:
        raise IngestionError("The uploaded file appears to be corrupted.") from e

    if len(decoded) > MAX_UPLOAD_BYTES:
        raise IngestionError(f"Upload exceeds the {MAX_UPLOAD_BYTES // 1_000_000}MB limit.")

    try:
        return decoded.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise IngestionError("The uploaded file is not UTF-8 text.") from e


# -----------------------------------------------------------------------------
# Store-facing operations
# -----------------------------------------------------------------------------
def load_from_directory(
    store: DatasetStore,
    data_root: Path,
    files: Optional[Mapping[DatasetKind, str]] = None,
) -> List[DatasetKind]:
    """
    Reload every kind from its file under `data_root`.

    Each kind is handled on its own: a missing or broken file is logged and
    the previously loaded dataset for that kind stays in place.
    last_updated is stamped even when nothing could be loaded.
    Returns the kinds that were replaced.
    """
    files = files or {}
    replaced: List[DatasetKind] = []

    for kind in DatasetKind:
        path = Path(data_root) / files.get(kind, kind.schema.default_file)
        try:
            rows = read_file(kind, path)
        except IngestionError as e:
            logger.warning(
                "Keeping existing data, source could not be loaded",
                extra={"kind": kind.value, "path": str(path), "error": str(e)},
            )
            continue

        store.replace(kind, rows, source=SOURCE_FILE)
        replaced.append(kind)

    store.touch()
    return replaced


def load_from_upload(
    store: DatasetStore,
    kind: DatasetKind | str,
    contents: str,
    filename: str,
) -> Dataset:
    """
    Replace one kind from an uploaded CSV.

    Raises:
        IngestionError: unsupported file type or unreadable content; the
        store is left untouched
    """
    kind = DatasetKind.parse(kind)
    if not filename or not filename.lower().endswith(".csv"):
        raise IngestionError(f"Unsupported file type for '{filename}'. Please upload a .csv file.")

    rows = parse_csv(kind, decode_upload(contents))
    logger.info("CSV uploaded", extra={"kind": kind.value, "upload_filename": filename, "n_rows": len(rows)})
    return store.replace(kind, rows, source=SOURCE_UPLOAD)
