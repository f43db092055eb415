import json
from pathlib import Path
from typing import Any

from domain_models.constants import DEFAULT_PARENT_FIELD


def read_file(filepath: str | Path) -> str:
    """
    Read content from a file (UTF-8).

    Args:
        filepath: Path to the file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the path is not a regular file.
    """
    path = Path(filepath)

    if not path.exists():
        msg = f"File not found: {filepath}"
        raise FileNotFoundError(msg)

    if not path.is_file():
        msg = f"Not a file: {filepath}"
        raise ValueError(msg)

    return path.read_text(encoding="utf-8")


def load_flat_store(
    filepath: str | Path, parent_field: str = DEFAULT_PARENT_FIELD
) -> Any:
    """
    Load a flat store from a JSON object of id -> record.

    JSON object keys are always strings, so numeric parent references are
    converted to strings to keep them comparable with the keys. Values that
    are not records are passed through untouched for the validator to reject.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON.
    """
    try:
        data = json.loads(read_file(filepath))
    except json.JSONDecodeError as e:
        msg = f"Failed to decode JSON from {filepath}: {e}"
        raise ValueError(msg) from e

    if not isinstance(data, dict):
        return data

    for record in data.values():
        if isinstance(record, dict) and type(record.get(parent_field)) is int:
            record[parent_field] = str(record[parent_field])
    return data
