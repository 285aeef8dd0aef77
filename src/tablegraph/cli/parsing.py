"""Input parsing utilities for CLI commands."""

import json
from pathlib import Path
from typing import Any

from tablegraph.core.types import ModelSpec


def read_json_file(path: str) -> dict[str, Any]:
    """Read single JSON object from file.

    Args:
        path: Path to JSON file

    Returns:
        Parsed JSON object

    Raises:
        FileNotFoundError: If file doesn't exist
        json.JSONDecodeError: If file contains invalid JSON
    """
    file_path = Path(path)
    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    with file_path.open("r") as f:
        return json.load(f)


def read_model_file(path: str) -> ModelSpec:
    """Read a models file.

    The file holds {"entities": [...], "seeds": [...]}; a bare list is read
    as the entity list.

    Raises:
        FileNotFoundError: If file doesn't exist
        pydantic.ValidationError: If the entity definitions are malformed
    """
    data: Any = read_json_file(path)
    if isinstance(data, list):
        data = {"entities": data}
    return ModelSpec.model_validate(data)
