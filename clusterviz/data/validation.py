"""
Validation of user-uploaded datasets.

An uploaded dataset is a JSON array of ``{x, y, label}`` objects. It only
replaces the synthetic data after passing :func:`is_valid`.
"""

from __future__ import annotations

import json
import math
import numbers
from pathlib import Path
from typing import Any, Dict, List, Union

from jsonschema import Draft7Validator, validators

from clusterviz.data.examples import Example

MAX_UPLOAD_ITEMS = 1000

SCHEMA: Dict[str, Any] = {
    "type": "array",
    "maxItems": MAX_UPLOAD_ITEMS,
    "items": {
        "type": "object",
        "required": ["x", "y", "label"],
        "properties": {
            "x": {"type": "number", "minimum": -6, "maximum": 6},
            "y": {"type": "number", "minimum": -6, "maximum": 6},
            "label": {"enum": [-1, 1]},
        },
    },
}


def _is_finite_number(checker: Any, instance: Any) -> bool:
    # NaN compares false against minimum and maximum alike.
    if isinstance(instance, bool) or not isinstance(instance, numbers.Real):
        return False
    return math.isfinite(instance)


UploadValidator = validators.extend(
    Draft7Validator,
    type_checker=Draft7Validator.TYPE_CHECKER.redefine("number", _is_finite_number),
)

_VALIDATOR = UploadValidator(SCHEMA)


class InvalidDatasetError(ValueError):
    """Raised when an uploaded dataset cannot be accepted."""


def _reject_constant(name: str) -> Any:
    raise InvalidDatasetError(f"Non-finite number {name} is not allowed in an uploaded dataset.")


def is_valid(data: Any) -> bool:
    """
    Check if the JSON data is in valid format based on :data:`SCHEMA`.

    Args:
        data (Any): Decoded JSON value.

    Returns:
        bool: True if the data is valid.
    """
    return _VALIDATOR.is_valid(data)


def load_uploaded_dataset(path: Union[str, Path]) -> List[Example]:
    """
    Read, validate and convert an uploaded JSON dataset.

    Args:
        path (Union[str, Path]): Path of the uploaded file.

    Returns:
        List[Example]: Examples built from the uploaded records.

    Raises:
        InvalidDatasetError: If the file is not JSON, contains ``NaN`` or
            ``Infinity``, or does not match :data:`SCHEMA`.
    """
    path = Path(path)
    if path.suffix.lower() != ".json":
        raise InvalidDatasetError(f"The uploaded file is not a JSON file: {path.name}")

    try:
        data = json.loads(path.read_text(encoding="utf-8"), parse_constant=_reject_constant)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise InvalidDatasetError(f"The uploaded file could not be read: {path.name}") from exc

    if not is_valid(data):
        raise InvalidDatasetError(f"The uploaded file does not have a valid format: {path.name}")

    return [Example(float(d["x"]), float(d["y"]), int(d["label"])) for d in data]
