# validator.py

import json
from pathlib import Path
from typing import Optional, Tuple

from jsonschema import Draft202012Validator
from loguru import logger

SCHEMA_DIR = Path(__file__).resolve().parent.parent / "schemas"


class SchemaValidator:
    def __init__(self, schema_dir: Path = SCHEMA_DIR):
        self.schema_dir = Path(schema_dir)
        self.schema_store = self._load_schemas()

    def _load_schemas(self) -> dict:
        """Load every .json and key the store by both filename and $id (if present)."""
        store = {}
        for schema_file in self.schema_dir.glob("*.json"):
            text = schema_file.read_text(encoding="utf-8")
            try:
                schema = json.loads(text)
            except json.JSONDecodeError as e:
                logger.error("JSON error in {}: {}", schema_file.name, e)
                raise
            Draft202012Validator.check_schema(schema)
            # always register under the filename
            store[schema_file.name] = schema
            # also register under its $id if it has one
            sid = schema.get("$id")
            if sid:
                store[sid] = schema
        return store

    def validate(self, data, schema_name: str = "document.json") -> Tuple[bool, Optional[str]]:
        """
        Validate `data` against a stored schema.
        Returns (True, None) on success, or (False, "Error message") on failure.
        """
        schema = self.schema_store.get(schema_name)
        if not schema:
            raise FileNotFoundError(f"Schema '{schema_name}' not found in {self.schema_dir!r}")

        errors = sorted(Draft202012Validator(schema).iter_errors(data), key=lambda e: list(e.path))
        if not errors:
            return True, None
        e = errors[0]
        # human-friendly path like "signers->0->signature_size_mm"
        path = "->".join(map(str, e.path)) or "(root)"
        return False, f"Validation Error in {path}: {e.message}"


def load_document(path: Path, validator: Optional[SchemaValidator] = None) -> Tuple[Optional[dict], Optional[str]]:
    """Read and validate a document JSON file. Returns (data, None) or (None, error)."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        return None, f"Cannot read document {path}: {e}"
    ok, err = (validator or SchemaValidator()).validate(data)
    if not ok:
        return None, err
    return data, None
