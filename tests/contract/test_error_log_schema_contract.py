from __future__ import annotations

import json

import jsonschema
import pytest

from receiptgen.logging.error_log import SCHEMA_PATH
from receiptgen.models.error_record import ErrorRecord
from receiptgen.models.parse_result import ErrorKind
from receiptgen.models.raw_row import FieldError, RawRow

"""Error log JSON schema contract."""


@pytest.fixture(scope="module")
def schema() -> dict:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


def test_valid_example(schema):
    record = {
        "timestamp": "2025-09-26T10:12:33Z",
        "file": "payments.xlsx",
        "row": 2,
        "field": "amount",
        "error_type": "INVALID",
        "message": "amount invalid",
    }
    jsonschema.validate(record, schema)


def test_rejects_extra_key(schema):
    record = {
        "timestamp": "2025-09-26T10:12:33Z",
        "file": "payments.xlsx",
        "row": 2,
        "field": "amount",
        "error_type": "INVALID",
        "message": "amount invalid",
        "extra": "not allowed",
    }
    with pytest.raises(jsonschema.exceptions.ValidationError):
        jsonschema.validate(record, schema)


@pytest.mark.parametrize("kind", list(ErrorKind))
def test_generated_records_conform(schema, kind):
    row = RawRow(row_number=5, data={})
    rec = ErrorRecord.from_field_error("f.xlsx", row, FieldError("date", "date invalid", kind=kind))
    jsonschema.validate(json.loads(rec.to_json_line()), schema)


def test_file_level_record_conforms(schema):
    rec = ErrorRecord.file_level("f.xlsx", "READ_ERROR", "cannot read")
    jsonschema.validate(json.loads(rec.to_json_line()), schema)


def test_lowercase_error_type_rejected(schema):
    data = json.loads(ErrorRecord.create("f.xlsx", 2, "date", "invalid", "x").to_json_line())
    with pytest.raises(jsonschema.exceptions.ValidationError):
        jsonschema.validate(data, schema)
