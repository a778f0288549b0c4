import logging

from core.exceptions import UpsertError
from core.logging import LOG_FORMAT, ErrorContextFormatter


def make_record(**extra):
    record = logging.LogRecord("ingestion", logging.ERROR, __file__, 1, "Dropping batch", None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_plain_record_is_unchanged():
    formatter = ErrorContextFormatter(LOG_FORMAT)
    assert formatter.format(make_record()).endswith("| ingestion | Dropping batch")


def test_error_context_is_appended():
    error = UpsertError("Batch upsert failed", context={"table_name": "games", "batch_size": 3000})
    line = ErrorContextFormatter(LOG_FORMAT).format(make_record(error_context=error.to_dict()))

    assert line.endswith("| UpsertError table_name=games batch_size=3000")
    assert "error_timestamp" not in line
