import logging

from eccang_client.audit import ApiLogEntry, ApiLogError, LoggingApiLogger


def test_to_record_uses_wire_keys():
    entry = ApiLogEntry(
        service="createOrder",
        request={"reference_no": "REF1"},
        response={"ask": "Success"},
        status="success",
        duration_ms=12,
    )

    assert entry.to_record() == {
        "service": "createOrder",
        "request": {"reference_no": "REF1"},
        "response": {"ask": "Success"},
        "status": "success",
        "durationMs": 12,
    }


def test_to_record_error_omits_response():
    entry = ApiLogEntry(
        service="getCountry",
        request={},
        status="error",
        duration_ms=3,
        error=ApiLogError(message="boom", code="NetworkError"),
    )

    record = entry.to_record()
    assert "response" not in record
    assert record["error"] == {"message": "boom", "code": "NetworkError"}


def test_logging_api_logger_writes_record(caplog):
    entry = ApiLogEntry(service="getCountry", request={}, status="success", duration_ms=1)

    with caplog.at_level(logging.INFO, logger="eccang_client.audit"):
        LoggingApiLogger().log(entry)

    assert len(caplog.records) == 1
    assert caplog.records[0].eccang_audit["service"] == "getCountry"
    assert "status=success" in caplog.records[0].getMessage()
