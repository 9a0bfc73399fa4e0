"""Audit records emitted once per ECCANG call."""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Literal, Optional, Protocol, Union

from pydantic import BaseModel, Field


class ApiLogError(BaseModel):
    message: str
    code: Optional[str] = None


class ApiLogEntry(BaseModel):
    """One call's audit record; request and response are already redacted."""

    service: str
    request: Any = None
    response: Any = None
    status: Literal["success", "error"]
    duration_ms: int = Field(serialization_alias="durationMs")
    error: Optional[ApiLogError] = None

    def to_record(self) -> dict[str, Any]:
        record: dict[str, Any] = {
            "service": self.service,
            "request": self.request,
            "status": self.status,
            "durationMs": self.duration_ms,
        }
        if self.response is not None:
            record["response"] = self.response
        if self.error is not None:
            record["error"] = self.error.model_dump(exclude_none=True)
        return record


class ApiLogger(Protocol):
    """Sink for audit records. ``log`` may be sync or async."""

    def log(self, entry: ApiLogEntry) -> Union[None, Awaitable[None]]: ...


class LoggingApiLogger:
    """Writes audit records to a stdlib logger at INFO."""

    def __init__(self, logger: logging.Logger | str = "eccang_client.audit") -> None:
        self.logger = logging.getLogger(logger) if isinstance(logger, str) else logger

    def log(self, entry: ApiLogEntry) -> None:
        record = entry.to_record()
        self.logger.info(
            "eccang_call service=%s status=%s duration_ms=%s",
            entry.service,
            entry.status,
            entry.duration_ms,
            extra={"eccang_audit": record},
        )
