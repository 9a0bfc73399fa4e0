"""Async client for the ECCANG logistics web service."""

from __future__ import annotations

import inspect
import json
import logging
import time
from collections.abc import Mapping, Sequence
from typing import Any, Callable, Dict, List, Optional, Union

import httpx
from pydantic import SecretStr

from .audit import ApiLogEntry, ApiLogError, ApiLogger, LoggingApiLogger
from .config import Settings
from .envelope import build_envelope, extract_response
from .errors import NetworkError
from .models import (
    AddressValidateRequest,
    CargoTrackRequest,
    CreateOrderRequest,
    CreateOrderVolume,
    EccangResult,
    FeeTrailRequest,
    FieldRuleRequest,
    GetLabelUrlRequest,
    GetTrackNumberRequest,
    LabelByTemplateRequest,
    PickupRequest,
    ReceivingExpenseRequest,
)
from .normalize import normalize_payload
from .redaction import redact_sensitive

logger = logging.getLogger(__name__)

Record = Dict[str, Any]
Records = List[Dict[str, Any]]
GenericParams = Mapping[str, Any]

SOAP_HEADERS = {"Content-Type": "text/xml; charset=UTF-8"}


def _secret_value(value: SecretStr | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, SecretStr):
        return value.get_secret_value()
    return str(value)


def _elapsed_ms(start: float | None) -> int:
    if start is None:
        return 0
    return int(round((time.perf_counter() - start) * 1000))


def _audit_request(params: Any) -> Any:
    if isinstance(params, str):
        try:
            params = json.loads(params)
        except ValueError:
            return params
    return redact_sensitive(params)


class EccangClient:
    """Client for the ECCANG ``callService`` SOAP endpoint.

    Configuration is fixed at construction. Calls share no mutable state, so
    one instance can serve concurrent tasks.
    """

    def __init__(
        self,
        settings: Settings,
        http: httpx.AsyncClient | None = None,
        audit_logger: ApiLogger | None = None,
    ) -> None:
        self.settings = settings
        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            headers=SOAP_HEADERS,
            timeout=httpx.Timeout(settings.timeout_seconds),
        )
        if audit_logger is None and settings.audit_log_enabled:
            audit_logger = LoggingApiLogger(settings.audit_logger_name)
        self.audit_logger = audit_logger

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "EccangClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def call(self, service: str, params: Any = None) -> EccangResult[Any]:
        """Run one service call: build, send, decode, normalize, audit.

        Failures are audited and re-raised unchanged. A decoded
        ``ask: "Failure"`` is returned, not raised.
        """
        start: float | None = None
        try:
            envelope = build_envelope(
                params,
                service,
                app_token=_secret_value(self.settings.app_token),
                app_key=_secret_value(self.settings.app_key),
            )
            start = time.perf_counter()
            text = await self._post(service, envelope)
            payload = normalize_payload(service, extract_response(text))
            duration_ms = _elapsed_ms(start)
        except Exception as exc:
            duration_ms = _elapsed_ms(start)
            logger.warning("eccang_call_failed service=%s error=%s", service, exc)
            await self._audit(
                service,
                lambda: ApiLogEntry(
                    service=service,
                    request=_audit_request(params),
                    status="error",
                    duration_ms=duration_ms,
                    error=ApiLogError(
                        message=str(exc),
                        code=getattr(exc, "code", type(exc).__name__),
                    ),
                ),
            )
            raise

        await self._audit(
            service,
            lambda: ApiLogEntry(
                service=service,
                request=_audit_request(params),
                response=redact_sensitive(payload),
                status="success",
                duration_ms=duration_ms,
            ),
        )
        return EccangResult(payload)

    async def _post(self, service: str, envelope: str) -> str:
        body = envelope.encode("utf-8")
        logger.debug("eccang_request service=%s bytes=%d", service, len(body))
        try:
            response = await self.http.post(
                self.settings.base_url,
                content=body,
                headers=SOAP_HEADERS,
            )
        except httpx.TimeoutException as exc:
            raise NetworkError(
                f"eccang_timeout: {service} timed out after {self.settings.timeout_seconds}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"eccang_connection_failed: {exc}") from exc

        if response.status_code >= 400:
            raise NetworkError(
                f"eccang_http_error_{response.status_code}",
                status_code=response.status_code,
            )
        logger.debug(
            "eccang_response service=%s status=%s bytes=%d",
            service,
            response.status_code,
            len(response.content),
        )
        return response.text

    async def _audit(self, service: str, build_entry: Callable[[], ApiLogEntry]) -> None:
        """Emit an audit record; the entry is only built when a logger is set."""
        if self.audit_logger is None:
            return
        try:
            result = self.audit_logger.log(build_entry())
            if inspect.isawaitable(result):
                await result
        except Exception as exc:
            logger.warning("eccang_audit_log_failed service=%s", service, exc_info=exc)

    # Orders

    async def create_order(
        self, params: Union[CreateOrderRequest, GenericParams]
    ) -> EccangResult[Records]:
        return await self.call("createOrder", params)

    async def batch_create_order(
        self, order_list: Sequence[Union[CreateOrderRequest, GenericParams]]
    ) -> EccangResult[Records]:
        return await self.call("batchCreateOrder", {"order_list": list(order_list)})

    async def check_reference_no(self, reference_no: str) -> EccangResult[Record]:
        return await self.call("checkReferenceNo", {"reference_no": reference_no})

    async def edit_order_size(
        self,
        reference_no: str,
        volume: Sequence[Union[CreateOrderVolume, GenericParams]],
    ) -> EccangResult[Record]:
        return await self.call(
            "editOrderSize",
            {"reference_no": reference_no, "Volume": list(volume)},
        )

    async def modify_order_weight(
        self, reference_no: str, order_weight: float
    ) -> EccangResult[Record]:
        return await self.call(
            "modifyOrderWeight",
            {"reference_no": reference_no, "order_weight": order_weight},
        )

    async def intercept_order(
        self, reference_no: str, reason: Optional[str] = None
    ) -> EccangResult[Record]:
        payload: dict[str, Any] = {"reference_no": reference_no}
        if reason is not None:
            payload["reason"] = reason
        return await self.call("interceptOrder", payload)

    async def cancel_intercept_order_by_tms(self, reference_no: str) -> EccangResult[Record]:
        return await self.call("cancelInterceptOrderByTms", {"reference_no": reference_no})

    async def cancel_order(self, reference_no: str) -> EccangResult[Record]:
        return await self.call("cancelOrder", {"reference_no": reference_no})

    async def update_tracking_number_and_label(
        self, params: GenericParams
    ) -> EccangResult[Record]:
        return await self.call("updateTrackingNumberAndLabel", params)

    # Tracking

    async def get_track_number(
        self, params: Union[GetTrackNumberRequest, GenericParams]
    ) -> EccangResult[Records]:
        """Tracking numbers per order; list-valued box entries come back comma-joined."""
        return await self.call("getTrackNumber", params)

    async def get_cargo_track(
        self, params: Union[CargoTrackRequest, GenericParams]
    ) -> EccangResult[Records]:
        """Cargo track events; ``Detail`` is always a list when present."""
        return await self.call("getCargoTrack", params)

    # Labels

    async def get_label_url(
        self, params: Union[GetLabelUrlRequest, GenericParams]
    ) -> EccangResult[Record]:
        return await self.call("getLabelUrl", params)

    async def batch_get_label(
        self, reference_nos: Sequence[str], label_type: Optional[int] = None
    ) -> EccangResult[Records]:
        payload: dict[str, Any] = {"reference_nos": list(reference_nos)}
        if label_type is not None:
            payload["label_type"] = label_type
        return await self.call("batchGetLabel", payload)

    async def batch_get_pod(self, reference_nos: Sequence[str]) -> EccangResult[Record]:
        return await self.call("batchGetPod", {"reference_nos": list(reference_nos)})

    async def get_print_template_name(
        self, params: Optional[GenericParams] = None
    ) -> EccangResult[Records]:
        return await self.call("getPrintTemplateName", params or {})

    async def get_label_by_template(
        self, params: Union[LabelByTemplateRequest, GenericParams]
    ) -> EccangResult[Records]:
        return await self.call("getLabelByTemplate", params)

    # Fees

    async def fee_trail(
        self, params: Union[FeeTrailRequest, GenericParams]
    ) -> EccangResult[Records]:
        return await self.call("feeTrail", params)

    async def get_receiving_expense(
        self, params: Union[ReceivingExpenseRequest, GenericParams]
    ) -> EccangResult[Records]:
        return await self.call("getReceivingExpense", params)

    # Reference data

    async def get_shipping_method(
        self, params: Optional[GenericParams] = None
    ) -> EccangResult[Records]:
        return await self.call("getShippingMethod", params or {})

    async def get_shipping_method_info(
        self, params: Optional[GenericParams] = None
    ) -> EccangResult[Records]:
        return await self.call("getShippingMethodInfo", params or {})

    async def get_country(self) -> EccangResult[Records]:
        return await self.call("getCountry", {})

    async def get_goodstype(self) -> EccangResult[Records]:
        return await self.call("getGoodstype", {})

    async def get_field_rule(
        self, params: Union[FieldRuleRequest, GenericParams]
    ) -> EccangResult[Record]:
        return await self.call("getFieldRule", params)

    async def get_basic_data(
        self, params: Optional[GenericParams] = None
    ) -> EccangResult[Record]:
        return await self.call("getBasicData", params or {})

    # Other

    async def register(self, params: GenericParams) -> EccangResult[Record]:
        return await self.call("register", params)

    async def address_validate(
        self, params: Union[AddressValidateRequest, GenericParams]
    ) -> EccangResult[Record]:
        return await self.call("addressValidate", params)

    async def get_sender_message(self, reference_no: str) -> EccangResult[Record]:
        return await self.call("getSenderMessage", {"reference_no": reference_no})

    async def create_ups_pickup(
        self, params: Union[PickupRequest, GenericParams]
    ) -> EccangResult[Record]:
        return await self.call("createUpsPickup", params)

    async def create_mydhl_pickup(
        self, params: Union[PickupRequest, GenericParams]
    ) -> EccangResult[Record]:
        return await self.call("createMydhlPickup", params)
