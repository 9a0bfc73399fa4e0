"""
Typed views over ECCANG payloads.

The provider schema is only partially documented and varies per operation,
so every model allows extra keys. Request models serialize with
``exclude_unset`` so optional fields the caller never set are left out of
the wire payload while an explicit ``None`` still goes out as ``null``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, List, Literal, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError

AskStatus = Literal["Success", "Failure"]

DataT = TypeVar("DataT")
ViewT = TypeVar("ViewT", bound=BaseModel)


class OpenModel(BaseModel):
    """Base for provider models; unknown keys are kept."""

    model_config = ConfigDict(extra="allow", populate_by_name=True, coerce_numbers_to_str=True)


class EccangError(OpenModel):
    errCode: Optional[str] = None
    errMessage: Optional[str] = None


# Requests


class Consignee(OpenModel):
    consignee_name: str
    telephone: Optional[str] = None
    mobile: Optional[str] = None
    street: Optional[str] = None
    street2: Optional[str] = None
    street3: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    postcode: Optional[str] = None
    email: Optional[str] = None


class Shipper(OpenModel):
    shipper_name: Optional[str] = None
    shipper_company: Optional[str] = None
    countrycode: Optional[str] = None
    province: Optional[str] = None
    city: Optional[str] = None
    street: Optional[str] = None
    postcode: Optional[str] = None
    telephone: Optional[str] = None
    mobile: Optional[str] = None
    email: Optional[str] = None


class CreateOrderItem(OpenModel):
    invoice_enname: str
    invoice_cnname: Optional[str] = None
    invoice_weight: float
    invoice_quantity: int
    invoice_unitcharge: float
    hs_code: Optional[str] = None
    sku: Optional[str] = None
    invoice_brand: Optional[str] = None
    box_number: Optional[str] = None
    model: Optional[str] = None
    unit_code: Optional[str] = None
    is_magnetoelectric: Optional[Literal["Y", "N"]] = None


class CreateOrderVolume(OpenModel):
    length: float
    width: float
    height: float
    weight: float
    box_number: str
    child_number: Optional[str] = None


class CreateOrderRequest(OpenModel):
    reference_no: str
    shipping_method: str
    country_code: str
    order_weight: Optional[float] = None
    order_pieces: Optional[int] = None
    consignee: Optional[Consignee] = None
    shipper: Optional[Shipper] = None
    ItemArr: Optional[List[CreateOrderItem]] = None
    Volume: Optional[List[CreateOrderVolume]] = None


class GetTrackNumberRequest(OpenModel):
    reference_no: List[str]


class GetLabelUrlRequest(OpenModel):
    reference_no: str
    type: Optional[Literal[1, 2, 3]] = None
    label_type: Optional[Literal[1, 2, 3]] = None
    label_content_type: Optional[Literal[1, 2, 3, 4, 5, 6, 7]] = None


class CargoTrackRequest(OpenModel):
    codes: List[str]
    type: Optional[str] = None
    lang: Optional[str] = None


class FeeTrailRequest(OpenModel):
    country_code: str
    weight: str
    length: Optional[str] = None
    width: Optional[str] = None
    height: Optional[str] = None
    shipping_type_id: str
    group: Optional[str] = None


class AddressValidateRequest(OpenModel):
    shipping_method: str
    country_code: str
    province: Optional[str] = None
    postcode: Optional[str] = None
    city: Optional[str] = None
    consignee: Optional[Consignee] = None
    ItemArr: Optional[List[CreateOrderItem]] = None


class FieldRuleRequest(OpenModel):
    shipping_method: str
    country_code: str


class ReceivingExpenseRequest(OpenModel):
    reference_no: str


class PickupRequest(OpenModel):
    reference_no: str


class LabelByTemplateRequest(OpenModel):
    template_code: str
    codes: List[str]


# Response data views


class CreateOrderResponseItem(OpenModel):
    reference_no: Optional[str] = None
    shipping_method_no: Optional[str] = None
    order_code: Optional[str] = None
    track_status: Optional[str] = None
    sender_info_status: Optional[str] = None
    ODA: Optional[str] = None
    agent_number: Optional[str] = None


class GetTrackNumberDataItem(OpenModel):
    OrderNumber: Optional[str] = None
    TrackingNumber: Optional[str] = None
    WayBillNumber: Optional[str] = None
    PlatformNumber: Optional[str] = None
    channelGroupCode: Optional[str] = None
    channelNumber: Optional[str] = None
    trackingnumberlist: Optional[dict[str, str]] = None


class LabelData(OpenModel):
    ask: Optional[str] = None
    message: Optional[str] = None
    type: Optional[str] = None
    url: Optional[str] = None
    invoice_url: Optional[str] = None
    reference_no: Optional[str] = None


class CargoTrackDetail(OpenModel):
    OccurDate: Optional[str] = None
    Comment: Optional[str] = None
    StatusCode: Optional[str] = None
    Area: Optional[str] = None


class CargoTrackDataItem(OpenModel):
    Code: Optional[str] = None
    Country_code: Optional[str] = None
    New_date: Optional[str] = None
    New_Comment: Optional[str] = None
    Status: Optional[str] = None
    WaybillNumber: Optional[str] = None
    TrackingNumber: Optional[str] = None
    product_code: Optional[str] = None
    product_name: Optional[str] = None
    Detail: Optional[List[CargoTrackDetail]] = None


class FeeTrailQuote(OpenModel):
    ServiceCode: Optional[str] = None
    ServiceCnName: Optional[str] = None
    ServiceEnName: Optional[str] = None
    FreightFee: Optional[str] = None
    FuelFee: Optional[str] = None
    RegisteredFee: Optional[str] = None
    OtherFee: Optional[str] = None
    TotalFee: Optional[str] = None
    Effectiveness: Optional[str] = None
    Traceability: Optional[str] = None
    VolumeCharge: Optional[str] = None
    Remark: Optional[str] = None
    ChargeWeight: Optional[str] = None
    ChargeWeightUnit: Optional[str] = None
    ProductSort: Optional[str] = None
    Formula: Optional[str] = None


class CountryInfo(OpenModel):
    country_code: Optional[str] = None
    country_cn: Optional[str] = None
    country_en: Optional[str] = None


class GoodsTypeInfo(OpenModel):
    goods_type_id: Optional[str] = None
    goods_type_name: Optional[str] = None
    goods_type_name_en: Optional[str] = None


class ShippingMethodInfo(OpenModel):
    shipping_method: Optional[str] = None
    shipping_method_en: Optional[str] = None
    shipping_method_cn: Optional[str] = None
    channel_code: Optional[str] = None


class AddressValidateData(OpenModel):
    ask: Optional[str] = None
    message: Optional[str] = None
    ErrorMessage: Optional[str] = None


class FieldRuleField(OpenModel):
    field: Optional[str] = None
    required: Optional[bool] = None
    label: Optional[str] = None
    message: Optional[str] = None


class FieldRuleData(OpenModel):
    consignee: Optional[List[FieldRuleField]] = None
    shipper: Optional[List[FieldRuleField]] = None
    ItemArr: Optional[List[FieldRuleField]] = None
    Volume: Optional[List[FieldRuleField]] = None


class ReceivingExpenseDataItem(OpenModel):
    reference_no: Optional[str] = None
    Freight: Optional[str] = None
    Register: Optional[str] = None
    FuelCharge: Optional[str] = None
    OtherFee: Optional[str] = None
    TotalFee: Optional[str] = None


class PrintTemplateInfo(OpenModel):
    template_name: Optional[str] = None
    template_code: Optional[str] = None
    type: Optional[str] = None


class SenderMessage(OpenModel):
    reference_no: Optional[str] = None
    shipper_name: Optional[str] = None
    shipper_company: Optional[str] = None
    shipper_country: Optional[str] = None
    shipper_province: Optional[str] = None
    shipper_city: Optional[str] = None
    shipper_street: Optional[str] = None
    shipper_postcode: Optional[str] = None
    shipper_telephone: Optional[str] = None
    shipper_mobile: Optional[str] = None
    shipper_email: Optional[str] = None


def _coerce_error(item: Any) -> EccangError:
    if isinstance(item, Mapping):
        try:
            return EccangError.model_validate(item)
        except ValidationError:
            pass
    return EccangError(errMessage=str(item))


class EccangResult(Generic[DataT]):
    """Decoded ECCANG response.

    Wraps the raw JSON document without validating it. ``ask`` is
    authoritative: ``data`` reads as ``None`` unless the call succeeded,
    and a missing ``Error`` and an empty ``Error`` list both mean no errors.
    """

    def __init__(self, raw: Any) -> None:
        self.raw = raw

    def __repr__(self) -> str:
        return f"EccangResult(ask={self.ask!r}, message={self.message!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EccangResult):
            return NotImplemented
        return self.raw == other.raw

    def _get(self, key: str) -> Any:
        if isinstance(self.raw, Mapping):
            return self.raw.get(key)
        return None

    @property
    def ask(self) -> Optional[str]:
        return self._get("ask")

    @property
    def succeeded(self) -> bool:
        return self.ask == "Success"

    @property
    def message(self) -> Optional[str]:
        return self._get("message")

    @property
    def time_cost(self) -> Optional[str]:
        return self._get("time_cost")

    @property
    def errors(self) -> List[EccangError]:
        value = self._get("Error")
        if not value:
            return []
        if isinstance(value, Mapping):
            value = [value]
        if not isinstance(value, list):
            return [EccangError(errMessage=str(value))]
        return [_coerce_error(item) for item in value if item]

    @property
    def data(self) -> Optional[DataT]:
        if not self.succeeded:
            return None
        return self._get("data")

    def data_as(self, model: Type[ViewT]) -> Union[ViewT, List[ViewT], None]:
        """Validate ``data`` into ``model``; arrays become lists of models."""
        data = self.data
        if data is None:
            return None
        if isinstance(data, list):
            return [model.model_validate(item) for item in data]
        return model.model_validate(data)
