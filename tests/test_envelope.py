import json

import pytest
from eccang_client.envelope import (
    XML_PREFIX,
    XML_SUFFIX,
    build_envelope,
    decode_xml_entities,
    extract_response,
    serialize_params,
)
from eccang_client.errors import (
    EmptyResponseError,
    ProtocolError,
    ResponseParseError,
    SerializationError,
)
from eccang_client.models import Consignee, CreateOrderRequest


def _wrap(body: str) -> str:
    return (
        "<SOAP-ENV:Envelope><SOAP-ENV:Body><ns1:callServiceResponse>"
        f"<response>{body}</response>"
        "</ns1:callServiceResponse></SOAP-ENV:Body></SOAP-ENV:Envelope>"
    )


def test_build_envelope_interpolates_fields():
    params = {"reference_no": "REF123", "note": "a < b & c"}
    xml = build_envelope(params, "createOrder", app_token="token", app_key="key")

    assert xml.startswith(XML_PREFIX)
    assert xml.endswith(XML_SUFFIX)
    assert "<service>createOrder</service>" in xml
    assert "<appToken>token</appToken>" in xml
    assert "<appKey>key</appKey>" in xml
    assert (
        '<paramsJson><![CDATA[{"reference_no":"REF123","note":"a < b & c"}]]></paramsJson>'
        in xml
    )


def test_build_envelope_header_and_footer_are_fixed():
    first = build_envelope({}, "getCountry", app_token="t", app_key="k")
    second = build_envelope([1, 2], "getGoodstype", app_token="t2", app_key="k2")

    assert first.split("\n")[:3] == second.split("\n")[:3]
    assert first.split("\n")[-3:] == second.split("\n")[-3:]


def test_build_envelope_passes_strings_through():
    xml = build_envelope('{"raw":true}', "register", app_token="t", app_key="k")
    assert "<![CDATA[{\"raw\":true}]]>" in xml


def test_build_envelope_rejects_empty_service():
    with pytest.raises(ValueError):
        build_envelope({}, "", app_token="t", app_key="k")


def test_serialize_params_defaults_none_to_empty_object():
    assert serialize_params(None) == "{}"


def test_serialize_params_keeps_unicode_and_nulls():
    assert serialize_params({"name": "张三", "street2": None}) == '{"name":"张三","street2":null}'


def test_serialize_params_dumps_models_without_unset_fields():
    request = CreateOrderRequest(
        reference_no="REF1",
        shipping_method="SM",
        country_code="US",
        consignee=Consignee(consignee_name="John", street2=None),
    )

    payload = json.loads(serialize_params({"order_list": [request]}))

    order = payload["order_list"][0]
    assert order["reference_no"] == "REF1"
    assert "order_weight" not in order
    assert order["consignee"] == {"consignee_name": "John", "street2": None}


def test_serialize_params_cycle_raises_serialization_error():
    params: dict = {}
    params["self"] = params
    with pytest.raises(SerializationError) as excinfo:
        serialize_params(params)
    assert isinstance(excinfo.value.__cause__, ValueError)


def test_serialize_params_unsupported_type_raises_serialization_error():
    with pytest.raises(SerializationError):
        serialize_params({"value": object()})


def test_serialize_params_rejects_nan():
    with pytest.raises(SerializationError):
        serialize_params({"weight": float("nan")})


def test_decode_xml_entities_decodes_ampersand_last():
    assert decode_xml_entities("&lt;a&gt; &quot;x&quot; &apos;y&apos;") == "<a> \"x\" 'y'"
    assert decode_xml_entities("&amp;lt;") == "&lt;"
    assert decode_xml_entities("&amp;quot;") == "&quot;"


def test_extract_response_plain_json():
    result = extract_response(_wrap('{"ask":"Success","data":[{"Code":"C1"}]}'))
    assert result == {"ask": "Success", "data": [{"Code": "C1"}]}


def test_extract_response_cdata_wrapped():
    result = extract_response(_wrap('  <![CDATA[{"ask":"Success","message":"a<b"}]]>  '))
    assert result == {"ask": "Success", "message": "a<b"}


def test_extract_response_entity_encoded():
    body = "{&quot;ask&quot;:&quot;Success&quot;,&quot;message&quot;:&quot;R&amp;D &lt;ok&gt; it&apos;s&quot;}"
    result = extract_response(_wrap(body))
    assert result == {"ask": "Success", "message": "R&D <ok> it's"}


def test_extract_response_tag_is_case_insensitive_and_multiline():
    xml = '<RESPONSE>\n{"ask": "Failure",\n "Error": []}\n</Response>'
    assert extract_response(xml) == {"ask": "Failure", "Error": []}


def test_extract_response_accepts_arrays():
    assert extract_response(_wrap("[1, 2]")) == [1, 2]


def test_extract_response_missing_element():
    with pytest.raises(ProtocolError) as excinfo:
        extract_response("<html>502 Bad Gateway</html>")
    assert "missing response element" in str(excinfo.value)


@pytest.mark.parametrize("body", ["", "   ", "<![CDATA[]]>", "<![CDATA[  ]]>"])
def test_extract_response_empty(body):
    with pytest.raises(EmptyResponseError):
        extract_response(_wrap(body))


def test_extract_response_invalid_json():
    with pytest.raises(ResponseParseError) as excinfo:
        extract_response(_wrap("not-json"))
    assert "Failed to parse ECCANG response JSON" in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, json.JSONDecodeError)
