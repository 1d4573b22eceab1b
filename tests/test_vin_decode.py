import re

import httpx
import pytest

from console.vin_decode import (
    DECODE_FAILED_MESSAGE,
    INVALID_VIN_MESSAGE,
    VinDecodeClient,
    VinDecodeError,
    VinDecodeResult,
    parse_decode_response,
)

VIN = "1FT8W3DT5KEB12345"


def _client(handler) -> VinDecodeClient:
    return VinDecodeClient(base_url="https://vpic.test/api/vehicles", timeout=1.0, transport=httpx.MockTransport(handler))


@pytest.mark.anyio
async def test_decode_extracts_first_result():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = request.url
        return httpx.Response(200, json={"Results": [{"ModelYear": "2019", "Make": "FORD", "Model": "F-550"}, {"Make": "IGNORED"}]})

    result = await _client(handler).decode(" 1ft8w3dt5keb12345 ")

    assert result == VinDecodeResult(vin=VIN, year="2019", make="FORD", model="F-550")
    assert seen["url"].path == f"/api/vehicles/decodevinvalues/{VIN}"
    assert seen["url"].params["format"] == "json"


@pytest.mark.anyio
@pytest.mark.parametrize("vin", ["", "1FT8W3", "1FT8W3DT5KEB123456789"])
async def test_decode_rejects_bad_length_without_calling_out(vin):
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(VinDecodeError, match=re.escape(INVALID_VIN_MESSAGE)):
        await _client(handler).decode(vin)


@pytest.mark.anyio
async def test_decode_network_failure():
    def handler(request):
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(VinDecodeError, match=re.escape(DECODE_FAILED_MESSAGE)):
        await _client(handler).decode(VIN)


@pytest.mark.anyio
async def test_decode_bad_status_and_bad_json():
    with pytest.raises(VinDecodeError):
        await _client(lambda r: httpx.Response(503)).decode(VIN)

    with pytest.raises(VinDecodeError):
        await _client(lambda r: httpx.Response(200, content=b"<html>")).decode(VIN)


@pytest.mark.parametrize(
    "data",
    [
        {},
        {"Results": []},
        {"Results": "nope"},
        {"Results": [None]},
        [],
        None,
    ],
)
def test_parse_malformed_payload_gives_empty_fields(data):
    assert parse_decode_response(VIN, data) == VinDecodeResult(vin=VIN)


def test_parse_ignores_non_string_fields():
    result = parse_decode_response(VIN, {"Results": [{"ModelYear": 2019, "Make": "CASE", "Model": None}]})
    assert result == VinDecodeResult(vin=VIN, year="", make="CASE", model="")
