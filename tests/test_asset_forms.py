import httpx
import pytest

from console.api_client import ApiError
from console.asset_forms import AddAssetForm, AssetFormData, EditAssetForm, FormState, FormStateError, _AssetForm
from console.asset_list import AssetListView
from console.vin_decode import VinDecodeClient

VIN = "1FT8W3DT5KEB12345"


def _vin_client(handler) -> VinDecodeClient:
    return VinDecodeClient(base_url="https://vpic.test/api/vehicles", transport=httpx.MockTransport(handler))


def _decoded(request: httpx.Request) -> httpx.Response:
    return httpx.Response(200, json={"Results": [{"ModelYear": "2019", "Make": "FORD", "Model": "F-550"}]})


def _unreachable(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectError("unreachable", request=request)


@pytest.fixture
def list_view(api_client):
    return AssetListView(api_client)


@pytest.mark.anyio
async def test_add_form_creates_and_prepends(api_client, list_view):
    list_view.assets = [{"id": "existing", "code": "1", "name": "Old", "status": "ACTIVE"}]
    form = AddAssetForm(api_client, list_view, _vin_client(_decoded))
    assert form.state == FormState.IDLE

    form.open()
    form.set_field("code", "85")
    form.set_field("name", "F-550 Truck")
    form.set_field("vin", " 1ft8w3dt5keb12345 ")
    assert form.data.vin == VIN

    created = await form.submit()

    assert form.state == FormState.CLOSED
    assert form.error is None
    assert created["code"] == "85"
    assert created["vin"] == VIN
    assert created["status"] == "ACTIVE"
    assert list_view.assets[0] == created
    assert list_view.assets[1]["id"] == "existing"


@pytest.mark.anyio
async def test_decode_vin_fills_vehicle_fields(api_client):
    form = AddAssetForm(api_client, vin_client=_vin_client(_decoded))
    form.open()
    form.set_field("vin", VIN)

    assert await form.decode_vin() is True
    assert form.state == FormState.EDITING
    assert (form.data.year, form.data.make, form.data.model) == ("2019", "FORD", "F-550")
    assert form.data.name == "FORD F-550"


@pytest.mark.anyio
async def test_decode_vin_keeps_typed_name(api_client):
    form = AddAssetForm(api_client, vin_client=_vin_client(_decoded))
    form.open()
    form.set_field("name", "Unit 85")
    form.set_field("vin", VIN)

    await form.decode_vin()
    assert form.data.name == "Unit 85"


@pytest.mark.anyio
async def test_failed_decode_does_not_block_save(api_client, list_view):
    form = AddAssetForm(api_client, list_view, _vin_client(_unreachable))
    form.open()
    form.set_field("code", "85")
    form.set_field("name", "F-550 Truck")
    form.set_field("vin", VIN)

    assert await form.decode_vin() is False
    assert form.vin_error == "VIN decode failed. Try again."
    assert form.state == FormState.EDITING

    created = await form.submit()
    assert created is not None
    assert form.state == FormState.CLOSED


@pytest.mark.anyio
async def test_decode_short_vin_reports_error(api_client):
    form = AddAssetForm(api_client, vin_client=_vin_client(_decoded))
    form.open()
    form.set_field("vin", "1FT")

    assert await form.decode_vin() is False
    assert form.vin_error == "Enter a valid VIN (11–17 chars)"


@pytest.mark.anyio
@pytest.mark.parametrize(
    "fields, message",
    [
        ({"code": "", "name": "Truck"}, "Code and Name are required."),
        ({"code": "85", "name": "  "}, "Code and Name are required."),
        ({"code": "85", "name": "Truck", "vin": "1FT8W"}, "Enter a valid VIN (11–17 chars)"),
        ({"code": "85", "name": "Truck", "year": "twenty"}, "Year must be a number."),
    ],
)
async def test_client_side_validation_keeps_form_open(api_client, list_view, fields, message):
    form = AddAssetForm(api_client, list_view)
    form.open()
    for key, value in fields.items():
        form.set_field(key, value)

    assert await form.submit() is None
    assert form.state == FormState.EDITING
    assert form.error == message
    assert list_view.assets == []


class _RejectingApi:
    def __init__(self):
        self.calls = 0

    async def create_asset(self, payload):
        self.calls += 1
        raise ApiError("Code and Name are required.", status_code=400)


@pytest.mark.anyio
async def test_failed_save_leaves_form_editing_for_retry():
    api = _RejectingApi()
    view = AssetListView(api)
    form = AddAssetForm(api, view)
    form.open()
    form.set_field("code", "85")
    form.set_field("name", "F-550 Truck")

    assert await form.submit() is None
    assert form.state == FormState.EDITING
    assert form.error == "Code and Name are required."
    assert view.assets == []

    await form.submit()
    assert api.calls == 2


def test_set_field_requires_open_form(api_client):
    form = AddAssetForm(api_client)
    with pytest.raises(FormStateError):
        form.set_field("code", "85")


@pytest.mark.anyio
async def test_edit_form_updates_and_replaces_by_id(async_client, api_client, list_view):
    resp = await async_client.post("/api/assets", json={"code": "25400", "name": "Case 621G", "assetType": "Loader"})
    assert resp.status_code == 201
    await list_view.refresh()

    form = EditAssetForm(api_client, list_view)
    form.sync(list_view.select(resp.json()["id"]))
    assert form.state == FormState.EDITING
    assert form.data.code == "25400"
    assert form.data.meter_unit == "MILES"

    form.set_field("status", "IN_SHOP")
    form.set_field("meter_unit", "HOURS")
    form.set_field("current_meter", "6402")
    updated = await form.submit()

    assert form.state == FormState.CLOSED
    assert updated["status"] == "IN_SHOP"
    assert updated["meterUnit"] == "HOURS"
    assert updated["currentMeter"] == 6402
    assert updated["assetType"] == "Loader"
    assert list_view.assets == [updated]
    assert list_view.selected is updated


def test_edit_form_resyncs_when_selection_changes(api_client):
    first = {"id": "1", "code": "85", "name": "F-550 Truck", "assetType": "Truck", "status": "ACTIVE", "meterUnit": "MILES", "currentMeter": None}
    second = {"id": "2", "code": "25400", "name": "Case 621G", "assetType": "Loader", "status": "IN_SHOP", "meterUnit": "HOURS", "currentMeter": 6402.0}

    form = EditAssetForm(api_client)
    form.sync(first)
    form.set_field("name", "half-typed edit")
    form.error = "stale error"

    form.sync(first)
    assert form.data.name == "half-typed edit"

    form.sync(second)
    assert form.source is second
    assert form.error is None
    assert form.data == AssetFormData.from_asset(second)
    assert form.data.current_meter == "6402.0"

    form.sync(None)
    assert form.state == FormState.IDLE


@pytest.mark.anyio
async def test_edit_unknown_asset_shows_server_error(api_client, list_view):
    ghost = {"id": "gone", "code": "85", "name": "F-550 Truck", "status": "ACTIVE", "meterUnit": "MILES"}
    form = EditAssetForm(api_client, list_view)
    form.sync(ghost)

    assert await form.submit() is None
    assert form.state == FormState.EDITING
    assert form.error == "Asset gone not found"


def test_patch_payload_carries_status_and_meter():
    data = AssetFormData(code="85", name="Truck", status="RETIRED", meter_unit="HOURS", current_meter="")
    payload = data.patch_payload()
    assert payload["status"] == "RETIRED"
    assert payload["meterUnit"] == "HOURS"
    assert payload["currentMeter"] is None
    assert "status" not in data.create_payload()


@pytest.mark.parametrize("value", ["inf", "-Infinity", "nan"])
def test_non_finite_numbers_are_rejected(value):
    assert AssetFormData(code="85", name="Truck", current_meter=value).validate() == "Meter must be a number."
    assert AssetFormData(code="85", name="Truck", year=value).validate() == "Year must be a number."


@pytest.mark.anyio
async def test_edit_form_with_infinite_meter_stays_editable(async_client, api_client, list_view):
    resp = await async_client.post("/api/assets", json={"code": "25400", "name": "Case 621G"})
    await list_view.refresh()
    form = EditAssetForm(api_client, list_view)
    form.sync(list_view.select(resp.json()["id"]))

    form.set_field("current_meter", "inf")
    assert await form.submit() is None
    assert form.state == FormState.EDITING
    assert form.error == "Meter must be a number."

    form.set_field("current_meter", "6402")
    updated = await form.submit()
    assert updated["currentMeter"] == 6402
    assert form.state == FormState.CLOSED


class _BrokenApi:
    def __init__(self):
        self.calls = 0

    async def create_asset(self, payload):
        self.calls += 1
        if self.calls == 1:
            raise ValueError("Out of range float values are not JSON compliant")
        return {"id": "new", **payload, "status": "ACTIVE"}


@pytest.mark.anyio
async def test_unexpected_save_error_returns_form_to_editing():
    api = _BrokenApi()
    view = AssetListView(api)
    form = AddAssetForm(api, view)
    form.open()
    form.set_field("code", "85")
    form.set_field("name", "F-550 Truck")

    with pytest.raises(ValueError):
        await form.submit()
    assert form.state == FormState.EDITING
    assert form.error == "Out of range float values are not JSON compliant"
    assert view.assets == []

    form.set_field("name", "F-550 Flatbed")
    created = await form.submit()
    assert created["name"] == "F-550 Flatbed"
    assert form.state == FormState.CLOSED
    assert view.assets == [created]


def test_base_form_cannot_be_instantiated(api_client):
    with pytest.raises(TypeError):
        _AssetForm(api_client)
