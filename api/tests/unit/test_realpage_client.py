"""
Tests unitarios para RealPageClient.

Verifica el contrato HTTP con RealPage:
- Header x-ws-authkey en cada request.
- Query fija de /units.
- Extraccion del sobre {"response": {...}}.
- Status no exitoso -> HttpError, sin reintentos.
"""
import httpx
import pytest

from conftest import API_BASE_URL
from rentsync.infrastructure.external.realpage.realpage_client import LEASE_TERMS, RealPageClient
from rentsync.shared.exceptions.scrape import HttpError, TransformError


@pytest.mark.asyncio
async def test_fetch_floorplans_sends_auth_header(realpage_transport, raw_floorplan) -> None:
    transport = realpage_transport()
    async with httpx.AsyncClient(transport=transport) as client:
        floorplans = await RealPageClient(API_BASE_URL, client=client).fetch_floorplans("token-1")

    assert floorplans == [raw_floorplan]
    request = transport.requests[0]
    assert request.method == "GET"
    assert str(request.url) == f"{API_BASE_URL}/floorplans"
    assert request.headers["x-ws-authkey"] == "token-1"


@pytest.mark.asyncio
async def test_fetch_units_sends_fixed_query(realpage_transport, raw_unit) -> None:
    transport = realpage_transport()
    async with httpx.AsyncClient(transport=transport) as client:
        units = await RealPageClient(API_BASE_URL + "/", client=client).fetch_units("token-2")

    assert units == [raw_unit]
    request = transport.requests[0]
    assert request.url.path == "/v1/units"
    assert request.headers["x-ws-authkey"] == "token-2"
    assert dict(request.url.params) == {
        "available": "false",
        "honordisplayorder": "true",
        "siteid": "8448226",
        "bestprice": "true",
        "leaseterm": "1,2,3,4,5,6,7,8,9,10,11,12,13,14,15,16,17,18",
    }
    assert LEASE_TERMS == request.url.params["leaseterm"]


@pytest.mark.asyncio
async def test_site_id_is_configurable(realpage_transport) -> None:
    transport = realpage_transport()
    async with httpx.AsyncClient(transport=transport) as client:
        await RealPageClient(API_BASE_URL, client=client, site_id=42).fetch_units("t")

    assert transport.requests[0].url.params["siteid"] == "42"


@pytest.mark.asyncio
async def test_error_status_raises_http_error_without_retry(realpage_transport) -> None:
    transport = realpage_transport(status_overrides={"/v1/floorplans": 401})
    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(HttpError) as exc_info:
            await RealPageClient(API_BASE_URL, client=client).fetch_floorplans("expired")

    assert exc_info.value.status_code_upstream == 401
    assert exc_info.value.url == f"{API_BASE_URL}/floorplans"
    assert len(transport.requests) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        {"units": []},
        {"response": {"floorplans": []}},
        {"response": {"units": None}},
        ["not", "an", "object"],
    ],
)
async def test_unexpected_envelope_raises_transform_error(body) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json=body))
    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(TransformError):
            await RealPageClient(API_BASE_URL, client=client).fetch_units("t")


@pytest.mark.asyncio
async def test_non_json_body_raises_transform_error() -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, text="<html>oops</html>"))
    async with httpx.AsyncClient(transport=transport) as client:
        with pytest.raises(TransformError, match="JSON"):
            await RealPageClient(API_BASE_URL, client=client).fetch_floorplans("t")

