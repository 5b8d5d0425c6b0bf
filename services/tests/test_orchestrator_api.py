import httpx
import pytest

from orchestrator.config import OrchestratorSettings
from orchestrator.main import create_app

from conftest import VIACEP_URL, WEATHER_URL, make_telemetry, spans_by_name


async def test_resolves_cep_to_report(orchestrator_client, upstreams):
    response = await orchestrator_client.get("/", params={"cep": "01001000"})

    assert response.status_code == 200
    assert response.json() == {"city": "São Paulo", "temp_C": 28.5, "temp_F": 83.3, "temp_K": 301.5}
    assert upstreams.hosts() == ["viacep.test", "weather.test"]
    assert upstreams.requests[1].url.params["q"] == "São Paulo"
    assert upstreams.requests[1].url.params["lang"] == "pt"


@pytest.mark.parametrize("params", [{"cep": "123"}, {"cep": "0100100a"}, {}])
async def test_invalid_cep_is_422_without_lookups(orchestrator_client, upstreams, params):
    response = await orchestrator_client.get("/", params=params)

    assert response.status_code == 422
    assert response.json() == {"message": "invalid zipcode"}
    assert upstreams.requests == []


async def test_unknown_cep_is_404(orchestrator_client, upstreams):
    upstreams.city = None

    response = await orchestrator_client.get("/", params={"cep": "99999999"})

    assert response.status_code == 404
    assert response.json() == {"message": "can not find zipcode"}
    assert upstreams.hosts() == ["viacep.test"]


async def test_weather_provider_status_is_relayed(orchestrator_client, upstreams):
    upstreams.weather_status = 401

    response = await orchestrator_client.get("/", params={"cep": "01001000"})

    assert response.status_code == 401
    assert response.json() == {"message": "unexpected status code: 401"}


async def test_directory_outage_is_relayed(orchestrator_client, upstreams):
    upstreams.viacep_status = 500

    response = await orchestrator_client.get("/", params={"cep": "01001000"})

    assert response.status_code == 500
    assert response.json() == {"message": "unexpected status code: 500"}


async def test_missing_api_key_is_400(upstreams):
    telemetry, _ = make_telemetry("orchestrator")
    settings = OrchestratorSettings(weather_api_key="", viacep_base_url=VIACEP_URL, weather_api_base_url=WEATHER_URL)
    app = create_app(settings, telemetry, httpx.AsyncClient(transport=httpx.MockTransport(upstreams)))

    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://orchestrator.test") as client:
        response = await client.get("/", params={"cep": "01001000"})
        ready = await client.get("/ready")

    assert response.status_code == 400
    assert response.json() == {"message": "no API key set"}
    assert upstreams.hosts() == ["viacep.test"]
    assert ready.status_code == 503


async def test_probes(orchestrator_client):
    assert (await orchestrator_client.get("/health")).json()["status"] == "healthy"
    assert (await orchestrator_client.get("/ready")).json()["status"] == "ready"


async def test_continues_trace_from_inbound_headers(orchestrator_client, orchestrator_telemetry):
    _, exporter = orchestrator_telemetry
    trace_id = "4bf92f3577b34da6a3ce929d0e0e4736"
    parent_id = "00f067aa0ba902b7"

    await orchestrator_client.get(
        "/", params={"cep": "01001000"}, headers={"traceparent": f"00-{trace_id}-{parent_id}-01"}
    )

    spans = spans_by_name(exporter)
    top = spans["handleRequest"]
    assert format(top.context.trace_id, "032x") == trace_id
    assert format(top.parent.span_id, "016x") == parent_id
    assert spans["fetchCityFromCEP"].parent.span_id == top.context.span_id
    assert spans["fetchWeather"].parent.span_id == top.context.span_id


async def test_without_inbound_headers_starts_new_trace(orchestrator_client, orchestrator_telemetry):
    _, exporter = orchestrator_telemetry

    await orchestrator_client.get("/", params={"cep": "01001000"})

    assert spans_by_name(exporter)["handleRequest"].parent is None


async def test_null_locality_is_404():
    def directory(request):
        return httpx.Response(200, content=b'{"cep": "99999-999", "localidade": null}')

    telemetry, _ = make_telemetry("orchestrator")
    settings = OrchestratorSettings(weather_api_key="k", viacep_base_url=VIACEP_URL, weather_api_base_url=WEATHER_URL)
    app = create_app(settings, telemetry, httpx.AsyncClient(transport=httpx.MockTransport(directory)))

    async with httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://orchestrator.test") as client:
        response = await client.get("/", params={"cep": "99999999"})

    assert response.status_code == 404
    assert response.json() == {"message": "can not find zipcode"}
