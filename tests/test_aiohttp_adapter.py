import asyncio
import pytest
from aioresponses import aioresponses

from tower_runner.adapters.aiohttp_client_adapter import AioHttpClientAdapter
from tower_runner.core.exceptions import TransportError
from tower_runner.core.models.http import HttpRequest

"""
Tests for AioHttpClientAdapter behavior.

The adapter returns every HTTP response, whatever its status, and only
raises for failures that never produced a response:
- JSON bodies are parsed; anything else is passed through as text.
- HTTP error statuses come back as responses so callers can report them.
- Timeouts and connection errors map to TransportError.
"""


@pytest.mark.asyncio
async def test_json_response_is_parsed():
    url = "http://tower.test/api/v1/jobs/42/"
    with aioresponses() as m:
        m.get(url, payload={"id": 42, "status": "running"}, status=200)

        async with AioHttpClientAdapter() as client:
            response = await client.send(HttpRequest(method="GET", url=url))
            assert response.status == 200
            assert response.body == {"id": 42, "status": "running"}


@pytest.mark.asyncio
async def test_non_json_body_passed_through():
    url = "http://tower.test/api/v1/jobs/42/"
    with aioresponses() as m:
        m.get(url, body="<html>maintenance</html>", status=200, headers={"Content-Type": "text/html"})

        async with AioHttpClientAdapter() as client:
            response = await client.send(HttpRequest(method="GET", url=url))
            assert response.body == "<html>maintenance</html>"


@pytest.mark.asyncio
async def test_error_status_is_returned_not_raised():
    url = "http://tower.test/api/v1/job_templates/7/launch/"
    with aioresponses() as m:
        m.post(url, status=500, body="Server Error")

        async with AioHttpClientAdapter() as client:
            response = await client.send(HttpRequest(method="POST", url=url, body=""))
            assert response.status == 500
            assert response.body == "Server Error"


@pytest.mark.asyncio
async def test_headers_are_sent():
    url = "http://tower.test/api/v1/jobs/42/"
    with aioresponses() as m:
        m.get(url, payload={"status": "running"})

        async with AioHttpClientAdapter() as client:
            await client.send(HttpRequest(method="GET", url=url, headers={"Authorization": "Basic abc"}))

        (call,) = next(iter(m.requests.values()))
        assert call.kwargs["headers"]["Authorization"] == "Basic abc"


@pytest.mark.asyncio
async def test_timeout_maps_to_transport_error():
    url = "http://tower.test/slow"
    with aioresponses() as m:
        m.get(url, exception=asyncio.TimeoutError())

        async with AioHttpClientAdapter() as client:
            with pytest.raises(TransportError) as excinfo:
                await client.send(HttpRequest(method="GET", url=url))
            assert excinfo.value.url == url


@pytest.mark.asyncio
async def test_send_outside_context_manager_raises():
    client = AioHttpClientAdapter()
    with pytest.raises(RuntimeError):
        await client.send(HttpRequest(method="GET", url="http://tower.test/"))


@pytest.mark.asyncio
async def test_undecodable_error_body_keeps_status():
    # A binary or mis-encoded error page must still come back as a response
    # so the caller can raise RemoteError with the upstream status.
    url = "http://tower.test/api/v1/jobs/42/"
    with aioresponses() as m:
        m.get(url, status=500, body=b"\xff\xfe oops", headers={"Content-Type": "text/html; charset=utf-8"})

        async with AioHttpClientAdapter() as client:
            response = await client.send(HttpRequest(method="GET", url=url))
            assert response.status == 500
            assert isinstance(response.body, str)
            assert response.body.endswith(" oops")
