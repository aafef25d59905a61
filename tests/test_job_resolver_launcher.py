"""Tests for template resolution and job launch."""

import pytest

from tower_runner.core.exceptions import RemoteError, TemplateNotFound
from tower_runner.core.managers.job_launcher import JobLauncher
from tower_runner.core.managers.job_resolver import JobResolver

from conftest import BASE

LOOKUP_URL = f"{BASE}/job_templates/?name__exact=deploy"


@pytest.fixture
def resolver(tower_client, urls):
    return JobResolver(tower_client, urls)


@pytest.fixture
def launcher(tower_client, urls):
    return JobLauncher(tower_client, urls)


class TestJobResolver:
    @pytest.mark.asyncio
    async def test_returns_first_result_id_as_string(self, resolver, fake_http):
        fake_http.add("GET", LOOKUP_URL, body={"count": 1, "results": [{"id": 7, "name": "deploy"}]})

        assert await resolver.resolve("deploy") == "7"

    @pytest.mark.asyncio
    async def test_empty_results_raise_template_not_found(self, resolver, fake_http):
        fake_http.add("GET", LOOKUP_URL, body={"count": 0, "results": []})

        with pytest.raises(TemplateNotFound) as excinfo:
            await resolver.resolve("deploy")
        assert excinfo.value.template_name == "deploy"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [{"detail": "nope"}, "<html></html>", {"results": [{"name": "deploy"}]}])
    async def test_malformed_listing_raises_template_not_found(self, resolver, fake_http, body):
        fake_http.add("GET", LOOKUP_URL, body=body)

        with pytest.raises(TemplateNotFound):
            await resolver.resolve("deploy")

    @pytest.mark.asyncio
    async def test_non_200_raises_remote_error(self, resolver, fake_http):
        fake_http.add("GET", LOOKUP_URL, status=401, reason="Unauthorized", body={"detail": "Invalid username/password."})

        with pytest.raises(RemoteError) as excinfo:
            await resolver.resolve("deploy")
        assert excinfo.value.status == 401


class TestJobLauncher:
    @pytest.mark.asyncio
    async def test_201_returns_job_id(self, launcher, fake_http):
        fake_http.add("POST", f"{BASE}/job_templates/7/launch/", status=201, body={"id": "42", "job": 42})

        assert await launcher.launch("7") == "42"
        request = fake_http.requests[0]
        assert request.method == "POST"
        assert request.body == ""
        assert request.headers["Authorization"].startswith("Basic ")

    @pytest.mark.asyncio
    async def test_200_is_not_a_successful_launch(self, launcher, fake_http):
        fake_http.add("POST", f"{BASE}/job_templates/7/launch/", status=200, body={"id": 42})

        with pytest.raises(RemoteError) as excinfo:
            await launcher.launch("7")
        assert excinfo.value.status == 200

    @pytest.mark.asyncio
    async def test_failed_launch_is_not_retried(self, launcher, fake_http):
        url = f"{BASE}/job_templates/7/launch/"
        fake_http.add("POST", url, status=400, reason="Bad Request", body={"variables_needed_to_start": ["env"]})

        with pytest.raises(RemoteError) as excinfo:
            await launcher.launch("7")
        assert excinfo.value.status == 400
        assert fake_http.calls("POST", url) == 1

    @pytest.mark.asyncio
    async def test_201_without_id_raises_remote_error(self, launcher, fake_http):
        fake_http.add("POST", f"{BASE}/job_templates/7/launch/", status=201, body={})

        with pytest.raises(RemoteError):
            await launcher.launch("7")
