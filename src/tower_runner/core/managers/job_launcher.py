from tower_runner.core.exceptions import RemoteError
from tower_runner.core.managers.tower_client import EMPTY_BODY, TowerClient, remote_error
from tower_runner.core.settings import logger
from tower_runner.core.utils.api_urls import TowerApiUrls


class JobLauncher:
    """Launches a job from a resolved template. A failed launch is never retried."""

    def __init__(self, client: TowerClient, urls: TowerApiUrls) -> None:
        self._client = client
        self._urls = urls

    async def launch(self, template_id: str) -> str:
        response = await self._client.send("POST", self._urls.job_launch(template_id), EMPTY_BODY)
        if response.status != 201:
            raise remote_error(response, f"Could not launch job from template {template_id}")

        job_id = response.json_field("id")
        if job_id is None:
            raise RemoteError(
                status=response.status,
                message=f"Launch response for template {template_id} did not contain a job id",
                body=response.body,
            )
        logger.info(f"[job:launch] launched job id={job_id} template_id={template_id}")
        return str(job_id)
