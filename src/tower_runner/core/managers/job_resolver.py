from tower_runner.core.exceptions import TemplateNotFound
from tower_runner.core.managers.tower_client import TowerClient, remote_error
from tower_runner.core.settings import logger
from tower_runner.core.utils.api_urls import TowerApiUrls


class JobResolver:
    """Looks up a job template by exact name and returns its identifier."""

    def __init__(self, client: TowerClient, urls: TowerApiUrls) -> None:
        self._client = client
        self._urls = urls

    async def resolve(self, template_name: str) -> str:
        response = await self._client.send("GET", self._urls.template_lookup(template_name))
        if response.status != 200:
            raise remote_error(response, f"Failed to look up job template '{template_name}'")

        results = response.json_field("results")
        if not isinstance(results, list) or not results:
            raise TemplateNotFound(template_name, diagnostic=f"results={results!r}")

        first = results[0]
        template_id = first.get("id") if isinstance(first, dict) else None
        if template_id is None:
            raise TemplateNotFound(template_name, diagnostic=f"first result has no id: {first!r}")

        if len(results) > 1:
            logger.warning(
                f"[template:resolve] {len(results)} templates named '{template_name}'; using id={template_id}"
            )
        logger.debug(f"[template:resolve] name='{template_name}' id={template_id}")
        return str(template_id)
