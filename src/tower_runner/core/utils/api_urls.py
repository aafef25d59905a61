from urllib.parse import quote


class TowerApiUrls:
    """Builds resource URIs of the orchestration service REST API.

    Pure string formatting: a malformed host is not validated here and
    surfaces later as a transport failure.
    """

    def __init__(self, host: str, api_prefix: str = "/api/v1") -> None:
        self.host = host.rstrip("/")
        self.api_prefix = api_prefix.rstrip("/")

    @property
    def base(self) -> str:
        return f"{self.host}{self.api_prefix}"

    def template_lookup(self, template_name: str) -> str:
        return f"{self.base}/job_templates/?name__exact={quote(template_name, safe='')}"

    def job_launch(self, template_id: str) -> str:
        return f"{self.base}/job_templates/{template_id}/launch/"

    def job(self, job_id: str) -> str:
        return f"{self.base}/jobs/{job_id}/"

    def job_events(self, job_id: str, page_size: int, page_number: int) -> str:
        return f"{self.base}/jobs/{job_id}/job_events/?page_size={page_size}&page={page_number}"

    def resolve_next(self, next_url: str) -> str:
        """Resolve a `next` pagination link, which the service sends host-relative."""
        if next_url.startswith("http://") or next_url.startswith("https://"):
            return next_url
        return f"{self.host}/{next_url.lstrip('/')}"
