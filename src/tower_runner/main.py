# main.py
import asyncio
import sys
from typing import Optional

from pydantic import ValidationError

from tower_runner.adapters.aiohttp_client_adapter import AioHttpClientAdapter
from tower_runner.adapters.console_output_adapter import ConsoleOutputAdapter
from tower_runner.adapters.pipeline_result_adapter import PipelineResultAdapter
from tower_runner.adapters.retry_tenacity import TenacityRetryAdapter
from tower_runner.core.config import JobRunnerConfig, TowerConnection
from tower_runner.core.exceptions import ConfigurationError
from tower_runner.core.interfaces.http_client import HttpClientPort
from tower_runner.core.interfaces.output_sink import OutputSinkPort
from tower_runner.core.interfaces.result_reporter import ResultReporterPort
from tower_runner.core.interfaces.retry import RetryPort
from tower_runner.core.logging_config import configure_logging
from tower_runner.core.managers.event_fetcher import EventPageFetcher
from tower_runner.core.managers.job_launcher import JobLauncher
from tower_runner.core.managers.job_poller import JobPoller
from tower_runner.core.managers.job_resolver import JobResolver
from tower_runner.core.managers.job_runner import JobRunner
from tower_runner.core.managers.tower_client import TowerClient
from tower_runner.core.settings import TowerSettings, logger
from tower_runner.core.utils.api_urls import TowerApiUrls


# main lives at the outermost layer (not in core)
# Instantiates all the concrete adapters
# Wires dependencies together
# Runs the job

def build_job_runner(
    http_client: HttpClientPort,
    connection: TowerConnection,
    config: JobRunnerConfig,
    sink: OutputSinkPort,
    reporter: ResultReporterPort,
) -> JobRunner:
    retry_adapter: Optional[RetryPort] = None
    if config.transport_max_attempts > 1:
        retry_adapter = TenacityRetryAdapter(
            attempts=config.transport_max_attempts,
            wait_initial=config.transport_retry_base_wait,
            wait_max=config.transport_retry_max_wait,
        )
    client = TowerClient(http_client, connection, config, retry_port=retry_adapter)
    urls = TowerApiUrls(connection.url, config.api_prefix)
    fetcher = EventPageFetcher(client, urls, config)
    return JobRunner(
        resolver=JobResolver(client, urls),
        launcher=JobLauncher(client, urls),
        poller=JobPoller(client, urls, fetcher, sink, config),
        reporter=reporter,
    )


def describe_validation_error(exc: ValidationError) -> str:
    return "; ".join(f"{'.'.join(map(str, e['loc']))}: {e['msg']}" for e in exc.errors())


def load_inputs(settings: TowerSettings) -> tuple[TowerConnection, JobRunnerConfig, str]:
    """Validate the pipeline inputs; raise ConfigurationError on anything missing."""
    try:
        connection = TowerConnection.from_app_settings(settings)
        config = JobRunnerConfig.from_app_settings(settings)
    except ValidationError as exc:
        raise ConfigurationError(
            describe_validation_error(exc),
            diagnostic=str(exc),
        ) from exc
    template_name = settings.TOWER_JOB_TEMPLATE_NAME.strip()
    if not template_name:
        raise ConfigurationError("TOWER_JOB_TEMPLATE_NAME: job template name is required")
    return connection, config, template_name


async def run(
    settings: TowerSettings,
    reporter: ResultReporterPort,
    sink: Optional[OutputSinkPort] = None,
) -> Optional[str]:
    try:
        connection, config, template_name = load_inputs(settings)
    except ConfigurationError as exc:
        logger.error(f"[config] {exc.message}")
        reporter.report_failure(f"Failed to initialize: {exc.message}")
        return None

    async with AioHttpClientAdapter(timeout=config.request_timeout) as http_client:
        job_runner = build_job_runner(
            http_client, connection, config, sink or ConsoleOutputAdapter(), reporter
        )
        return await job_runner.run(template_name)


def main(reporter: Optional[PipelineResultAdapter] = None) -> int:
    reporter = reporter or PipelineResultAdapter()
    try:
        settings = TowerSettings()
    except ValidationError as exc:
        configure_logging()
        message = describe_validation_error(exc)
        logger.error(f"[config] {message}")
        reporter.report_failure(f"Failed to initialize: {message}")
        return reporter.exit_code

    configure_logging(settings.TOWER_LOG_LEVEL)
    settings.print_settings(logger)

    try:
        asyncio.run(run(settings, reporter))
    except Exception as exc:
        # last resort: the pipeline must always receive an outcome
        logger.error(f"[main] unexpected error: {exc!r}")
        reporter.report_failure(str(exc) or type(exc).__name__)
    return reporter.exit_code


def cli() -> None:
    sys.exit(main())


if __name__ == "__main__":
    cli()
