"""
Agent Health - Fleet Control Health Reporting
Main entry point: runs the agent process with health reporting enabled.
"""

import asyncio
import signal

import structlog
from dotenv import load_dotenv

# Load environment variables
load_dotenv(".env.local")

from agent_health.config import get_settings  # noqa: E402
from agent_health.infrastructure.health import (  # noqa: E402
    HealthReporter,
    create_health_reporter,
)
from agent_health.logging_config import configure_logging  # noqa: E402

logger = structlog.get_logger(__name__)


async def run_agent() -> None:
    """Run until SIGINT/SIGTERM, then write the final health record."""
    settings = get_settings()
    reporter = create_health_reporter(settings.health)

    stop_event = asyncio.Event()
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        loop.add_signal_handler(sig, stop_event.set)

    logger.info(
        "agent_started",
        app=settings.app.name,
        environment=settings.app.env,
        health_reporting=reporter.enabled,
        health_file=str(reporter.destination_path) if reporter.enabled else None,
    )

    await stop_event.wait()

    shutdown_agent(reporter)


def shutdown_agent(reporter: HealthReporter) -> None:
    """
    Write the final health record.

    stop() swaps a healthy status for the shutdown code itself, so a clean
    exit is reported as healthy and a failure keeps its own code.
    """
    logger.info("agent_shutting_down", last_status=reporter.current_status)
    reporter.stop()


def main():
    """Main entry point."""
    configure_logging(get_settings().app.log_level)
    asyncio.run(run_agent())


if __name__ == "__main__":
    main()
