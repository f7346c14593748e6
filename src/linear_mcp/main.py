"""Process entrypoint for the Linear MCP server."""

import asyncio
import logging

from .auth import LinearAuth
from .config import get_settings
from .graphql.http_client import close_http_client
from .observability.logging import configure_logging
from .server import LinearMCPServer

logger = logging.getLogger(__name__)


async def serve() -> None:
    """Configure logging, open the Linear session, and serve over stdio."""
    settings = get_settings()

    configure_logging(
        environment=settings.environment,
        log_level=settings.get_log_level(),
    )

    auth = LinearAuth.from_settings(settings)
    server = LinearMCPServer(auth, settings)

    logger.info("%s v%s starting (environment=%s)", settings.app_name, settings.app_version, settings.environment)
    try:
        await server.run_stdio()
    finally:
        await close_http_client()
        logger.info("%s stopped", settings.app_name)


def run() -> None:
    """Console script entrypoint."""
    asyncio.run(serve())


if __name__ == "__main__":
    run()
