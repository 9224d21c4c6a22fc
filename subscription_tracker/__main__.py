"""Run the API with Uvicorn: ``python -m subscription_tracker``.

Host, port and the graceful shutdown timeout come from ``Settings``
(``HOST``, ``PORT`` and ``HTTP_TIMEOUT``). On SIGINT/SIGTERM the server stops
accepting connections, waits for in-flight requests up to the timeout, and
the application lifespan then closes the database pool.
"""

from uvicorn import Config, Server

from .core.app_factory import create_application
from .core.config import Settings
from .core.logging import configure_logging, resolve_log_level


def main() -> None:
    settings = Settings()
    configure_logging(settings)
    config = Config(
        app=create_application(settings),
        host=settings.host,
        port=settings.port,
        log_level=resolve_log_level(settings).lower(),
        timeout_graceful_shutdown=settings.shutdown_timeout,
    )
    Server(config).run()


if __name__ == "__main__":
    main()
