"""Simple CLI to validate the database and Xray API connections.

This adapter is meant for local operations: it instantiates the concrete
adapters from the infrastructure layer and runs a basic health check against
the accounts database and the Xray API listener.
"""

import dotenv

from src.infrastructure.container import (
    build_control_plane,
    build_database_adapter,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import ProxySyncSettings


def main() -> None:
    """Run basic connectivity checks against configured services."""
    dotenv.load_dotenv()
    settings = ProxySyncSettings.from_env()
    adapter = build_database_adapter()
    logger = get_app_logger()

    accounts_engine = adapter.get_accounts_engine()
    logger.info(f"Accounts DB: {accounts_engine.url}")
    with accounts_engine.connect() as conn:
        conn.exec_driver_sql("SELECT 1")

    control_plane = build_control_plane(settings)
    try:
        counters = control_plane.ping()
    finally:
        control_plane.close()
    logger.info(f"Xray API: {settings.api_target} ({counters} counters)")

    logger.info("Both connections are working.")


if __name__ == "__main__":
    main()
