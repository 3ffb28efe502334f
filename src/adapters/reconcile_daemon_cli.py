"""CLI adapter running the account synchronization daemon.

This module wires the reconciliation loop to the concrete database and Xray
adapters and runs it until interrupted.
"""

import dotenv

from src.infrastructure.container import (
    build_control_plane,
    build_database_adapter,
    build_reconcile_loop,
)
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.settings import ProxySyncSettings


def main() -> None:
    """Run the reconciliation loop forever."""
    dotenv.load_dotenv()
    logger = get_app_logger()
    settings = ProxySyncSettings.from_env()

    db_adapter = build_database_adapter()
    with db_adapter.get_accounts_engine().connect() as conn:
        conn.exec_driver_sql("SELECT 1")
    control_plane = build_control_plane(settings)
    control_plane.wait_until_ready(settings.rpc_timeout_seconds)

    logger.info(
        f"Starting account sync against {settings.api_target} "
        f"(inbound={settings.inbound_tag}, "
        f"interval={settings.interval_seconds}s, "
        f"snapshot={settings.snapshot_path})"
    )
    loop = build_reconcile_loop(
        settings,
        control_plane,
        db_port=db_adapter,
        logger=logger,
    )
    try:
        loop.run()
    except KeyboardInterrupt:
        logger.info("Account sync interrupted, shutting down")
    finally:
        control_plane.close()


if __name__ == "__main__":  # pragma: no cover
    main()
