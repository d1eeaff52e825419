"""Main entry point for SNMP Inventory."""

import asyncio
import sys

import structlog
import uvicorn

from snmp_inventory.api.app import create_app
from snmp_inventory.core.config import settings
from snmp_inventory.core.exceptions import InventoryError
from snmp_inventory.core.inventory import load_inventory
from snmp_inventory.core.logging import configure_logging
from snmp_inventory.core.scanner import FleetScanner

logger = structlog.get_logger()


async def scan_once(inventory_file: str) -> bytes:
    """Scan the inventory once and return the fleet as JSON."""
    devices = load_inventory(inventory_file)
    result = await FleetScanner().scan(devices)
    return result.fleet.to_json()


def serve() -> None:
    """Run the HTTP API."""
    logger.info(
        "Starting SNMP Inventory",
        version="0.1.0",
        api_port=settings.api_port,
        log_level=settings.log_level,
    )

    uvicorn.run(
        create_app(),
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


def main() -> None:
    """Main entry point."""
    configure_logging()
    command = sys.argv[1] if len(sys.argv) > 1 else "serve"

    if command == "serve":
        serve()
    elif command == "scan":
        inventory_file = sys.argv[2] if len(sys.argv) > 2 else settings.inventory_file
        try:
            snapshot = asyncio.run(scan_once(inventory_file))
        except InventoryError as e:
            logger.error("Fatal error", error=str(e))
            sys.exit(1)
        sys.stdout.write(snapshot.decode("utf-8") + "\n")
    else:
        sys.stderr.write(f"usage: {sys.argv[0]} [serve | scan [INVENTORY]]\n")
        sys.exit(2)


if __name__ == "__main__":
    main()
