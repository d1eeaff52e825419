"""Fleet scan endpoints."""

from typing import Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Request

from snmp_inventory.core.config import settings
from snmp_inventory.core.exceptions import InventoryError
from snmp_inventory.core.inventory import load_inventory
from snmp_inventory.core.models import DeviceDescriptor
from snmp_inventory.core.scanner import FleetScanner, ScanResult

logger = structlog.get_logger()
router = APIRouter()


def get_scanner() -> FleetScanner:
    """Scanner used by the scan endpoints."""
    return FleetScanner()


def get_devices() -> list[DeviceDescriptor]:
    """Devices from the configured inventory file."""
    try:
        return load_inventory(settings.inventory_file)
    except InventoryError as e:
        logger.error("Inventory unavailable", error=str(e))
        raise HTTPException(status_code=500, detail=str(e)) from e


def _scan_response(result: ScanResult) -> dict[str, Any]:
    return {
        "started_at": result.started_at.isoformat(),
        "device_count": len(result.fleet),
        "reached": result.reached_count,
        "devices": result.fleet.model_dump(mode="json"),
        "errors": result.error_summary(),
    }


@router.get("/inventory")
async def list_inventory(devices: list[DeviceDescriptor] = Depends(get_devices)) -> dict:
    """List inventory devices without credentials."""
    return {
        "count": len(devices),
        "devices": [device.model_dump(mode="json") for device in devices],
    }


@router.post("/scan")
async def run_scan(
    request: Request,
    devices: list[DeviceDescriptor] = Depends(get_devices),
    scanner: FleetScanner = Depends(get_scanner),
) -> dict:
    """Poll every inventory device once and return the snapshot."""
    result = await scanner.scan(devices)
    request.app.state.latest_scan = result
    return _scan_response(result)


@router.get("/scan/latest")
async def latest_scan(request: Request) -> dict:
    """Return the snapshot of the most recent scan."""
    result = request.app.state.latest_scan
    if result is None:
        raise HTTPException(status_code=404, detail="No scan has run yet")
    return _scan_response(result)
