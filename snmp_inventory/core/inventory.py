"""Device inventory loading."""

from pathlib import Path

import structlog
import yaml
from pydantic import BaseModel, Field, ValidationError

from snmp_inventory.core.exceptions import InventoryError
from snmp_inventory.core.models import DeviceDescriptor

logger = structlog.get_logger()


class Inventory(BaseModel):
    """Top-level layout of an inventory file."""

    devices: list[DeviceDescriptor] = Field(default_factory=list)


def parse_inventory(content: str) -> list[DeviceDescriptor]:
    """Parse inventory YAML into device descriptors."""
    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise InventoryError(f"unable to parse inventory: {e}") from e

    if not isinstance(data, dict):
        raise InventoryError("inventory must be a mapping with a 'devices' list")

    try:
        return Inventory.model_validate(data).devices
    except ValidationError as e:
        raise InventoryError(f"invalid inventory: {e}") from e


def load_inventory(path: str | Path) -> list[DeviceDescriptor]:
    """Read the inventory file at path."""
    path = Path(path)
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise InventoryError(f"unable to read inventory file {path}: {e}") from e

    devices = parse_inventory(content)
    logger.info("Inventory loaded", path=str(path), device_count=len(devices))
    return devices
