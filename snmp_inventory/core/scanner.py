"""Fleet scanner - polls every inventory device once."""

import asyncio
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timezone

import structlog

from snmp_inventory.adapters.snmp.poller import DevicePoller
from snmp_inventory.adapters.snmp.session import configure
from snmp_inventory.core.config import Settings, settings
from snmp_inventory.core.exceptions import PollError
from snmp_inventory.core.models import DeviceDescriptor, DeviceRecord, Fleet

logger = structlog.get_logger()


@dataclass
class ScanResult:
    """Outcome of one fleet scan."""

    fleet: Fleet
    errors: list[PollError] = field(default_factory=list)
    started_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def reached_count(self) -> int:
        return sum(1 for record in self.fleet if record.reached)

    def error_summary(self) -> list[dict[str, str]]:
        """Errors as plain dicts, without credentials."""
        return [
            {"host": error.host, "kind": error.kind, "error": error.reason}
            for error in self.errors
        ]


class FleetScanner:
    """Polls a list of devices with a bounded number of open sessions."""

    def __init__(
        self,
        poller: DevicePoller | None = None,
        config: Settings | None = None,
        concurrency: int | None = None,
    ) -> None:
        self.config = config or settings
        self.poller = poller or DevicePoller()
        self.concurrency = max(1, concurrency or self.config.poll_concurrency)

    async def scan(self, descriptors: Sequence[DeviceDescriptor]) -> ScanResult:
        """Poll every device once and return a fresh snapshot.

        Records keep the order of descriptors regardless of which poll
        finishes first. Failed devices stay in the fleet as unreached.
        """
        started_at = datetime.now(timezone.utc)
        records = [DeviceRecord.from_descriptor(d) for d in descriptors]
        outcomes: list[PollError | None] = [None] * len(records)
        semaphore = asyncio.Semaphore(self.concurrency)

        logger.info(
            "Starting fleet scan",
            device_count=len(records),
            concurrency=self.concurrency,
        )

        async def poll_one(index: int) -> None:
            async with semaphore:
                params = configure(descriptors[index], self.config)
                try:
                    await self.poller.poll(records[index], params)
                except PollError as e:
                    logger.error("Device poll failed", host=e.host, error=e.reason)
                    outcomes[index] = e

        await asyncio.gather(*(poll_one(i) for i in range(len(records))))

        result = ScanResult(
            fleet=Fleet([record.freeze() for record in records]),
            errors=[e for e in outcomes if e is not None],
            started_at=started_at,
        )
        logger.info(
            "Fleet scan complete",
            device_count=len(records),
            reached=result.reached_count,
            failed=len(result.errors),
        )
        return result

