"""SNMP poller for device identity and firmware versions."""

from collections.abc import Callable
from typing import Any

import structlog
from pysnmp.hlapi.v3arch.asyncio import (
    ContextData,
    ObjectIdentity,
    ObjectType,
    SnmpEngine,
    UdpTransportTarget,
    get_cmd,
)
from pysnmp.proto.rfc1905 import EndOfMibView, NoSuchInstance, NoSuchObject

from snmp_inventory.adapters.snmp.session import SessionParams, configure
from snmp_inventory.core.exceptions import (
    ConnectError,
    QueryError,
    SNMPRequestError,
    ValueDecodeError,
)
from snmp_inventory.core.models import DeviceDescriptor, DeviceRecord, SNMPSettings

logger = structlog.get_logger()

# MikroTik and MIB-2 system OIDs queried in every poll
OID_ROUTEROS_VERSION = ".1.3.6.1.4.1.14988.1.1.4.4.0"
OID_BOOTLOADER_VERSION = ".1.3.6.1.4.1.14988.1.1.7.4.0"
OID_LATEST_VERSION = ".1.3.6.1.4.1.14988.1.1.7.7.0"
OID_SYS_DESCR = ".1.3.6.1.2.1.1.1.0"
OID_SYS_NAME = ".1.3.6.1.2.1.1.5.0"

# Product family name removed from sysDescr to get the model
PRODUCT_FAMILY = "RouterOS"


def _set_routeros(record: DeviceRecord, text: str) -> None:
    record.version.routeros = text


def _set_latest(record: DeviceRecord, text: str) -> None:
    record.version.latest = text


def _set_bootloader(record: DeviceRecord, text: str) -> None:
    record.version.bootloader = text


def _set_model(record: DeviceRecord, text: str) -> None:
    # Surrounding whitespace is kept: "RouterOS RB1100" -> " RB1100"
    record.model = text.replace(PRODUCT_FAMILY, "", 1)


def _set_name(record: DeviceRecord, text: str) -> None:
    record.name = text


DEVICE_OIDS: dict[str, Callable[[DeviceRecord, str], None]] = {
    OID_ROUTEROS_VERSION: _set_routeros,
    OID_BOOTLOADER_VERSION: _set_bootloader,
    OID_LATEST_VERSION: _set_latest,
    OID_SYS_DESCR: _set_model,
    OID_SYS_NAME: _set_name,
}


def normalize_oid(oid: str) -> str:
    """Return the OID in dotted form with a leading dot."""
    return oid if oid.startswith(".") else f".{oid}"


def decode_text(value: Any) -> str:
    """Decode an SNMP octet string value as UTF-8 text."""
    if isinstance(value, NoSuchObject | NoSuchInstance | EndOfMibView):
        raise ValueDecodeError(f"no value: {value.prettyPrint()}")
    if isinstance(value, bytes | bytearray):
        raw = bytes(value)
    elif hasattr(value, "asOctets"):
        raw = value.asOctets()
    else:
        raise ValueDecodeError(f"not an octet string: {type(value).__name__}")

    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ValueDecodeError(f"not valid UTF-8 text: {e}") from e


class SNMPSession:
    """One SNMP session bound to a single device.

    Sessions are never shared: every poll builds its own engine and
    transport from its own parameters.
    """

    def __init__(self, params: SessionParams) -> None:
        self.params = params
        self._engine: SnmpEngine | None = None
        self._transport: UdpTransportTarget | None = None

    async def connect(self) -> None:
        """Resolve the UDP transport target, then set up the engine."""
        self._transport = await UdpTransportTarget.create(
            (self.params.target, self.params.port),
            timeout=self.params.timeout,
            retries=self.params.retries,
        )
        self._engine = SnmpEngine()

    async def get(self, oids: list[str]) -> list[tuple[str, Any]]:
        """Issue a single GET for all OIDs and return (oid, value) pairs."""
        if self._engine is None or self._transport is None:
            raise SNMPRequestError("session is not connected")

        error_indication, error_status, error_index, var_binds = await get_cmd(
            self._engine,
            self.params.auth_data(),
            self._transport,
            ContextData(),
            *[ObjectType(ObjectIdentity(oid.lstrip("."))) for oid in oids],
        )

        if error_indication:
            raise SNMPRequestError(str(error_indication))
        if error_status:
            raise SNMPRequestError(f"{error_status.prettyPrint()} at {error_index}")

        return [(str(var_bind[0]), var_bind[1]) for var_bind in var_binds]

    def close(self) -> None:
        """Release the engine's transport dispatcher."""
        if self._engine is not None:
            self._engine.close_dispatcher()
            self._engine = None
        self._transport = None


SessionFactory = Callable[[SessionParams], SNMPSession]


class DevicePoller:
    """Polls one device per call and maps the answer into its record."""

    def __init__(self, session_factory: SessionFactory = SNMPSession) -> None:
        self._session_factory = session_factory

    async def poll(self, record: DeviceRecord, params: SessionParams) -> DeviceRecord:
        """Poll a device and fill in its record.

        Raises ConnectError or QueryError; in both cases the record is left
        unreached.
        """
        logger.info("Polling device", host=record.host, version=params.version)
        session = self._session_factory(params)

        try:
            await session.connect()
        except Exception as e:
            logger.warning("SNMP connect failed", host=record.host, error=str(e))
            raise ConnectError(record.host, str(e)) from e

        try:
            try:
                var_binds = await session.get(list(DEVICE_OIDS))
            except Exception as e:
                logger.warning("SNMP request failed", host=record.host, error=str(e))
                raise QueryError(record.host, str(e)) from e

            record.reached = True
            self._map_values(record, var_binds)
        finally:
            self._close(session, record.host)

        logger.debug(
            "Device poll complete",
            host=record.host,
            name=record.name,
            routeros=record.version.routeros,
        )
        return record

    def _map_values(self, record: DeviceRecord, var_binds: list[tuple[str, Any]]) -> None:
        for oid, value in var_binds:
            oid = normalize_oid(oid)
            setter = DEVICE_OIDS.get(oid)

            if setter is None:
                logger.info(
                    "Ignoring unexpected OID",
                    host=record.host,
                    oid=oid,
                    value=str(value),
                )
                continue

            try:
                text = decode_text(value)
            except ValueDecodeError as e:
                logger.warning(
                    "Could not decode SNMP value",
                    host=record.host,
                    oid=oid,
                    error=str(e),
                )
                continue

            setter(record, text)

    def _close(self, session: SNMPSession, host: str) -> None:
        try:
            session.close()
        except Exception as e:
            logger.warning("Error closing SNMP session", host=host, error=str(e))


# Convenience function for quick polling
async def quick_poll(
    host: str,
    community: str = "public",
    version: str = "2c",
) -> DeviceRecord:
    """Poll a single device given only its host and community."""
    descriptor = DeviceDescriptor(
        host=host, snmp=SNMPSettings(version=version, community=community)
    )
    record = DeviceRecord.from_descriptor(descriptor)
    return await DevicePoller().poll(record, configure(descriptor))
