"""SNMP adapter for polling device identity and firmware versions."""

from snmp_inventory.adapters.snmp.poller import (
    DEVICE_OIDS,
    DevicePoller,
    SNMPSession,
    decode_text,
    quick_poll,
)
from snmp_inventory.adapters.snmp.session import (
    SessionParams,
    UsmSecurity,
    configure,
    resolve_auth_protocol,
    resolve_priv_protocol,
)

__all__ = [
    "DevicePoller",
    "SNMPSession",
    "SessionParams",
    "UsmSecurity",
    "DEVICE_OIDS",
    "configure",
    "decode_text",
    "quick_poll",
    "resolve_auth_protocol",
    "resolve_priv_protocol",
]
