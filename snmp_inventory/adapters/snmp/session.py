"""SNMP session parameters built from inventory descriptors."""

from dataclasses import dataclass, field
from typing import Any

from pysnmp.hlapi.v3arch.asyncio import (
    USM_AUTH_HMAC96_MD5,
    USM_AUTH_HMAC96_SHA,
    USM_PRIV_CBC56_DES,
    USM_PRIV_CFB128_AES,
    CommunityData,
    UsmUserData,
)

from snmp_inventory.core.config import Settings, settings
from snmp_inventory.core.models import (
    AuthenticationSettings,
    DeviceDescriptor,
    PrivacySettings,
)

SNMP_V2C = "2c"
SNMP_V3 = "3"

# Symbolic protocol names accepted in the inventory
AUTH_PROTOCOLS = {
    "SHA1": USM_AUTH_HMAC96_SHA,
    "MD5": USM_AUTH_HMAC96_MD5,
}
PRIV_PROTOCOLS = {
    "DES": USM_PRIV_CBC56_DES,
    "AES": USM_PRIV_CFB128_AES,
}

DEFAULT_AUTH_PROTOCOL = USM_AUTH_HMAC96_SHA
DEFAULT_PRIV_PROTOCOL = USM_PRIV_CBC56_DES


def resolve_auth_protocol(auth: AuthenticationSettings) -> tuple[int, ...]:
    """Map the authentication protocol name to its USM identifier.

    Unknown names fall back to HMAC-SHA.
    """
    return AUTH_PROTOCOLS.get(auth.protocol, DEFAULT_AUTH_PROTOCOL)


def resolve_priv_protocol(priv: PrivacySettings) -> tuple[int, ...]:
    """Map the privacy protocol name to its USM identifier.

    Unknown names fall back to DES.
    """
    return PRIV_PROTOCOLS.get(priv.protocol, DEFAULT_PRIV_PROTOCOL)


@dataclass(frozen=True)
class UsmSecurity:
    """SNMPv3 user-based security material for one session."""

    user_name: str = field(repr=False)
    auth_protocol: tuple[int, ...] | None = None
    auth_passphrase: str | None = field(default=None, repr=False)
    priv_protocol: tuple[int, ...] | None = None
    priv_passphrase: str | None = field(default=None, repr=False)


@dataclass(frozen=True)
class SessionParams:
    """Everything needed to open an SNMP session to one device."""

    target: str
    port: int
    timeout: float
    retries: int
    version: str
    community: str = field(repr=False)
    security: UsmSecurity | None = None

    def auth_data(self) -> Any:
        """Build the pysnmp credentials for this session."""
        if self.version != SNMP_V3:
            return CommunityData(self.community, mpModel=1)

        if self.security is None:
            return UsmUserData(self.community)

        kwargs: dict[str, Any] = {"userName": self.security.user_name}
        if self.security.auth_protocol is not None:
            kwargs["authProtocol"] = self.security.auth_protocol
            kwargs["authKey"] = self.security.auth_passphrase
        if self.security.priv_protocol is not None:
            kwargs["privProtocol"] = self.security.priv_protocol
            kwargs["privKey"] = self.security.priv_passphrase
        return UsmUserData(**kwargs)


def configure(
    descriptor: DeviceDescriptor, config: Settings | None = None
) -> SessionParams:
    """Build session parameters for a device.

    Never fails: bad settings only show up later when connecting or querying.
    Versions other than "3" use community-based v2c access.
    """
    config = config or settings
    snmp = descriptor.snmp
    version = SNMP_V3 if snmp.version == SNMP_V3 else SNMP_V2C

    security = None
    if version == SNMP_V3 and (snmp.authentication.active or snmp.privacy.active):
        auth_protocol = auth_passphrase = None
        priv_protocol = priv_passphrase = None

        if snmp.authentication.active:
            auth_protocol = resolve_auth_protocol(snmp.authentication)
            auth_passphrase = snmp.authentication.passphrase

        if snmp.privacy.active:
            priv_protocol = resolve_priv_protocol(snmp.privacy)
            priv_passphrase = snmp.privacy.passphrase

        security = UsmSecurity(
            user_name=snmp.community,
            auth_protocol=auth_protocol,
            auth_passphrase=auth_passphrase,
            priv_protocol=priv_protocol,
            priv_passphrase=priv_passphrase,
        )

    return SessionParams(
        target=descriptor.host,
        port=config.snmp_port,
        timeout=config.snmp_timeout,
        retries=config.snmp_retries,
        version=version,
        community=snmp.community,
        security=security,
    )
