"""Core data models."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, RootModel, field_validator


class AuthenticationSettings(BaseModel):
    """SNMPv3 authentication block of a device."""

    model_config = ConfigDict(frozen=True)

    active: bool = False
    protocol: str = Field(default="", exclude=True, repr=False)
    passphrase: str = Field(default="", exclude=True, repr=False)


class PrivacySettings(BaseModel):
    """SNMPv3 privacy block of a device."""

    model_config = ConfigDict(frozen=True)

    active: bool = False
    protocol: str = Field(default="", exclude=True, repr=False)
    passphrase: str = Field(default="", exclude=True, repr=False)


class SNMPSettings(BaseModel):
    """SNMP access settings of a device.

    The community doubles as the SNMPv3 user name. Community, protocol names
    and passphrases are excluded from every dump of the model.
    """

    model_config = ConfigDict(frozen=True)

    version: str = "2c"
    community: str = Field(default="public", exclude=True, repr=False)
    authentication: AuthenticationSettings = Field(default_factory=AuthenticationSettings)
    privacy: PrivacySettings = Field(default_factory=PrivacySettings)

    @field_validator("version", mode="before")
    @classmethod
    def _version_as_text(cls, value: Any) -> Any:
        # YAML reads `version: 3` as an integer
        if isinstance(value, int | float):
            return str(value)
        return value


class DeviceDescriptor(BaseModel):
    """One device entry of the inventory."""

    model_config = ConfigDict(frozen=True)

    host: str
    snmp: SNMPSettings = Field(default_factory=SNMPSettings)


class DeviceVersion(BaseModel):
    """Firmware versions reported by a device."""

    routeros: str = ""
    bootloader: str = ""
    latest: str = ""


class DeviceRecord(BaseModel):
    """Polled state of a single device."""

    reached: bool = False
    host: str
    model: str = ""
    name: str = ""
    snmp: SNMPSettings = Field(default_factory=SNMPSettings)
    version: DeviceVersion = Field(default_factory=DeviceVersion)

    @classmethod
    def from_descriptor(cls, descriptor: DeviceDescriptor) -> "DeviceRecord":
        """Create an unreached record for a descriptor."""
        return cls(host=descriptor.host, snmp=descriptor.snmp)

    def freeze(self) -> "FrozenDeviceRecord":
        """Return a read-only copy once polling is over."""
        return FrozenDeviceRecord(
            reached=self.reached,
            host=self.host,
            model=self.model,
            name=self.name,
            snmp=self.snmp,
            version=FrozenDeviceVersion(**self.version.model_dump()),
        )


class FrozenDeviceVersion(DeviceVersion):
    model_config = ConfigDict(frozen=True)


class FrozenDeviceRecord(DeviceRecord):
    """Device record as published in a fleet snapshot."""

    model_config = ConfigDict(frozen=True)

    version: FrozenDeviceVersion = Field(default_factory=FrozenDeviceVersion)


class Fleet(RootModel[list[DeviceRecord]]):
    """Device records of one scan, in inventory order."""

    root: list[DeviceRecord] = Field(default_factory=list)

    def __iter__(self):
        return iter(self.root)

    def __len__(self) -> int:
        return len(self.root)

    def __getitem__(self, index: int) -> DeviceRecord:
        return self.root[index]

    def to_json(self) -> bytes:
        """Serialize the fleet as a JSON array."""
        return self.model_dump_json().encode("utf-8")
