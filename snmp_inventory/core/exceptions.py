"""Error types raised while loading inventories and polling devices."""


class InventoryError(Exception):
    """The inventory file could not be read or does not describe devices."""


class PollError(Exception):
    """A single device could not be polled.

    Poll errors are per device: the fleet scanner records them and carries
    on with the remaining devices.
    """

    kind = "poll"

    def __init__(self, host: str, reason: str) -> None:
        self.host = host
        self.reason = reason
        super().__init__(f"{host}: {reason}")


class ConnectError(PollError):
    """The SNMP transport to the device could not be set up."""

    kind = "connect"

    def __init__(self, host: str, reason: str) -> None:
        super().__init__(host, f"connect failed: {reason}")


class QueryError(PollError):
    """The batch GET failed after the transport was set up."""

    kind = "query"

    def __init__(self, host: str, reason: str) -> None:
        super().__init__(host, f"SNMP request failed: {reason}")


class ValueDecodeError(ValueError):
    """A returned SNMP value is not an octet string holding text."""


class SNMPRequestError(Exception):
    """The agent answered a GET with an error, or did not answer at all."""
