"""Device-related data models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class DeviceEndpoint:
    """SSH endpoint of a single network device.

    Supplied fresh by the caller on every operation; nothing is pooled.
    """

    address: str
    username: str
    password: str = field(repr=False)
    port: int = 22

    @property
    def label(self) -> str:
        """Short identifier for log lines."""
        return f"{self.username}@{self.address}:{self.port}"


@dataclass(frozen=True)
class DeviceFacts:
    """Flattened `show system information` reply."""

    hardware_model: str
    os_name: str
    os_version: str
    serial_number: str
    host_name: str

    def to_dict(self) -> dict[str, str]:
        """Convert to the camelCase mapping used by inventory callers."""
        return {
            "hardwareModel": self.hardware_model,
            "osName": self.os_name,
            "osVersion": self.os_version,
            "serialNumber": self.serial_number,
            "hostName": self.host_name,
        }
