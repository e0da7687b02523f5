"""Connectivity state reported by the host device."""

from dataclasses import dataclass


@dataclass
class DeviceConnectivity:
    """Online flag updated by the UI from the device's network events."""

    online: bool = True

    def is_online(self) -> bool:
        """Return True when the device reports network access."""
        return self.online

    def set_online(self, online: bool) -> None:
        """Record a network state change."""
        self.online = online
