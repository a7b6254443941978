"""Controller connection model."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class Controller:
    """Audio controller connection info.

    Attributes:
        name: Human-readable name for this controller.
        host: Controller hostname or IP address.
        port: TCP port (default 23).
    """

    name: str
    host: str
    port: int = 23

    @property
    def address(self) -> str:
        """Return the controller address (host:port)."""
        return f"{self.host}:{self.port}"
