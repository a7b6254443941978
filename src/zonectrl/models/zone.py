"""Zone model representing a single audio output area."""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

_VOLUME_MIN = -80
_VOLUME_MAX = 0


@dataclass(frozen=True, slots=True)
class Zone:
    """A zone (room or amplifier output) of the audio system.

    Attributes:
        id: Unique positive zone identifier from the controller.
        name: Human-readable zone name (empty string if unset).
        muted: Whether zone audio is muted.
        volume: Volume level in dB, -80 to 0.
        source_id: Identifier of the selected source (0 if none).
    """

    id: int
    name: str = ""
    muted: bool = False
    volume: int = -40
    source_id: int = 0

    def __post_init__(self) -> None:
        """Validate and clamp volume to the controller's range."""
        if self.volume < _VOLUME_MIN or self.volume > _VOLUME_MAX:
            clamped = max(_VOLUME_MIN, min(_VOLUME_MAX, self.volume))
            logger.warning(
                "Zone %d volume %d out of range, clamped to %d",
                self.id,
                self.volume,
                clamped,
            )
            object.__setattr__(self, "volume", clamped)

    @property
    def display_name(self) -> str:
        """Return name or a numbered fallback for display."""
        return self.name or f"Zone {self.id}"
