"""ZoneCtrl - preferences and sort core for a multi-zone audio controller."""

__version__ = "0.3.0"
