# errors.py
from __future__ import annotations


class ConfigurationError(ValueError):
    """Raised when machine settings cannot build a working cipher.

    Every check happens while the machine is being assembled, so a message
    that starts enciphering always finishes.
    """
