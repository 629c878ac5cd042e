"""Keep a host logged in to the SHU campus network gateway."""

__version__ = "0.1.0"
