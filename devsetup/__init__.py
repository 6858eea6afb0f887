"""devsetup — idempotent macOS developer workstation setup."""

__version__ = "0.1.0"
