"""DeedSeal - canonical deed records, property identifiers and sealed payloads."""

__version__ = "0.1.0"
__author__ = "DeedSeal Team"
__description__ = "Property identifier and payload encryption toolkit"

from . import lib

__all__ = ["lib"]
