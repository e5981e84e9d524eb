"""Bastion utilities: logging, settings, base models."""

from bastion_utils.base import MutableModel, StrictModel, WireModel
from bastion_utils.logging import get_logger
from bastion_utils.settings import Settings, get_settings

__all__ = [
    "MutableModel",
    "Settings",
    "StrictModel",
    "WireModel",
    "get_logger",
    "get_settings",
]
