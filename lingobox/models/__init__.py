"""Shared models for Lingobox."""

from lingobox.models.base import LingoboxBaseModel
from lingobox.models.results import CopyResult


__all__ = ["LingoboxBaseModel", "CopyResult"]
