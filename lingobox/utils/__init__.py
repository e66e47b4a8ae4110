"""Utility functions shared across Lingobox."""

from lingobox.utils.error_utils import create_file_error


__all__ = ["create_file_error"]
