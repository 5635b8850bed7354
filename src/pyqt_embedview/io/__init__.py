"""Manifest file IO."""

from .manifest_file import JsonManifest

__all__ = ["JsonManifest"]
