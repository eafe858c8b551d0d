"""Collider: build and manage Electron applications."""

__version__ = "0.1.0"
