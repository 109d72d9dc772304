"""
Service layer for mirror operations.

This package provides high-level business logic services that abstract
complex operations and coordinate between multiple components.
"""

from .mirror_service import MirrorService

__all__ = ["MirrorService"]
