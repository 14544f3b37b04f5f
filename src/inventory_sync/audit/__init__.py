"""
Audit module for the inventory sync system.

This module provides the structured logger shared by all components.
"""

from .logger import SyncLogger

__all__ = ["SyncLogger"]
