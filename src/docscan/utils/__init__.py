"""Utility modules for docscan.

Provides:
- logger: get_logger for logging
"""

from docscan.utils.logger import get_logger

__all__ = ["get_logger"]
