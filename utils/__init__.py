"""
Utilities Package
Logging setup shared by tasks and scripts
"""

from .logger import setup_logging

__all__ = ['setup_logging']
