"""
rvdisasm Shared Module
======================

Configuration, console and logging utilities shared by the rvdisasm
command-line front end and its analysis engine.
"""

from shared.config import RvConfig

__all__ = ["RvConfig"]
