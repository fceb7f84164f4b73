"""
SlipEX Processors Module

Contains the processing stages:
- Base processing framework
- Tax document classification, extraction and validation
"""

from . import base
from . import tax

__all__ = ['base', 'tax']
