"""
Utility modules for the PALM Scheduling Assistant
"""

from .logger import AssistantLogger
from .validators import RequestValidator, DataSanitizer

__all__ = ['AssistantLogger', 'RequestValidator', 'DataSanitizer']
