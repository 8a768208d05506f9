"""
roomcheck - check meeting room availability against free/busy data.
"""

__version__ = "0.1.0"
