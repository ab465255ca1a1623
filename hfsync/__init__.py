"""
hfsync - a polling file-synchronization client with throttled downloads.
"""

__version__ = "0.3.0"
