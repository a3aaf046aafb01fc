"""
Restspace

API request collections stored as a plain directory tree: one file per
request (``<name>.<METHOD>``), folders as directories.
"""

__version__ = "0.1.0"
