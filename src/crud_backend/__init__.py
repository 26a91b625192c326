"""
Users/Posts CRUD backend: versioned REST API over a pluggable record store
"""

__version__ = "1.0.0"
