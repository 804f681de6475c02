"""
Asset Management System - server configuration.

This package contains:
- config: Environment-driven configuration snapshot and accessors
- api: FastAPI dependencies and routes that read the snapshot
"""

__version__ = "0.1.0"
