"""
Services package for the filess.io provider.

This package contains the resource lifecycle services:
- Provisioning: database create/read/update/delete and the provisioning wait
"""

__all__ = []
