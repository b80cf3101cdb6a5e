"""
JPEG Files API services

Request-independent orchestration over the object store and the metadata store.
"""

from .file_service import FileService

__all__ = ['FileService']
