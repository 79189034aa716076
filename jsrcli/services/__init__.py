"""Shared services for jsr-cli."""

from .jsr_service import JsrMetadataService, select_version

__all__ = ['JsrMetadataService', 'select_version']
