"""
Backend detection, provider construction and the provider façade.
"""

from .detection import detect_backend
from .factory import create_provider, create_provider_from_descriptor, supported_backends
from .provider import BACKENDS, BackendSpec, DatabaseProvider

__all__ = [
    "BACKENDS",
    "BackendSpec",
    "DatabaseProvider",
    "create_provider",
    "create_provider_from_descriptor",
    "detect_backend",
    "supported_backends",
]
