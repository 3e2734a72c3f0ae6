"""Mochow vector database Python SDK."""

from .auth import Credentials, SignOptions, Signer
from .client import MochowClient
from .config import ClientConfiguration, Protocol, SDK_VERSION
from .exceptions import ErrorType, MochowClientError, MochowServiceError
from .retry import DefaultRetryPolicy, RetryPolicy

__version__ = SDK_VERSION

__all__ = [
    "ClientConfiguration",
    "Credentials",
    "DefaultRetryPolicy",
    "ErrorType",
    "MochowClient",
    "MochowClientError",
    "MochowServiceError",
    "Protocol",
    "RetryPolicy",
    "SignOptions",
    "Signer",
]
