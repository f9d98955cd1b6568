"""External integration adapters."""

from .authorize_net import AuthorizeNetClient

__all__ = [
    "AuthorizeNetClient",
]
