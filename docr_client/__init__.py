from docr_client._version import version as __version__
from docr_client.client import Client
from docr_client.errors import APIError, DecodeError, RegistryClientError
from docr_client.registry import RegistryService
from docr_client.response import ListOptions, Response

__all__ = [
    "Client",
    "RegistryService",
    "Response",
    "ListOptions",
    "RegistryClientError",
    "APIError",
    "DecodeError",
]
