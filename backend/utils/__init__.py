"""Utilities Package"""
from .http_client import get_httpx_client_kwargs, sarvam_headers

__all__ = [
    "get_httpx_client_kwargs",
    "sarvam_headers",
]
