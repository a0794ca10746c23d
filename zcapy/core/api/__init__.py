"""Zalo API pipeline: service resolution, URLs, transport and client."""
from .client import AsyncAPIClient
from .config import APIConfig, ProxyConfig, SSLConfig, TimeoutConfig
from .service_resolver import ServiceResolver, resolve, must_resolve, available_services
from .transport import AsyncTransport
from .request import (
    URLBuilder,
    RequestBuilder,
    HeaderBuilder,
    ResponseHandler,
    HttpResponse,
    remap_fields,
    pick,
)
from . import validation

__all__ = [
    # Client
    'AsyncAPIClient',
    'AsyncTransport',

    # Pipeline
    'ServiceResolver',
    'resolve',
    'must_resolve',
    'available_services',
    'URLBuilder',
    'RequestBuilder',
    'HeaderBuilder',
    'ResponseHandler',
    'HttpResponse',
    'remap_fields',
    'pick',
    'validation',

    # Configuration
    'APIConfig',
    'ProxyConfig',
    'SSLConfig',
    'TimeoutConfig',
]
