"""Request building and response decoding."""
from .url_builder import URLBuilder, build, build_with_payload, with_retry, join
from .request_builder import RequestBuilder, FORM_CONTENT_TYPE
from .header_builder import HeaderBuilder, DEFAULT_HEADERS, DEFAULT_ORIGIN
from .response_handler import ResponseHandler, HttpResponse, parse
from .response_fields import remap_fields, pick

__all__ = [
    'URLBuilder',
    'build',
    'build_with_payload',
    'with_retry',
    'join',
    'RequestBuilder',
    'FORM_CONTENT_TYPE',
    'HeaderBuilder',
    'DEFAULT_HEADERS',
    'DEFAULT_ORIGIN',
    'ResponseHandler',
    'HttpResponse',
    'parse',
    'remap_fields',
    'pick',
]
