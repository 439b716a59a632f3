"""
API package - request boundary layer.

This package provides:
- Query param models and the @api_contract decorator
- Global middleware (request_id, error_envelope, request_logging)
"""

from .contracts import api_contract

__all__ = ['api_contract']
