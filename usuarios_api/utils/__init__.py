"""
Utilidades para Usuarios API
"""

from .security import (
    hash_password,
    verify_password,
    create_access_token,
    decode_token,
    generate_token_id,
    hash_token_id,
)
from .logger import setup_logger

__all__ = [
    'hash_password',
    'verify_password',
    'create_access_token',
    'decode_token',
    'generate_token_id',
    'hash_token_id',
    'setup_logger',
]
