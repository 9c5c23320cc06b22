"""Signature backends for artifactor"""

from .base import Signer
from .gpg import GpgSigner
from .factory import create_signer, register_signer, get_supported_signers

__all__ = [
    'Signer',
    'GpgSigner',
    'create_signer',
    'register_signer',
    'get_supported_signers',
]
