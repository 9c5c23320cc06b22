"""Signer factory"""

from typing import Dict, Type, Any

from .base import Signer
from .gpg import GpgSigner
from ..api.exceptions import ConfigurationError

_signers: Dict[str, Type[Signer]] = {
    GpgSigner.name: GpgSigner,
}


def register_signer(name: str, signer_class: Type[Signer]) -> None:
    """Register an alternative signing backend under ``name``"""
    _signers[name] = signer_class


def get_supported_signers() -> list[str]:
    return sorted(_signers)


def create_signer(name: str, **kwargs: Any) -> Signer:
    """
    Create a signer by name

    Args:
        name: Registered signer name
        **kwargs: Signer constructor arguments

    Raises:
        ConfigurationError: If no signer is registered under name
    """
    try:
        signer_class = _signers[name]
    except KeyError:
        raise ConfigurationError(
            f"Unknown signer: {name} (supported: {', '.join(get_supported_signers())})"
        )
    return signer_class(**kwargs)
