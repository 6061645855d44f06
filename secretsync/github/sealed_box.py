"""Sealed-box encryption of secret values for the GitHub secrets API.

GitHub only accepts values encrypted with libsodium's anonymous sealed box
under the environment's Curve25519 public key. The sender holds no key
material; only the holder of the private key (GitHub) can open the box.
"""

from __future__ import annotations

import base64

from ..errors import DependencyError


def _nacl_public():
    # Imported lazily; ensure_sealed_box_support() reports a missing PyNaCl.
    from nacl import public  # type: ignore

    return public


def ensure_sealed_box_support() -> None:
    try:
        _nacl_public()
    except ImportError as e:
        raise DependencyError(f"PyNaCl is required for sealed-box encryption: {e}") from e


def seal_secret(plaintext: str, public_key_b64: str) -> str:
    """Seal ``plaintext`` for ``public_key_b64`` and return the base64 ciphertext."""
    public = _nacl_public()
    key = public.PublicKey(base64.b64decode(public_key_b64))
    sealed = public.SealedBox(key).encrypt(plaintext.encode("utf-8"))
    return base64.b64encode(sealed).decode("ascii")
