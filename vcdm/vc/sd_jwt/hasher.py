"""Digest functions for SD-JWT disclosures."""

import hashlib
from types import MappingProxyType
from typing import Callable, Union

from ..error import DigestResolutionError

# hash(data, alg) -> raw digest bytes
Hasher = Callable[[Union[str, bytes], str], bytes]

# Names from the IANA "Named Information Hash Algorithm" registry
HASH_FUNCTIONS = MappingProxyType(
    {
        "sha-256": hashlib.sha256,
        "sha-384": hashlib.sha384,
        "sha-512": hashlib.sha512,
        "sha3-256": hashlib.sha3_256,
        "sha3-384": hashlib.sha3_384,
        "sha3-512": hashlib.sha3_512,
    }
)


def default_hasher(data: Union[str, bytes], alg: str) -> bytes:
    """Hash `data` with the named algorithm.

    Raises:
        DigestResolutionError: If the algorithm is not supported

    """
    hash_function = HASH_FUNCTIONS.get(alg.lower() if isinstance(alg, str) else alg)
    if not hash_function:
        raise DigestResolutionError(f"Unsupported digest algorithm: {alg}")
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hash_function(data).digest()
