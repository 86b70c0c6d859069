"""
Hash and HMAC generation.

Digests are computed in a worker thread so a large input does not block
the event loop. ``generate_hashes`` keys its results by algorithm name, so
callers never depend on completion order.
"""

import asyncio
import hashlib
import hmac
from typing import Dict, Iterable

from .exceptions import ConfigurationError

ALGORITHMS = {
    'MD5': 'md5',
    'SHA-1': 'sha1',
    'SHA-256': 'sha256',
    'SHA-512': 'sha512',
}


def _digest_name(algorithm: str) -> str:
    if not isinstance(algorithm, str):
        raise ConfigurationError(f"Algorithm names must be strings, got {algorithm!r}")
    name = ALGORITHMS.get(algorithm.upper())
    if name is None:
        raise ConfigurationError(f"Unsupported hash algorithm: {algorithm}. Supported: {list(ALGORITHMS)}")
    return name


def _hexdigest(text: str, name: str) -> str:
    return hashlib.new(name, text.encode('utf-8')).hexdigest()


async def generate_hash(text: str, algorithm: str) -> str:
    name = _digest_name(algorithm)
    return await asyncio.to_thread(_hexdigest, text, name)


async def generate_hashes(text: str, algorithms: Iterable[str]) -> Dict[str, str]:
    """Compute several digests of ``text`` concurrently.

    Returns a dict mapping each requested algorithm (as given) to its hex
    digest. Any unknown algorithm fails the whole call before work starts.
    """
    algorithms = list(algorithms)
    for algorithm in algorithms:
        _digest_name(algorithm)
    requested = list(dict.fromkeys(algorithms))

    digests = await asyncio.gather(*(generate_hash(text, algorithm) for algorithm in requested))
    return dict(zip(requested, digests))


def generate_hmac(message: str, key: str, algorithm: str = 'SHA-256') -> str:
    name = _digest_name(algorithm)
    return hmac.new(key.encode('utf-8'), message.encode('utf-8'), name).hexdigest()
