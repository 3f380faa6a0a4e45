"""Version token strategies for extern JS URIs."""

from jsuri.versioning.base import Versioner
from jsuri.versioning.content_hash import ContentHashVersioner
from jsuri.versioning.noop import NoOpVersioner
from jsuri.versioning.timestamp import TimestampVersioner

__all__ = [
    "ContentHashVersioner",
    "NoOpVersioner",
    "TimestampVersioner",
    "Versioner",
]
