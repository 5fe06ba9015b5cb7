"""Primary key generation (CUID2)."""

from cuid2 import Cuid

CUID_LENGTH = 25

_cuid = Cuid(length=CUID_LENGTH)


def generate_cuid() -> str:
    """Return a new collision-resistant, URL-safe identifier."""
    return _cuid.generate()
