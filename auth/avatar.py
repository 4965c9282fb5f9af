"""
auth/avatar.py -- Gravatar URL derivation for new accounts.

Pure function: no network call is made. Gravatar serves the image (or the
"mystery man" placeholder when the address has no Gravatar) when the client
renders the URL.
"""

import hashlib
from urllib.parse import urlencode

_GRAVATAR_BASE = "https://www.gravatar.com/avatar/"


def gravatar_url(email: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """Return the Gravatar URL for an email address.

    Gravatar keys on the MD5 of the trimmed, lower-cased address, so the
    same URL comes back regardless of how the user typed their email.
    """
    digest = hashlib.md5(email.strip().lower().encode("utf-8"), usedforsecurity=False).hexdigest()
    query = urlencode({"s": str(size), "r": rating, "d": default})
    return f"{_GRAVATAR_BASE}{digest}?{query}"
