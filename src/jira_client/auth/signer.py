"""
Canonical request signing for JWT authentication.

The query string hash (``qsh`` claim) binds a token to one request: the hex
SHA-256 of ``METHOD&/path&sorted-query``. The server recomputes it from the
request it receives, so the encoding below must be reproduced byte for byte.
"""
import hashlib
from typing import Dict, List, Union
from urllib.parse import quote_plus

import httpx

# Never part of the canonical string; it may carry the token itself.
QSH_EXCLUDED_PARAM = "jwt"


def canonicalize_request(method: str, url: Union[str, httpx.URL]) -> str:
    """Build the canonical request string for ``method`` and ``url``."""
    url = httpx.URL(url)
    path = "/" + url.path.strip("/").replace("&", "%26")

    grouped: Dict[str, List[str]] = {}
    for key, value in url.params.multi_items():
        if key == QSH_EXCLUDED_PARAM:
            continue
        grouped.setdefault(key, []).append(value)

    canonical_query = sorted(
        f"{quote_plus(key, safe='')}={quote_plus(''.join(values), safe='')}".replace("+", "%20")
        for key, values in grouped.items()
    )
    return f"{method.upper()}&{path}&{'&'.join(canonical_query)}"


def create_query_string_hash(method: str, url: Union[str, httpx.URL]) -> str:
    """Hex SHA-256 of the canonical request string."""
    canonical = canonicalize_request(method, url)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()
