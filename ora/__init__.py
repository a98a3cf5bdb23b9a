"""
ORA answer package.

Contains:
- `context`     : analysis → plain-text context block
- `synthesizer` : ordered keyword rules producing canned answers
- `client`      : `OraClient` (simulated or remote)
"""

from __future__ import annotations

from config import OraConfig
from ora.client import OraClient

_client = None


def get_ora_client() -> OraClient:
    """Returns the shared `OraClient`, configured from the environment."""
    global _client

    if _client is None:
        _client = OraClient(OraConfig.from_env())

    return _client
