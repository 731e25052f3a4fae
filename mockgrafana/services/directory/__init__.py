from __future__ import annotations

# Re-export the directory facade for centralized imports.

from mockgrafana.services.directory.client import MockClient, new_client

__all__ = [
    "MockClient",
    "new_client",
]
