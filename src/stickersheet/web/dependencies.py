"""FastAPI dependency injection for sheet services."""

import os
from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from stickersheet.infrastructure import (
    API_URL_ENVVAR,
    DEFAULT_API_URL,
    PrintServiceClient,
)
from stickersheet.web.sessions import SheetSessionStore


@lru_cache(maxsize=1)
def get_session_store() -> SheetSessionStore:
    """Get the process-wide SheetSessionStore."""
    return SheetSessionStore()


def get_print_client() -> PrintServiceClient:
    """Dependency for PrintServiceClient, configured from the environment."""
    return PrintServiceClient(base_url=os.environ.get(API_URL_ENVVAR, DEFAULT_API_URL))


# Type aliases for cleaner endpoint signatures
SessionStoreDep = Annotated[SheetSessionStore, Depends(get_session_store)]
PrintClientDep = Annotated[PrintServiceClient, Depends(get_print_client)]
