"""FastAPI dependency injection for catalog services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from rackbuilder.application.catalog import InMemoryCatalog
from rackbuilder.application.commands import BuildRackCommand
from rackbuilder.contracts.protocols import CatalogRepositoryProtocol


@lru_cache(maxsize=1)
def get_catalog() -> CatalogRepositoryProtocol:
    """Get the cached bundled catalog."""
    return InMemoryCatalog.default()


def get_build_command(
    catalog: Annotated[CatalogRepositoryProtocol, Depends(get_catalog)],
) -> BuildRackCommand:
    """Dependency for BuildRackCommand."""
    return BuildRackCommand(catalog)


# Type aliases for cleaner endpoint signatures
CatalogDep = Annotated[CatalogRepositoryProtocol, Depends(get_catalog)]
BuildCommandDep = Annotated[BuildRackCommand, Depends(get_build_command)]
