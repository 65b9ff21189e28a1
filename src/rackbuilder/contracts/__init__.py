"""Contracts between the application layer and its collaborators."""

from rackbuilder.contracts.protocols import CatalogRepositoryProtocol

__all__ = ["CatalogRepositoryProtocol"]
