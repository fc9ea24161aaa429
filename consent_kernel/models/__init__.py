"""Consent kernel data models."""

from consent_kernel.models.catalog import Catalog, CatalogEntry, Dimension
from consent_kernel.models.restriction import RestrictionEntry, RestrictionType

__all__ = [
    "Catalog",
    "CatalogEntry",
    "Dimension",
    "RestrictionEntry",
    "RestrictionType",
]
