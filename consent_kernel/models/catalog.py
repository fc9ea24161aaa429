"""Catalog — the vendor/purpose reference list a consent record binds to."""

from enum import Enum
from typing import Dict, FrozenSet

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Dimension(str, Enum):
    """Identifier spaces published by a catalog."""
    PURPOSES = "purposes"
    VENDORS = "vendors"
    SPECIAL_FEATURES = "specialFeatures"


class CatalogEntry(BaseModel):
    """A single purpose, vendor or special feature listed in the catalog."""

    id: int = Field(ge=1)
    name: str = ""


class Catalog(BaseModel):
    """
    In-memory Global Vendor List.

    Accepts the published JSON shape (``vendorListVersion``,
    ``tcfPolicyVersion``, ``purposes``, ``vendors``, ``specialFeatures``)
    through ``Catalog.model_validate``. Fetching the list is left to the host.
    """

    model_config = ConfigDict(populate_by_name=True)

    vendor_list_version: int = Field(gt=0, alias="vendorListVersion")
    tcf_policy_version: int = Field(gt=0, alias="tcfPolicyVersion")
    purposes: Dict[int, CatalogEntry] = {}
    vendors: Dict[int, CatalogEntry] = {}
    special_features: Dict[int, CatalogEntry] = Field(default={}, alias="specialFeatures")

    @model_validator(mode="after")
    def _keys_match_ids(self) -> "Catalog":
        for dimension in Dimension:
            for key, entry in self._entries(dimension).items():
                if key != entry.id:
                    raise ValueError(
                        f"{dimension.value} key {key} does not match entry id {entry.id}"
                    )
        return self

    @classmethod
    def from_counts(
        cls,
        list_version: int,
        policy_version: int,
        purposes: int = 0,
        vendors: int = 0,
        special_features: int = 0,
    ) -> "Catalog":
        """Build a catalog whose dimensions are numbered 1..n."""

        def _numbered(count: int, label: str) -> Dict[int, CatalogEntry]:
            return {
                i: CatalogEntry(id=i, name=f"{label} {i}")
                for i in range(1, count + 1)
            }

        return cls(
            vendor_list_version=list_version,
            tcf_policy_version=policy_version,
            purposes=_numbered(purposes, "Purpose"),
            vendors=_numbered(vendors, "Vendor"),
            special_features=_numbered(special_features, "Special Feature"),
        )

    @property
    def list_version(self) -> int:
        return self.vendor_list_version

    @property
    def policy_version(self) -> int:
        return self.tcf_policy_version

    def _entries(self, dimension: Dimension) -> Dict[int, CatalogEntry]:
        if dimension is Dimension.PURPOSES:
            return self.purposes
        if dimension is Dimension.VENDORS:
            return self.vendors
        return self.special_features

    def ids(self, dimension: Dimension) -> FrozenSet[int]:
        """Identifiers published for a dimension."""
        return frozenset(self._entries(dimension))

    def size(self, dimension: Dimension) -> int:
        return len(self._entries(dimension))
