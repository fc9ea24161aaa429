"""Publisher Restriction — per-vendor override of a purpose's legal basis."""

from enum import IntEnum

from pydantic import BaseModel, ConfigDict, Field


class RestrictionType(IntEnum):
    NOT_ALLOWED = 0       # Purpose flatly not allowed by the publisher
    REQUIRE_CONSENT = 1   # Vendor must rely on consent for this purpose
    REQUIRE_LI = 2        # Vendor must rely on legitimate interest


class RestrictionEntry(BaseModel):
    """A restriction a publisher places on one purpose for a vendor."""

    model_config = ConfigDict(frozen=True)

    purpose_id: int = Field(ge=1)
    restriction_type: RestrictionType

    @property
    def hash(self) -> str:
        return f"{self.purpose_id}-{self.restriction_type.value}"
