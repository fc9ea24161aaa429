"""
Consent Record — the in-memory Transparency and Consent model.

Holds a CMP's consent metadata and the user's per-purpose and per-vendor
decisions ahead of encoding.

Behavioral Contract:
- Every scalar is validated before it is stored; a rejected write leaves the
  previous value in place.
- A catalog may be attached once. Attaching snapshots its list and policy
  versions and creates every catalog-bound container in one step.
- Timestamps are stored at decisecond (100 ms) resolution.
- No locking: a record shared between threads must be guarded by the caller.
"""

from datetime import datetime, timezone
from typing import Any, Optional

import structlog
from pydantic import BaseModel, ConfigDict

from consent_kernel.catalog.container import CatalogContainer, build_container
from consent_kernel.models.catalog import Catalog, Dimension
from consent_kernel.models.restriction import RestrictionEntry
from consent_kernel.record.errors import AlreadyBoundError, InvalidFieldError
from consent_kernel.record.timestamps import to_deciseconds

logger = structlog.get_logger(__name__)

MAX_ENCODING_VERSION = 2

# lowercase "a" is 97
_ASCII_START = 96
_ALPHABET_CARDINALITY = 26


class CatalogBinding(BaseModel):
    """Everything a record gains from its catalog, created together."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    catalog: Catalog
    vendor_list_version: int
    policy_version: int
    special_feature_opt_ins: CatalogContainer
    purpose_consents: CatalogContainer
    purpose_legitimate_interest: CatalogContainer
    vendor_consents: CatalogContainer
    vendor_legitimate_interest: CatalogContainer
    publisher_restrictions: CatalogContainer

    @classmethod
    def bind(cls, catalog: Catalog) -> "CatalogBinding":
        return cls(
            catalog=catalog,
            vendor_list_version=catalog.list_version,
            policy_version=catalog.policy_version,
            special_feature_opt_ins=build_container(catalog, Dimension.SPECIAL_FEATURES, False),
            purpose_consents=build_container(catalog, Dimension.PURPOSES, False),
            purpose_legitimate_interest=build_container(catalog, Dimension.PURPOSES, False),
            vendor_consents=build_container(catalog, Dimension.VENDORS, False),
            vendor_legitimate_interest=build_container(catalog, Dimension.VENDORS, False),
            publisher_restrictions=build_container(catalog, Dimension.VENDORS, None),
        )


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_int_above(value: Any, above: int) -> bool:
    return _is_int(value) and value > above


class ConsentRecord:
    """
    A user's consent state plus the CMP metadata that accompanies it.

    Constructed bare (e.g. ahead of decoding an existing string) or with a
    catalog. Catalog-derived fields and containers read as ``None`` until a
    catalog is attached.
    """

    MAX_ENCODING_VERSION = MAX_ENCODING_VERSION

    def __init__(self, catalog: Optional[Catalog] = None):
        self._binding: Optional[CatalogBinding] = None
        self._version = 0
        self._cmp_id = 0
        self._cmp_version = 0
        self._consent_screen = 0
        self._consent_language = ""
        self._last_updated: Optional[datetime] = None

        # Whether the signals came from service-specific storage rather than
        # global shared storage.
        self.is_service_specific = False
        # Set when the CMP shows publisher-customized stack descriptions.
        self.use_non_standard_stacks = False

        if catalog is not None:
            self.attach_catalog(catalog)
        self._created = to_deciseconds(datetime.now(timezone.utc))

    # --- Catalog binding ---

    def attach_catalog(self, catalog: Catalog) -> None:
        """
        Bind ``catalog`` to this record.

        Copies the catalog's list and policy versions and creates the
        purpose, vendor, special feature and publisher restriction containers.

        Raises:
            AlreadyBoundError: a catalog is already attached.
        """
        if self._binding is not None:
            logger.warning(
                "catalog_rebind_rejected",
                bound_list_version=self._binding.vendor_list_version,
                offered_list_version=catalog.list_version,
            )
            raise AlreadyBoundError(catalog)

        self._binding = CatalogBinding.bind(catalog)
        logger.info(
            "catalog_attached",
            vendor_list_version=catalog.list_version,
            policy_version=catalog.policy_version,
            purposes=catalog.size(Dimension.PURPOSES),
            vendors=catalog.size(Dimension.VENDORS),
            special_features=catalog.size(Dimension.SPECIAL_FEATURES),
        )

    @property
    def catalog(self) -> Optional[Catalog]:
        """The attached catalog, or ``None`` when unbound."""
        return self._binding.catalog if self._binding else None

    @property
    def is_bound(self) -> bool:
        return self._binding is not None

    @property
    def vendor_list_version(self) -> Optional[int]:
        return self._binding.vendor_list_version if self._binding else None

    @property
    def policy_version(self) -> Optional[int]:
        return self._binding.policy_version if self._binding else None

    @property
    def special_feature_opt_ins(self) -> Optional[CatalogContainer[bool]]:
        return self._binding.special_feature_opt_ins if self._binding else None

    @property
    def purpose_consents(self) -> Optional[CatalogContainer[bool]]:
        return self._binding.purpose_consents if self._binding else None

    @property
    def purpose_legitimate_interest(self) -> Optional[CatalogContainer[bool]]:
        """Purposes whose legitimate interest transparency was established."""
        return self._binding.purpose_legitimate_interest if self._binding else None

    @property
    def vendor_consents(self) -> Optional[CatalogContainer[bool]]:
        return self._binding.vendor_consents if self._binding else None

    @property
    def vendor_legitimate_interest(self) -> Optional[CatalogContainer[bool]]:
        return self._binding.vendor_legitimate_interest if self._binding else None

    @property
    def publisher_restrictions(
        self,
    ) -> Optional[CatalogContainer[Optional[RestrictionEntry]]]:
        return self._binding.publisher_restrictions if self._binding else None

    # --- Timestamps ---

    @property
    def created(self) -> datetime:
        return self._created

    def set_created(self, value: datetime) -> None:
        """Set the creation time, rounded to the nearest 100 ms."""
        self._created = to_deciseconds(value)

    @property
    def last_updated(self) -> Optional[datetime]:
        return self._last_updated

    def set_last_updated(self, value: datetime) -> None:
        self._last_updated = to_deciseconds(value)

    # --- Validated scalars ---

    def _reject(self, field: str, value: Any, detail: Optional[str] = None) -> None:
        logger.debug("field_rejected", field=field, value=repr(value))
        raise InvalidFieldError(field, value, detail)

    @property
    def cmp_id(self) -> int:
        """IAB-assigned identifier of the Consent Management Platform."""
        return self._cmp_id

    def set_cmp_id(self, value: int) -> None:
        if not _is_int_above(value, 1):
            self._reject("cmpId", value)
        self._cmp_id = value

    @property
    def cmp_version(self) -> int:
        return self._cmp_version

    def set_cmp_version(self, value: int) -> None:
        if not _is_int_above(value, -1):
            self._reject("cmpVersion", value)
        self._cmp_version = value

    @property
    def consent_screen(self) -> int:
        """CMP-defined number of the screen the user gave consent on."""
        return self._consent_screen

    def set_consent_screen(self, value: int) -> None:
        if not _is_int_above(value, -1):
            self._reject("consentScreen", value)
        self._consent_screen = value

    @property
    def consent_language(self) -> str:
        return self._consent_language

    def set_consent_language(self, code: str) -> None:
        """
        Set the two-letter language the CMP UI was shown in.

        Both characters must be lowercase ``a``-``z``. The code is not checked
        against the ISO 639-1 table.
        """
        if not isinstance(code, str) or len(code) != 2:
            self._reject("consentLanguage", code)
        for char in code:
            offset = ord(char) - _ASCII_START
            if not 0 < offset <= _ALPHABET_CARDINALITY:
                self._reject("consentLanguage", code)
        self._consent_language = code

    @property
    def version(self) -> int:
        """Encoding format version the record will be written as."""
        return self._version

    def set_version(self, value: int) -> None:
        if not (_is_int(value) and 0 < value <= MAX_ENCODING_VERSION):
            self._reject(
                "version",
                value,
                f"max version is {MAX_ENCODING_VERSION}, can't be higher",
            )
        self._version = value

    # --- Export ---

    def snapshot(self) -> dict:
        """Plain-data view of every public field, for encoders and debugging."""

        def _dump(container: Optional[CatalogContainer]) -> Optional[dict]:
            if container is None:
                return None
            return {
                item_id: value.model_dump(mode="json")
                if isinstance(value, BaseModel) else value
                for item_id, value in container.items()
            }

        return {
            "version": self._version,
            "cmp_id": self._cmp_id,
            "cmp_version": self._cmp_version,
            "consent_screen": self._consent_screen,
            "consent_language": self._consent_language,
            "created": self._created.isoformat(),
            "last_updated": self._last_updated.isoformat() if self._last_updated else None,
            "vendor_list_version": self.vendor_list_version,
            "policy_version": self.policy_version,
            "is_service_specific": self.is_service_specific,
            "use_non_standard_stacks": self.use_non_standard_stacks,
            "special_feature_opt_ins": _dump(self.special_feature_opt_ins),
            "purpose_consents": _dump(self.purpose_consents),
            "purpose_legitimate_interest": _dump(self.purpose_legitimate_interest),
            "vendor_consents": _dump(self.vendor_consents),
            "vendor_legitimate_interest": _dump(self.vendor_legitimate_interest),
            "publisher_restrictions": _dump(self.publisher_restrictions),
        }
