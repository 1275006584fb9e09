import logging
from typing import Any, Mapping, NamedTuple, Optional

from pydantic import StrictBool, TypeAdapter, ValidationError

logger = logging.getLogger(__name__)

_STRING: TypeAdapter = TypeAdapter(Optional[str])
# Only JSON true/false count as booleans, "yes" or 1 are rejected
_BOOLEAN: TypeAdapter = TypeAdapter(Optional[StrictBool])
_OBJECT: TypeAdapter = TypeAdapter(Optional[dict[str, Any]])

# JSON key -> (attribute name, adapter). A `None` adapter hands the raw value to the parser.
PROFILE_FIELDS: dict[str, tuple[str, Optional[TypeAdapter]]] = {
    "user_id": ("id", _STRING),
    "name": ("name", _STRING),
    "nickname": ("nickname", _STRING),
    "picture": ("picture_url", _STRING),
    "email": ("email", _STRING),
    "email_verified": ("is_email_verified", _BOOLEAN),
    "given_name": ("given_name", _STRING),
    "family_name": ("family_name", _STRING),
    "created_at": ("created_at", None),
    "identities": ("identities", None),
}

PROFILE_METADATA_KEYS: tuple[str, ...] = ("user_metadata", "app_metadata")

IDENTITY_FIELDS: dict[str, tuple[str, Optional[TypeAdapter]]] = {
    "user_id": ("identity_id", _STRING),
    "provider": ("provider", _STRING),
    "connection": ("connection", _STRING),
    "isSocial": ("is_social", _BOOLEAN),
    "access_token": ("access_token", _STRING),
    "access_token_secret": ("access_token_secret", _STRING),
    "profileData": ("profile_info", _OBJECT),
}


class NormalizedFields(NamedTuple):
    """Result of partitioning a JSON object into known fields, reserved maps and extra info."""

    fields: dict[str, Any]
    maps: dict[str, dict[str, Any]]
    extra_info: dict[str, Any]


class FieldNormalizer:
    """
    Partitions the keys of a JSON object in two passes.

    Known keys are removed first and run through their typed extractor, then the reserved
    nested maps are removed (defaulting to empty maps), and whatever is left is returned
    value-for-value as extra info.
    """

    def __init__(
        self,
        known_fields: Mapping[str, tuple[str, Optional[TypeAdapter]]],
        reserved_maps: tuple[str, ...] = (),
    ):
        overlap = set(known_fields) & set(reserved_maps)
        if overlap:
            raise ValueError(f"Keys cannot be both known fields and reserved maps: {sorted(overlap)}")
        self.known_fields = dict(known_fields)
        self.reserved_maps = reserved_maps

    def normalize(self, document: Mapping[str, Any]) -> NormalizedFields:
        remaining = dict(document)

        fields: dict[str, Any] = {}
        for key, (attribute, adapter) in self.known_fields.items():
            if key not in remaining:
                continue
            fields[attribute] = self._extract(key, remaining.pop(key), adapter)

        maps = {key: self._extract_map(key, remaining.pop(key, None)) for key in self.reserved_maps}

        return NormalizedFields(fields=fields, maps=maps, extra_info=remaining)

    @staticmethod
    def _extract(key: str, value: Any, adapter: Optional[TypeAdapter]) -> Any:
        if adapter is None or value is None:
            return value
        try:
            return adapter.validate_python(value)
        except ValidationError as e:
            logger.warning(f"Ignoring field `{key}` with unexpected type {type(value).__name__}: {e.error_count()} error(s)")
            return None

    @staticmethod
    def _extract_map(key: str, value: Any) -> dict[str, Any]:
        if value is None:
            return {}
        if not isinstance(value, dict):
            logger.warning(f"Ignoring `{key}`: expected a JSON object, got {type(value).__name__}")
            return {}
        return value


profile_normalizer = FieldNormalizer(PROFILE_FIELDS, PROFILE_METADATA_KEYS)
identity_normalizer = FieldNormalizer(IDENTITY_FIELDS)
