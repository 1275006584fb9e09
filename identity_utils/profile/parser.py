import copy
import logging
from datetime import datetime
from typing import Any, Mapping, Optional, Union

from pydantic import JsonValue, TypeAdapter, ValidationError

from .config import ProfileParserConfig
from .dates import parse_created_at
from .exception import InvalidDateError, MalformedProfileError
from .normalizer import identity_normalizer, profile_normalizer
from .types import UserIdentity, UserProfile

logger = logging.getLogger(__name__)

ProfileDocument = Union[str, bytes, bytearray, Mapping[str, Any]]

_JSON_OBJECT: TypeAdapter = TypeAdapter(dict[str, JsonValue])


class ProfileParser:
    """Parses identity provider user-profile payloads into `UserProfile` values."""

    def __init__(self, config: Optional[ProfileParserConfig] = None):
        self.config = config or ProfileParserConfig()

    def parse(self, document: ProfileDocument) -> UserProfile:
        """
        Parse a JSON document (text, bytes or an already decoded mapping) into a `UserProfile`.

        Raises `MalformedProfileError` when the document is not a non-empty JSON object and
        `InvalidDateError` when `created_at` does not match the profile timestamp pattern
        (unless `strict_dates` is disabled).
        """
        data = self._load(document)

        if not data and self.config.reject_empty_object:
            logger.error("User profile document is an empty JSON object")
            raise MalformedProfileError("empty JSON object")

        normalized = profile_normalizer.normalize(data)
        fields = dict(normalized.fields)
        fields["created_at"] = self._parse_created_at(fields.get("created_at"))
        fields["identities"] = self._parse_identities(fields.get("identities"))
        if fields.get("id") is None:
            fields["id"] = self._fallback_id(normalized.extra_info)

        profile = UserProfile(
            **fields,
            user_metadata=normalized.maps["user_metadata"],
            app_metadata=normalized.maps["app_metadata"],
            extra_info=normalized.extra_info,
        )
        logger.debug(
            f"Parsed user profile {profile.id or 'unknown'} with {len(profile.identities)} identities "
            f"and {len(profile.extra_info)} extra fields"
        )
        return profile

    def _load(self, document: Any) -> dict[str, Any]:
        """Decode the document into a fresh dict owned by this parse."""
        if isinstance(document, (str, bytes, bytearray)):
            try:
                return _JSON_OBJECT.validate_json(document)
            except ValidationError as e:
                logger.error(f"User profile document is not a JSON object: {e.error_count()} error(s)")
                raise MalformedProfileError("expected a JSON object", e) from e

        if isinstance(document, Mapping):
            try:
                return copy.deepcopy(_JSON_OBJECT.validate_python(document))
            except ValidationError as e:
                logger.error(f"User profile mapping is not a JSON object: {e.error_count()} error(s)")
                raise MalformedProfileError("expected a JSON object", e) from e

        logger.error(f"Unsupported user profile document type: {type(document).__name__}")
        raise MalformedProfileError(f"expected a JSON object, got {type(document).__name__}")

    def _fallback_id(self, extra_info: dict[str, Any]) -> Optional[str]:
        """OAuth-only profiles have no `user_id`, only the fallback claim (`sub` by default)."""
        value = extra_info.get(self.config.id_fallback_claim)
        return value if isinstance(value, str) else None

    def _parse_created_at(self, value: Any) -> Optional[datetime]:
        if value is None:
            return None
        try:
            return parse_created_at(value)
        except InvalidDateError:
            if self.config.strict_dates:
                logger.error("User profile has an invalid `created_at` value")
                raise
            logger.warning("Dropping invalid `created_at` value from user profile")
            return None

    @staticmethod
    def _parse_identities(value: Any) -> tuple[UserIdentity, ...]:
        if value is None:
            return ()
        if not isinstance(value, list):
            logger.warning(f"Ignoring `identities`: expected a JSON array, got {type(value).__name__}")
            return ()

        identities = []
        for index, element in enumerate(value):
            if not isinstance(element, dict):
                logger.warning(f"Skipping identity #{index}: expected a JSON object, got {type(element).__name__}")
                continue
            normalized = identity_normalizer.normalize(element)
            fields = dict(normalized.fields)
            if fields.get("is_social") is None:
                fields["is_social"] = False
            if fields.get("profile_info") is None:
                fields["profile_info"] = {}
            identities.append(UserIdentity(**fields, extra_info=normalized.extra_info))
        return tuple(identities)


def parse_profile(document: ProfileDocument, config: Optional[ProfileParserConfig] = None) -> UserProfile:
    """Parse a user profile document with a one-off `ProfileParser`."""
    return ProfileParser(config).parse(document)
