"""
User Profile Module for Authentication Clients

Maps the user-profile JSON returned by an identity provider into normalized,
immutable `UserProfile` values with their linked `UserIdentity` records.
"""

from .config import ProfileParserConfig
from .dates import CREATED_AT_PATTERN, format_created_at, parse_created_at
from .exception import InvalidDateError, MalformedProfileError, ProfileParseError
from .normalizer import FieldNormalizer, NormalizedFields
from .parser import ProfileParser, parse_profile
from .types import UserIdentity, UserProfile

__all__ = [
    "ProfileParser",
    "ProfileParserConfig",
    "parse_profile",
    "UserProfile",
    "UserIdentity",
    "FieldNormalizer",
    "NormalizedFields",
    "ProfileParseError",
    "MalformedProfileError",
    "InvalidDateError",
    "CREATED_AT_PATTERN",
    "parse_created_at",
    "format_created_at",
]
