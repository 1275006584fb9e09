import json
from datetime import datetime
from types import MappingProxyType
from typing import Annotated, Any, Mapping, Optional

from pydantic import AfterValidator, BaseModel, Field

from .dates import format_created_at


def freeze(value: Any) -> Any:
    """Recursively convert JSON containers into read-only ones: objects to mapping proxies, arrays to tuples."""
    if isinstance(value, Mapping):
        return MappingProxyType({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of `freeze`, producing plain dicts and lists ready for `json.dumps`."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


JsonObject = Annotated[Mapping[str, Any], AfterValidator(freeze)]


def _without_none(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v is not None}


class UserIdentity(BaseModel):
    """A linked account (provider + connection + provider-specific id) of a user profile."""

    identity_id: Optional[str] = None
    provider: Optional[str] = None
    connection: Optional[str] = None
    is_social: bool = False
    access_token: Optional[str] = None
    access_token_secret: Optional[str] = None
    profile_info: JsonObject = Field(default_factory=dict, validate_default=True)
    extra_info: JsonObject = Field(default_factory=dict, validate_default=True)

    class Config:
        frozen = True

    # Read-only containers are not hashable
    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, Any]:
        """Return the identity in its JSON wire shape."""
        data: dict[str, Any] = thaw(self.extra_info)
        data.update(
            _without_none(
                {
                    "user_id": self.identity_id,
                    "provider": self.provider,
                    "connection": self.connection,
                    "isSocial": self.is_social,
                    "access_token": self.access_token,
                    "access_token_secret": self.access_token_secret,
                }
            )
        )
        if self.profile_info:
            data["profileData"] = thaw(self.profile_info)
        return data


class UserProfile(BaseModel):
    """
    Normalized user profile returned by the identity provider.

    Known attributes are typed fields. Everything else the provider sent at the top level
    lives in `extra_info`, except `user_metadata` and `app_metadata` which have their own maps.
    Every container is read-only: JSON objects are exposed as mappings, arrays as tuples.
    """

    id: Optional[str] = None
    name: Optional[str] = None
    nickname: Optional[str] = None
    picture_url: Optional[str] = None
    email: Optional[str] = None
    is_email_verified: Optional[bool] = None
    given_name: Optional[str] = None
    family_name: Optional[str] = None
    created_at: Optional[datetime] = None
    identities: tuple[UserIdentity, ...] = ()
    user_metadata: JsonObject = Field(default_factory=dict, validate_default=True)
    app_metadata: JsonObject = Field(default_factory=dict, validate_default=True)
    extra_info: JsonObject = Field(default_factory=dict, validate_default=True)

    class Config:
        frozen = True

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> dict[str, Any]:
        """
        Return the profile in the JSON wire shape it was parsed from.

        The id is written as `user_id`, and `identities`, `user_metadata` and `app_metadata`
        are always present, so the result parses back into an equal profile.
        """
        data: dict[str, Any] = thaw(self.extra_info)
        data.update(
            _without_none(
                {
                    "user_id": self.id,
                    "name": self.name,
                    "nickname": self.nickname,
                    "picture": self.picture_url,
                    "email": self.email,
                    "email_verified": self.is_email_verified,
                    "given_name": self.given_name,
                    "family_name": self.family_name,
                    "created_at": format_created_at(self.created_at) if self.created_at else None,
                }
            )
        )
        data["identities"] = [identity.to_dict() for identity in self.identities]
        data["user_metadata"] = thaw(self.user_metadata)
        data["app_metadata"] = thaw(self.app_metadata)
        return data

    def to_json(self) -> str:
        """Serialize the profile so that it can be parsed back into an equal profile."""
        return json.dumps(self.to_dict())
