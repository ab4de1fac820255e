from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.auth.enums import UserRole


class TokenClaims(BaseModel):
    """
    Payload signed into a session token.

    Validation reads the camelCase wire keys only; `userId` and `userName`
    cannot be supplied under their attribute names. Numeric claims are
    strict integers, so strings and floats are rejected.
    """

    user_id: str  # userId on the wire
    user_name: str  # userName on the wire
    iap: int | None = Field(None, ge=0, strict=True)  # Auxiliary identifier
    iat: int = Field(strict=True)  # Issued-at, seconds since epoch
    exp: int = Field(strict=True)  # Expiration, seconds since epoch
    role: UserRole

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        alias_generator=to_camel,
    )

    @classmethod
    def build(
        cls,
        user_id: str,
        user_name: str,
        role: UserRole,
        iap: int | None,
        iat: int,
        exp: int,
    ) -> "TokenClaims":
        return cls.from_payload(
            {
                "userId": user_id,
                "userName": user_name,
                "iap": iap,
                "iat": iat,
                "exp": exp,
                "role": role,
            }
        )

    def to_payload(self) -> dict[str, Any]:
        """Wire mapping: camelCase keys, role as its uppercase value, iap kept as null."""
        return self.model_dump(mode="json", by_alias=True)

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "TokenClaims":
        return cls.model_validate(payload)
