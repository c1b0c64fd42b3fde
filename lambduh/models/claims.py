"""Identity claims model for authorizer payloads."""

from datetime import UTC, datetime
from email.utils import parsedate_to_datetime
from typing import Any, Optional

from pydantic import UUID4, BaseModel, ConfigDict, EmailStr, Field, field_validator

# Date.toString() layout API Gateway uses for Cognito user pool claims
JAVA_DATE_FORMAT = "%a %b %d %H:%M:%S %Z %Y"


def parse_date_string(value: str) -> Optional[datetime]:
    """
    Parse a raw issued-at value into an aware UTC datetime.

    Accepts epoch seconds, ISO 8601, RFC 2822 and the
    "Mon Oct 21 19:17:36 UTC 2019" layout.

    Args:
        value: Raw timestamp text

    Returns:
        Parsed datetime, or None if the text is not a recognizable date
    """
    text = value.strip()
    if not text:
        return None

    try:
        return datetime.fromtimestamp(float(text), tz=UTC)
    except (ValueError, OverflowError, OSError):
        pass

    parsed: Optional[datetime] = None
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        try:
            parsed = parsedate_to_datetime(text)
        except (TypeError, ValueError, IndexError):
            try:
                parsed = datetime.strptime(text, JAVA_DATE_FORMAT)
            except ValueError:
                return None

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


class Claims(BaseModel):
    """
    Validated identity of an authenticated caller.

    Built from the claims an upstream authorizer (Cognito user pool)
    attaches to the request context. Signatures are not checked here.

    Attributes:
        email: Caller email address
        user_id: Cognito subject, a version 4 UUID (wire name "sub")
        username: Cognito username (wire name "cognito:username")
        iat: Raw issued-at value as delivered by the authorizer
    """

    model_config = ConfigDict(
        extra="ignore",
        frozen=True,
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "sub": "550e8400-e29b-41d4-a716-446655440000",
                "cognito:username": "user",
                "iat": "Mon Oct 21 19:17:36 UTC 2019",
            }
        },
    )

    email: EmailStr = Field(..., description="Caller email address")
    user_id: UUID4 = Field(..., alias="sub", description="Cognito subject")
    username: str = Field(
        ...,
        alias="cognito:username",
        min_length=1,
        strict=True,
        description="Cognito username",
    )
    iat: str = Field(..., repr=False, description="Raw issued-at timestamp")

    @field_validator("iat", mode="before")
    @classmethod
    def validate_date_string(cls, v: Any) -> str:
        """
        Check that the issued-at value parses as a point in time.

        JWT authorizers deliver iat as a number, so numbers are kept as text.

        Raises:
            ValueError: If the value is not a valid date string
        """
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            v = str(v)
        if not isinstance(v, str) or parse_date_string(v) is None:
            raise ValueError(f"({v}) is not a valid date string.")
        return v

    @property
    def issued_at(self) -> datetime:
        """When the identity token was issued."""
        return parse_date_string(self.iat)
