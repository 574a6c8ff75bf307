"""Transaction input model."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field, model_validator


class TransactionData(BaseModel):
    """A single transaction plus the caller-resolved history of its user.

    The record is read-only once constructed. ``recent_timestamps`` is
    supplied by the caller (e.g. from a transaction history store); the
    validator never fetches history itself.
    """

    model_config = ConfigDict(frozen=True)

    user_id: str = Field(
        ...,
        description="Unique identifier for the user",
        examples=["user123"],
    )
    amount: Decimal = Field(
        ...,
        description="Transaction amount, currency-agnostic for scoring",
        examples=[Decimal("12000"), Decimal("99.99")],
    )
    currency: str = Field(
        default="USD",
        description="Currency code (carried, not used by rules)",
    )
    ip_address: str = Field(
        ...,
        description="Originating IP address, compared by exact match",
        examples=["123.45.67.89"],
    )
    country: str = Field(
        ...,
        description="Country code, compared by exact match",
        examples=["US", "RU"],
    )
    device_id: str | None = Field(
        default=None,
        description="Device identifier (carried, not used by rules)",
    )
    timestamp: datetime = Field(
        ...,
        description="When the transaction occurs",
    )
    recent_timestamps: tuple[datetime, ...] = Field(
        default=(),
        description="Timestamps of the same user's prior transactions",
    )

    @model_validator(mode="after")
    def _check_timezone_consistency(self) -> "TransactionData":
        """Reject mixing naive and aware datetimes.

        Frequency checks subtract these values, which fails for mixed
        awareness, so it is caught here instead of during evaluation.
        """
        aware = self.timestamp.tzinfo is not None
        for ts in self.recent_timestamps:
            if (ts.tzinfo is not None) != aware:
                raise ValueError(
                    "recent_timestamps must match the timezone awareness "
                    "of timestamp"
                )
        return self
