from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ValidationResult(BaseModel):
    """Outcome of a detailed validation pass.

    Frozen once built. ``errors`` hands out a new list on every read, so
    callers can never change the recorded messages.
    """

    model_config = ConfigDict(frozen=True)

    messages: tuple[str, ...] = Field(default=(), description="Error messages in the order they were found")

    @property
    def is_valid(self) -> bool:
        return not self.messages

    @property
    def errors(self) -> list[str]:
        return list(self.messages)

    def __bool__(self) -> bool:
        return self.is_valid

    def to_dict(self) -> dict[str, object]:
        return {"valid": self.is_valid, "errors": self.errors}


class ValidationReportResponse(BaseModel):
    """Validation report envelope returned by the configuration endpoints."""

    success: bool = Field(..., description="Whether the configuration passed every check")
    valid: bool = Field(..., description="Same as success, kept for clients that read the report only")
    errors: list[str] = Field(default_factory=list, description="One message per failing domain or cross rule")
    timestamp: datetime = Field(default_factory=datetime.utcnow, description="Response timestamp")

    @classmethod
    def from_result(cls, result: ValidationResult) -> "ValidationReportResponse":
        return cls(success=result.is_valid, valid=result.is_valid, errors=result.errors)
