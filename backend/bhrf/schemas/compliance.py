"""Pydantic schemas for document compliance requests."""

from datetime import date

from pydantic import BaseModel, Field, model_validator


class CreateEmployeeDocumentRequest(BaseModel):
    name: str = Field(min_length=1, max_length=300)
    issued_at: date | None = Field(default=None, alias="issuedAt")
    expires_at: date | None = Field(default=None, alias="expiresAt")
    no_expiration: bool = Field(default=False, alias="noExpiration")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def _expiration_given(self):
        if not self.no_expiration and self.expires_at is None:
            raise ValueError("expiresAt is required unless noExpiration is set")
        return self
