from decimal import Decimal

from pydantic import BaseModel, Field


class RegistrationRequest(BaseModel):
    amount: Decimal = Field(..., ge=0, examples=["1.0"])


class Vote(BaseModel):
    candidate: str = Field(..., min_length=1)
