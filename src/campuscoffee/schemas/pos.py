"""Point-of-sale API schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

from ..models.domain import CampusType, Pos, PosType


class PosModel(BaseModel):
    id: int | None = None
    createdAt: datetime | None = None
    updatedAt: datetime | None = None
    name: str = Field(min_length=1)
    description: str = ""
    type: PosType
    campus: CampusType
    street: str = Field(min_length=1)
    houseNumber: str = Field(min_length=1)
    postalCode: int = Field(ge=-(2**31), le=2**31 - 1)
    city: str = Field(min_length=1)

    @classmethod
    def from_domain(cls, pos: Pos) -> "PosModel":
        return cls(
            id=pos.id,
            createdAt=pos.created_at,
            updatedAt=pos.updated_at,
            name=pos.name,
            description=pos.description,
            type=pos.type,
            campus=pos.campus,
            street=pos.street,
            houseNumber=pos.house_number,
            postalCode=pos.postal_code,
            city=pos.city,
        )

    def to_domain(self) -> Pos:
        # Timestamps are owned by the store and never taken from clients
        return Pos(
            id=self.id,
            name=self.name,
            description=self.description,
            type=self.type,
            campus=self.campus,
            street=self.street,
            house_number=self.houseNumber,
            postal_code=self.postalCode,
            city=self.city,
        )


class ErrorResponse(BaseModel):
    detail: str
    code: str
