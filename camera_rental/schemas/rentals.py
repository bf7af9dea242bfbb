from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


RentalStatus = Literal["pending", "approved", "completed", "cancelled"]


class CreateRentalRequestDto(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    cameraId: int
    customerName: str
    customerEmail: str
    customerPhone: str
    startDate: datetime
    endDate: datetime
    quantity: int = Field(gt=0)
    totalPrice: float = Field(ge=0)
    status: Optional[RentalStatus] = None

    @field_validator("startDate", "endDate")
    @classmethod
    def assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value


class RentalStatusUpdateDto(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    status: RentalStatus
