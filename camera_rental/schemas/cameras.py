from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CreateCameraDto(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str
    description: str
    category: str
    pricePerDay: float = Field(ge=0)
    totalUnits: int = Field(ge=0)
    availableUnits: int = Field(ge=0)
    specifications: List[str]
    imageUrl: str


class CameraPatchDto(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    pricePerDay: Optional[float] = None
    totalUnits: Optional[int] = None
    availableUnits: Optional[int] = None
    specifications: Optional[List[str]] = None
    imageUrl: Optional[str] = None
