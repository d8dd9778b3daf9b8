"""Admission Pydantic Schemas"""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, Field

from app.models.enums import AdmissionStatus


class AdmissionCreate(BaseModel):
    """Admission intake form"""
    name: str = Field(..., min_length=1, max_length=255)
    class_name: str = Field(..., min_length=1, max_length=100, description="Class the student joins")
    batch: str = Field(..., min_length=1, max_length=100)
    monthly_fee: Decimal = Field(default=Decimal("0"), ge=0, max_digits=10, decimal_places=2)
    status: AdmissionStatus = AdmissionStatus.PENDING
    admission_date: Optional[datetime] = Field(
        default=None,
        description="Defaults to the time of intake (UTC)",
    )
    email: Optional[str] = Field(default=None, max_length=255)
    phone: Optional[str] = Field(default=None, max_length=50)
    guardian_name: Optional[str] = Field(default=None, max_length=255)


class AdmissionStatusUpdate(BaseModel):
    status: AdmissionStatus


class AdmissionResponse(BaseModel):
    id: UUID
    name: str
    class_name: str
    batch: str
    status: AdmissionStatus
    admission_date: datetime
    monthly_fee: Decimal
    email: Optional[str] = None
    phone: Optional[str] = None
    guardian_name: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
