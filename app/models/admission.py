"""Admission Model"""

from sqlalchemy import Column, String, Numeric, DateTime
from sqlalchemy.dialects.postgresql import ENUM

from app.models.base import BaseModel
from app.models.enums import AdmissionStatus
from app.utils.time import get_utc_now


class Admission(BaseModel):
    """
    A student's enrollment record.

    Rows are never deleted: closing an enrollment moves it to INACTIVE or
    COMPLETED so monthly trends keep their history.
    """
    __tablename__ = "admissions"
    
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=True)
    phone = Column(String(50), nullable=True)
    guardian_name = Column(String(255), nullable=True)
    
    # Classification ("class" is reserved in Python, so the attribute is class_name)
    class_name = Column("class", String(100), nullable=False, index=True)
    batch = Column(String(100), nullable=False, index=True)
    
    status = Column(
        ENUM(AdmissionStatus, name="admission_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=AdmissionStatus.PENDING,
        index=True,
    )
    admission_date = Column(DateTime, nullable=False, default=get_utc_now, index=True)
    monthly_fee = Column(Numeric(10, 2), nullable=False, default=0)
    
    def __repr__(self) -> str:
        return f"<Admission {self.name} ({self.status})>"
