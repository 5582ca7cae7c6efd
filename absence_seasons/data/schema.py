from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
import datetime


class AttendanceRecord(BaseModel):
    """Schema for a single normalized daily attendance record"""

    model_config = ConfigDict(frozen=True)

    school_id: str = Field("", description="School DBN, passed through unvalidated")
    date: Optional[datetime.date] = Field(
        None, description="Calendar date of the record; None marks it unusable"
    )
    enrolled: float = Field(0.0, description="Enrolled count")
    absent: float = Field(0.0, description="Absent count")
    present: float = Field(0.0, description="Present count")

    @property
    def is_valid(self) -> bool:
        return self.date is not None

    @property
    def month(self) -> Optional[int]:
        return self.date.month if self.date is not None else None
