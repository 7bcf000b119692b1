"""Calendar event model definitions."""

from sqlalchemy import Column, DateTime, String
from receptionist.database import Base


class CalendarEventRecord(Base):
    """Represents a booked clinic appointment."""
    __tablename__ = "calendar_events"

    id = Column(String, primary_key=True)
    title = Column(String, nullable=False)
    start = Column(DateTime, nullable=False, index=True)
    end = Column(DateTime, nullable=False)
    patient_name = Column(String, nullable=False)
    contact_number = Column(String, nullable=False)
    treatment_type = Column(String)
    status = Column(String, nullable=False, index=True)
