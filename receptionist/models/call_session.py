"""Call session model definitions."""

from sqlalchemy import Column, Integer, String, Text
from receptionist.database import Base, UTCDateTime


class CallSessionRecord(Base):
    """Represents one phone call handled by the assistant."""
    __tablename__ = "call_sessions"

    id = Column(String, primary_key=True)
    patient_id = Column(String)
    start_time = Column(UTCDateTime, nullable=False)
    end_time = Column(UTCDateTime)
    duration = Column(Integer)
    call_type = Column(String, nullable=False)
    status = Column(String, nullable=False, index=True)
    transcript = Column(Text)
    outcome = Column(String)
    updated_at = Column(UTCDateTime)
