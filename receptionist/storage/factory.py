from dataclasses import dataclass

from receptionist.schemas.appointment import CalendarEvent
from receptionist.schemas.call_session import CallSession
from receptionist.storage.base import Repository
from receptionist.storage.memory import InMemoryRepository


@dataclass(frozen=True)
class Stores:
    appointments: Repository[CalendarEvent]
    call_sessions: Repository[CallSession]


def build_stores(backend: str, session_factory=None) -> Stores:
    if backend == 'memory':
        return Stores(appointments=InMemoryRepository(), call_sessions=InMemoryRepository())

    if backend == 'database':
        from receptionist.database import SessionLocal
        from receptionist.models.appointment import CalendarEventRecord
        from receptionist.models.call_session import CallSessionRecord
        from receptionist.storage.sql import SqlAlchemyRepository

        factory = session_factory or SessionLocal
        return Stores(
            appointments=SqlAlchemyRepository(factory, CalendarEventRecord, CalendarEvent),
            call_sessions=SqlAlchemyRepository(factory, CallSessionRecord, CallSession),
        )

    raise ValueError(f'Unsupported storage backend: {backend!r}')
