from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from receptionist.database import Base
from receptionist.models.appointment import CalendarEventRecord
from receptionist.models.call_session import CallSessionRecord
from receptionist.schemas.appointment import CalendarEvent
from receptionist.schemas.call_session import CallSession
from receptionist.storage.factory import build_stores
from receptionist.storage.memory import InMemoryRepository
from receptionist.storage.sql import SqlAlchemyRepository


def _event(event_id: str, status: str = 'scheduled', hour: int = 9) -> CalendarEvent:
    return CalendarEvent(
        id=event_id,
        title='Dental Appointment - Jane',
        start=datetime(2025, 1, 10, hour, 0),
        end=datetime(2025, 1, 10, hour, 30),
        patient_name='Jane',
        contact_number='555',
        treatment_type='Cleaning',
        status=status,
    )


def _session(session_id: str, status: str = 'active') -> CallSession:
    return CallSession(id=session_id, start_time=datetime(2025, 1, 10, 8, 0, tzinfo=timezone.utc), status=status)


@pytest.fixture
def session_factory():
    engine = create_engine('sqlite:///:memory:')
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine, tables=[CalendarEventRecord.__table__, CallSessionRecord.__table__])
    try:
        yield testing_session_local
    finally:
        Base.metadata.drop_all(bind=engine, tables=[CalendarEventRecord.__table__, CallSessionRecord.__table__])


@pytest.fixture(params=['memory', 'sql'])
def event_store(request, session_factory):
    if request.param == 'memory':
        return InMemoryRepository()
    return SqlAlchemyRepository(session_factory, CalendarEventRecord, CalendarEvent)


@pytest.fixture(params=['memory', 'sql'])
def call_store(request, session_factory):
    if request.param == 'memory':
        return InMemoryRepository()
    return SqlAlchemyRepository(session_factory, CallSessionRecord, CallSession)


def test_add_then_get_returns_equal_record(event_store) -> None:
    event = _event('apt_1')

    event_store.add(event)

    assert event_store.get('apt_1') == event


def test_get_missing_returns_none(event_store) -> None:
    assert event_store.get('apt_missing') is None


def test_list_filters_by_equality_and_ignores_none(event_store) -> None:
    event_store.add(_event('apt_1', status='scheduled', hour=9))
    event_store.add(_event('apt_2', status='confirmed', hour=10))

    assert [event.id for event in event_store.list(status='confirmed')] == ['apt_2']
    assert sorted(event.id for event in event_store.list(status=None)) == ['apt_1', 'apt_2']
    assert event_store.list(status='cancelled') == []


def test_update_merges_changes(call_store) -> None:
    call_store.add(_session('call_1'))

    updated = call_store.update('call_1', {'status': 'completed', 'duration': 180, 'outcome': 'Booked'})

    assert updated.status == 'completed'
    assert updated.duration == 180
    assert updated.start_time == datetime(2025, 1, 10, 8, 0, tzinfo=timezone.utc)
    assert call_store.get('call_1') == updated


def test_update_missing_returns_none(call_store) -> None:
    assert call_store.update('call_missing', {'status': 'completed'}) is None


def test_list_call_sessions_by_id_and_status(call_store) -> None:
    call_store.add(_session('call_1', status='active'))
    call_store.add(_session('call_2', status='completed'))

    assert [session.id for session in call_store.list(id='call_2', status='completed')] == ['call_2']
    assert call_store.list(id='call_1', status='completed') == []


def test_sql_call_sessions_keep_utc_timestamps(session_factory) -> None:
    call_store = SqlAlchemyRepository(session_factory, CallSessionRecord, CallSession)
    local_start = datetime(2025, 1, 10, 13, 30, tzinfo=timezone(timedelta(hours=5, minutes=30)))
    call_store.add(CallSession(id='call_1', start_time=local_start))

    updated = call_store.update('call_1', {'end_time': datetime(2025, 1, 10, 8, 15, tzinfo=timezone.utc)})
    stored = call_store.get('call_1')

    assert stored == updated
    assert stored.start_time == datetime(2025, 1, 10, 8, 0, tzinfo=timezone.utc)
    assert stored.start_time.utcoffset() == timedelta(0)
    assert stored.end_time.utcoffset() == timedelta(0)
    assert stored.updated_at is None


def test_build_stores_selects_memory_backend() -> None:
    stores = build_stores('memory')

    assert isinstance(stores.appointments, InMemoryRepository)
    assert isinstance(stores.call_sessions, InMemoryRepository)


def test_build_stores_selects_database_backend(session_factory) -> None:
    stores = build_stores('database', session_factory=session_factory)

    assert isinstance(stores.appointments, SqlAlchemyRepository)
    stores.appointments.add(_event('apt_1'))
    assert stores.appointments.get('apt_1').treatment_type == 'Cleaning'


def test_build_stores_rejects_unknown_backend() -> None:
    with pytest.raises(ValueError):
        build_stores('redis')
