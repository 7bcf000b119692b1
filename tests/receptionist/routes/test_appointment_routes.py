import re

import pytest
from fastapi import HTTPException
from fastapi.testclient import TestClient

from receptionist.core import config
from receptionist.main import create_app
from receptionist.routes.appointment_routes import parse_appointment_request, validate_appointment_time
from receptionist.storage.factory import build_stores

VALID_REQUEST = {
    'patientName': 'Jane',
    'contactNumber': '555',
    'preferredDate': '2025-01-10',
    'preferredTime': '9:00 AM',
}


@pytest.fixture
def stores():
    return build_stores('memory')


@pytest.fixture
def client(stores) -> TestClient:
    return TestClient(create_app(stores=stores, webhook_secret=''))


def test_parse_appointment_request_strips_fields() -> None:
    request = parse_appointment_request({**VALID_REQUEST, 'patientName': '  Jane  '})

    assert request.patient_name == 'Jane'
    assert request.is_urgent is False


@pytest.mark.parametrize('missing_field', ['patientName', 'contactNumber', 'preferredDate', 'preferredTime'])
def test_parse_appointment_request_rejects_missing_fields(missing_field: str) -> None:
    payload = {key: value for key, value in VALID_REQUEST.items() if key != missing_field}

    with pytest.raises(HTTPException) as exception_info:
        parse_appointment_request(payload)

    assert exception_info.value.status_code == 400
    assert exception_info.value.detail == 'Missing required appointment information'


def test_parse_appointment_request_rejects_blank_fields() -> None:
    with pytest.raises(HTTPException) as exception_info:
        parse_appointment_request({**VALID_REQUEST, 'contactNumber': '   '})

    assert exception_info.value.status_code == 400


def test_validate_appointment_time_rejects_malformed_time() -> None:
    request = parse_appointment_request({**VALID_REQUEST, 'preferredTime': '25:00'})

    with pytest.raises(HTTPException) as exception_info:
        validate_appointment_time(request)

    assert exception_info.value.status_code == 400


def test_create_appointment_returns_pending_record(client: TestClient) -> None:
    response = client.post('/appointments', json={**VALID_REQUEST, 'treatmentType': 'Cleaning'})

    assert response.status_code == 200
    body = response.json()
    assert body['success'] is True
    assert body['message'] == 'Appointment scheduled for Jane on 2025-01-10 at 9:00 AM'
    appointment = body['appointment']
    assert re.fullmatch(r'apt_\d+_[0-9a-z]{9}', appointment['id'])
    assert appointment['status'] == 'pending'
    assert appointment['clinicId'] == 'sai-clinic'
    assert appointment['patientName'] == 'Jane'
    assert appointment['treatmentType'] == 'Cleaning'
    assert 'createdAt' in appointment


def test_create_appointment_missing_contact_number_is_rejected_without_booking(client: TestClient, stores) -> None:
    payload = {key: value for key, value in VALID_REQUEST.items() if key != 'contactNumber'}

    response = client.post('/appointments', json=payload)

    assert response.status_code == 400
    assert response.json() == {'error': 'Missing required appointment information'}
    assert stores.appointments.list() == []


def test_create_appointment_with_unreadable_body_returns_500(client: TestClient) -> None:
    response = client.post('/appointments', content=b'not json', headers={'content-type': 'application/json'})

    assert response.status_code == 500
    assert response.json() == {'error': 'Failed to create appointment'}


def test_list_advertised_slots_echoes_date(client: TestClient) -> None:
    response = client.get('/appointments', params={'date': '2025-01-10'})

    assert response.status_code == 200
    body = response.json()
    assert body['date'] == '2025-01-10'
    assert body['availableSlots'] == ['9:00 AM', '10:00 AM', '11:00 AM', '2:00 PM', '3:00 PM', '4:00 PM', '5:00 PM']


def test_list_advertised_slots_defaults_to_today(client: TestClient) -> None:
    body = client.get('/appointments').json()

    assert re.fullmatch(r'\d{4}-\d{2}-\d{2}', body['date'])


def test_list_available_slots_uses_generator(client: TestClient) -> None:
    response = client.get('/appointments/slots', params={'date': '2025-01-12'})

    assert response.status_code == 200
    assert response.json() == {'date': '2025-01-12', 'slots': []}

    saturday = client.get('/appointments/slots', params={'date': '2025-01-11'}).json()
    assert saturday['slots'][-1] == {'time': '13:00', 'available': True, 'durationMinutes': 30}


def test_list_available_slots_reports_configured_duration(stores, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(config, 'APPOINTMENT_DURATION_MINUTES', 45)
    client = TestClient(create_app(stores=stores, webhook_secret=''))

    slots = client.get('/appointments/slots', params={'date': '2025-01-11'}).json()['slots']
    webhook_result = client.app.state.webhook_dispatcher.dispatch(
        {'type': 'function-call', 'functionCall': {'name': 'checkAvailability', 'parameters': {'date': '2025-01-11'}}}
    )

    assert {slot['durationMinutes'] for slot in slots} == {45}
    assert slots == webhook_result['slots']


def test_list_available_slots_rejects_bad_date(client: TestClient) -> None:
    response = client.get('/appointments/slots', params={'date': 'soon'})

    assert response.status_code == 400
    assert response.json()['detail'] == 'Date must be YYYY-MM-DD.'


def test_book_appointment_creates_calendar_event(client: TestClient) -> None:
    response = client.post('/appointments/book', json={**VALID_REQUEST, 'isUrgent': True})

    assert response.status_code == 201
    event = response.json()
    assert event['status'] == 'confirmed'
    assert event['start'] == '2025-01-10T09:00:00'
    assert event['end'] == '2025-01-10T09:30:00'
    assert event['title'] == 'Dental Appointment - Jane'

    listed = client.get('/appointments/events', params={'status': 'confirmed'}).json()
    assert [item['id'] for item in listed] == [event['id']]


def test_book_appointment_rejects_missing_fields(client: TestClient, stores) -> None:
    response = client.post('/appointments/book', json={'patientName': 'Jane'})

    assert response.status_code == 400
    assert stores.appointments.list() == []


def test_book_appointment_rejects_malformed_time(client: TestClient) -> None:
    response = client.post('/appointments/book', json={**VALID_REQUEST, 'preferredTime': '9am'})

    assert response.status_code == 400


def test_book_appointment_returns_500_when_booking_fails(client: TestClient) -> None:
    response = client.post('/appointments/book', json={**VALID_REQUEST, 'preferredTime': '11:45 PM'})

    assert response.status_code == 500
    assert response.json()['detail'] == 'Failed to book appointment'


def test_same_slot_is_booked_twice(client: TestClient) -> None:
    first = client.post('/appointments/book', json=VALID_REQUEST).json()
    second = client.post('/appointments/book', json=VALID_REQUEST).json()

    assert first['start'] == second['start']
    assert first['id'] != second['id']


def test_list_booked_appointments_filters_by_patient(client: TestClient) -> None:
    client.post('/appointments/book', json=VALID_REQUEST)
    client.post('/appointments/book', json={**VALID_REQUEST, 'patientName': 'Ravi', 'preferredTime': '10:00 AM'})

    listed = client.get('/appointments/events', params={'patientName': 'Ravi'}).json()

    assert [item['patientName'] for item in listed] == ['Ravi']


def test_send_reminder_for_booked_appointment(client: TestClient) -> None:
    event = client.post('/appointments/book', json=VALID_REQUEST).json()

    response = client.post(f"/appointments/events/{event['id']}/reminder")

    assert response.status_code == 200
    assert response.json() == {'success': True}


def test_send_reminder_for_unknown_appointment(client: TestClient) -> None:
    response = client.post('/appointments/events/apt_missing/reminder')

    assert response.status_code == 404
    assert response.json()['detail'] == 'Appointment not found.'
