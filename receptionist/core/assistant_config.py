import json
import logging
from pathlib import Path

from receptionist.schemas.assistant import AssistantSettings

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """[Identity]
You are Shreya, a virtual receptionist for Sai Clinic. Your role is to assist patients by answering calls, responding to queries, and managing appointment bookings.

[Style]
- Maintain a warm, friendly, and caring demeanor.
- Communicate in a professional, clear, and respectful manner.
- Use simple language and avoid medical jargon unless necessary.

[Response Guidelines]
- Begin interactions with: "Hello, this is Shreya from Sai Clinic, how may I help you today?"
- Keep responses concise and focused on patient's needs.
- Confirm details and use active listening techniques to ensure accuracy.

[Task & Goals]
1. Answer incoming phone calls promptly.
2. Greet patients and assess their needs.
3. Respond to common queries about:
   - Clinic timings & location.
   - Available dental treatments (cleaning, fillings, braces, implants, etc.).
   - Doctor's availability and consultation fees.
4. Manage appointments:
   - Gather patient's name, contact number, and preferred date & time.
   - Check calendar for availability.
   - Confirm and log appointments in the scheduling system.
   - Send SMS/WhatsApp confirmations and reminders.
5. Handle urgent inquiries by marking as priority appointments.
6. Offer directions or additional information if needed, e.g., "Would you like me to send you directions to the clinic?"
7. Collect feedback after appointments and log insights for continuous improvement.

[Error Handling / Fallback]
- If input is unclear, ask clarifying questions to ensure understanding.
- If the patient asks about a treatment not listed, reply politely: "I don't have information about that specific treatment right now. Would you like me to connect you with the dentist for more details?"
- If the calendar API or scheduling system is unavailable, say: "I'm sorry, it looks like I can't check the schedule at the moment. May I take down your preferred time and number so our team can confirm your appointment shortly?"
- If there is any technical issue during the call, apologize and offer a follow-up: "I'm experiencing a small issue right now. Can I take your details and ensure someone from Sai Clinic calls you back?"

[Closing]
- End calls politely, ensuring all concerns are addressed, saying, "Thank you for contacting Sai Clinic. Have a great day!\""""

DEFAULT_SETTINGS = {
    'assistant': {
        'id': 'a80f5f65-73a6-4a34-8461-04edd66cd33d',
        'orgId': '902a1bc6-579f-453a-b576-8d7f4a4d66c3',
        'name': 'Shreya',
        'voice': {'voiceId': 'Elliot', 'provider': 'vapi'},
        'createdAt': '2025-08-22T13:10:07.282Z',
        'updatedAt': '2025-08-22T13:16:45.793Z',
        'model': {
            'model': 'gpt-4o',
            'messages': [{'role': 'system', 'content': SYSTEM_PROMPT}],
            'provider': 'openai',
        },
        'firstMessage': 'Hello.',
        'voicemailMessage': "Please call back when you're available.",
        'endCallMessage': 'Goodbye.',
        'transcriber': {'model': 'nova-2', 'language': 'en', 'provider': 'deepgram'},
        'isServerUrlSecretSet': False,
    },
    'clinic': {
        'name': 'Sai Clinic',
        'type': 'Dental Clinic',
        'timings': {
            'weekdays': '9:00 AM - 6:00 PM',
            'saturday': '9:00 AM - 2:00 PM',
            'sunday': 'Closed',
        },
        'location': {
            'address': '123 Main Street, City, State 12345',
            'phone': '+1-234-567-8900',
            'email': 'info@saiclinic.com',
        },
        'services': [
            'Dental Cleaning',
            'Fillings',
            'Root Canal',
            'Braces',
            'Dental Implants',
            'Teeth Whitening',
            'Oral Surgery',
            'Emergency Dental Care',
        ],
        'consultationFee': '$50',
        'emergencyAvailable': True,
        'hours': {
            'weekdays': {'start': '09:00', 'end': '18:00'},
            'saturday': {'start': '09:00', 'end': '14:00'},
            'sunday': None,
        },
        'advertisedSlots': ['9:00 AM', '10:00 AM', '11:00 AM', '2:00 PM', '3:00 PM', '4:00 PM', '5:00 PM'],
    },
}


def _merge(base: dict, overrides: dict) -> dict:
    merged = dict(base)
    for key, value in overrides.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_assistant_settings(path: str | None = None) -> AssistantSettings:
    """Build the assistant settings from the defaults and an optional JSON override file."""
    data = DEFAULT_SETTINGS
    if path:
        overrides = json.loads(Path(path).read_text(encoding='utf-8'))
        data = _merge(DEFAULT_SETTINGS, overrides)
        logger.info('Loaded assistant configuration overrides from %s', path)
    return AssistantSettings.model_validate(data)
