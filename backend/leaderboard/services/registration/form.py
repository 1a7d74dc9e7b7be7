from dataclasses import dataclass
from typing import Dict

OCCUPATIONS = {
    'school': 'Schüler:in',
    'university': 'Student:in',
    'parent': 'Elternteil',
}
OTHER_OCCUPATION = 'sonstiges'
DATA_PROCESSING_CONSENT = 'Ja, ich stimme zu.'
FORM_ACTION = 'insert'


def occupation_label(occupation: str) -> str:
    return OCCUPATIONS.get((occupation or '').strip(), OTHER_OCCUPATION)


@dataclass
class RegistrationForm:
    """Identity fields of a raffle entry, already in the remote form's wording."""
    firstname: str
    lastname: str
    email: str
    occupation: str
    email_consent: str
    data_processing_consent: str = DATA_PROCESSING_CONSENT

    @classmethod
    def from_decision(cls, decision) -> 'RegistrationForm':
        return cls(
            firstname=decision.firstname.rstrip(),
            lastname=decision.lastname.rstrip(),
            email=decision.email.rstrip(),
            occupation=occupation_label(decision.occupation),
            email_consent='yes' if decision.newsletter else 'no',
        )

    def to_payload(self, token: str, event_id: int) -> Dict[str, str]:
        """Field names of the remote form, plus the one-time token."""
        return {
            'persons[0][first_name]': self.firstname,
            'persons[0][last_name]': self.lastname,
            'contactdetails_5[0][identification]': self.email,
            'registrationvarchars_103[0][registrationvarchar]': self.occupation,
            'registrationvarchars_105[0][registrationvarchar]': self.email_consent,
            'registrationvarchars_106[0][registrationvarchar]': self.data_processing_consent,
            'zz_id': token,
            'zz_action': FORM_ACTION,
            'events_contacts[0][event_id]': str(event_id),
        }
