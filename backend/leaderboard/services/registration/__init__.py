"""Raffle registration against the third-party event form."""

from .client import (
    RegistrationClient,
    RegistrationReceipt,
    SubmissionError,
    SubmitFailed,
    TokenExtractFailed,
    TokenFetchFailed,
)
from .form import RegistrationForm, occupation_label

__all__ = [
    'RegistrationClient',
    'RegistrationForm',
    'RegistrationReceipt',
    'SubmissionError',
    'SubmitFailed',
    'TokenExtractFailed',
    'TokenFetchFailed',
    'occupation_label',
]
