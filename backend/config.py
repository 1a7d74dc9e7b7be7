import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///leaderboard.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Shared secret the game client sends in the Authorization header. Empty rejects everything.
    SCORE_SUBMIT_TOKEN = os.environ.get('SCORE_SUBMIT_TOKEN', '')
    # Third-party raffle registration form
    REGISTRATION_URL = os.environ.get('REGISTRATION_URL') or 'https://hpi.de/registrierung/2025/gewinnspiel-gamescom-2025/'
    REGISTRATION_EVENT_ID = int(os.environ.get('REGISTRATION_EVENT_ID', '4062'))
    # Applies to both the token fetch and the form post (seconds)
    REGISTRATION_TIMEOUT_SEC = float(os.environ.get('REGISTRATION_TIMEOUT_SEC', '10'))
    # Optional httpx transport override (tests plug in a MockTransport)
    REGISTRATION_TRANSPORT = None
    # Return internal error details to clients instead of the generic messages
    EXPOSE_ERROR_DETAILS = os.environ.get('EXPOSE_ERROR_DETAILS', '0') == '1'
    ALLOWED_ORIGINS = [
        o.strip() for o in os.environ.get(
            'ALLOWED_ORIGINS', 'http://localhost:3000,http://127.0.0.1:3000'
        ).split(',') if o.strip()
    ]
