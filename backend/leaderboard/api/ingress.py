from flask import Blueprint, jsonify, request, current_app
from leaderboard import socketio
from leaderboard.errors import InvalidScore, MalformedColor, MissingAuth, WrongAuth
from leaderboard.services.scores.ingress import accept_score
from leaderboard.services.scores.ledger import ScoreLedger

ingress = Blueprint('ingress', __name__)


@ingress.route('/submit_score', methods=['POST'])
def submit_score():
    payload = request.get_json(silent=True)
    try:
        score_id = accept_score(
            request.headers.get('Authorization'),
            payload,
            current_app.config.get('SCORE_SUBMIT_TOKEN', ''),
            ScoreLedger(),
        )
    except (MissingAuth, WrongAuth, InvalidScore, MalformedColor) as exc:
        current_app.logger.warning(f"[ingress] rejected from {request.remote_addr}: {exc}")
        raise
    current_app.logger.info(f"[ingress] accepted id={score_id} score={payload['score']}")
    socketio.emit('unclaimed_update', {'id': score_id, 'claimed': False}, to='claims', namespace='/ws')
    return jsonify({'id': score_id})
