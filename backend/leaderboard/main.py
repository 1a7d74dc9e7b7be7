from flask import Blueprint, jsonify, render_template
from leaderboard.services.scores.ledger import ScoreLedger
from leaderboard.services.scores.ranking import rank_scores

main = Blueprint('main', __name__)


@main.route('/')
def index():
    placements = rank_scores(ScoreLedger().scan_leaderboard())
    return render_template('index.html', scores=placements)


@main.route('/api/leaderboard')
def leaderboard_json():
    placements = rank_scores(ScoreLedger().scan_leaderboard())
    return jsonify([row.to_dict() for row in placements])
