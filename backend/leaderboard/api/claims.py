import uuid

from flask import Blueprint, redirect, render_template, request, url_for
from leaderboard.errors import IncompleteSubmission, InvalidId, ScoreNotFound, UnknownClaim
from leaderboard.services.scores.ledger import ScoreLedger
from leaderboard.services.scores.settlement import ClaimDecision, settle_claim

claims = Blueprint('claims', __name__)

OCCUPATION_CHOICES = [
    ('school', 'Schüler:in'),
    ('university', 'Student:in'),
    ('parent', 'Elternteil'),
    ('other', 'Sonstiges'),
]


def _parse_score_id(raw_id: str) -> str:
    try:
        return str(uuid.UUID(raw_id))
    except ValueError:
        raise InvalidId(raw_id)


def _render_form(unclaimed, decision, error=None):
    return render_template(
        'claim_form.html',
        score=unclaimed,
        decision=decision,
        occupations=OCCUPATION_CHOICES,
        error_message=error.user_message if error else None,
        missing_field=error.field if error else None,
    )


# Kiosk pages are browser forms, so these errors render HTML instead of JSON
@claims.errorhandler(InvalidId)
@claims.errorhandler(UnknownClaim)
def handle_claim_error(exc):
    return render_template('claim_error.html', error_message=exc.user_message), exc.status_code


@claims.route('/list', methods=['GET'])
def unclaimed_scores_list():
    unclaimed_scores = ScoreLedger().scan_unclaimed()
    return render_template('claim_list.html', unclaimed_scores=unclaimed_scores)


@claims.route('/<string:score_id>', methods=['GET'])
def claim_score_form(score_id):
    score_id = _parse_score_id(score_id)
    try:
        unclaimed = ScoreLedger().fetch_unclaimed(score_id)
    except ScoreNotFound:
        # Already claimed or never existed: back to the list
        return redirect(url_for('claims.unclaimed_scores_list'))
    return _render_form(unclaimed, ClaimDecision())


@claims.route('/<string:score_id>', methods=['POST'])
def claim_score_submit(score_id):
    score_id = _parse_score_id(score_id)
    decision = ClaimDecision.from_form(request.form)
    try:
        settle_claim(score_id, decision)
    except IncompleteSubmission as exc:
        try:
            unclaimed = ScoreLedger().fetch_unclaimed(score_id)
        except ScoreNotFound:
            # Claimed by someone else while this form was being checked
            return redirect(url_for('claims.unclaimed_scores_list'), code=303)
        return _render_form(unclaimed, decision, exc), 400
    return redirect(url_for('claims.unclaimed_scores_list'), code=303)
