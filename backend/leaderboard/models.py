from leaderboard import db
import time
import uuid


def generate_score_id():
    """Random, unguessable id handed to the game client."""
    return str(uuid.uuid4())


class UnclaimedScore(db.Model):
    __tablename__ = 'unclaimed_score'
    id = db.Column(db.String(36), primary_key=True, default=generate_score_id)
    score = db.Column(db.Integer, nullable=False)
    color = db.Column(db.String(7), nullable=False)
    # Only used to order the review list
    created_at = db.Column(db.Float, nullable=False, default=time.time)

    def to_dict(self):
        return {
            'id': self.id,
            'score': self.score,
            'color': self.color,
        }


class LeaderboardEntry(db.Model):
    __tablename__ = 'leaderboard_entry'
    id = db.Column(db.Integer, primary_key=True)
    # Stored already HTML-escaped
    nickname = db.Column(db.Text, nullable=False)
    score = db.Column(db.Integer, nullable=False, index=True)

    def to_dict(self):
        return {
            'nickname': self.nickname,
            'score': self.score,
        }
