"""
Model: FlaggedAccount
"""

from ouranimelist.db import db


class FlaggedAccount(db.Model):
    __tablename__ = "flagged_accounts"

    account_name = db.Column(db.String(100), db.ForeignKey("accounts.name"), primary_key=True)
    flagged_at = db.Column(db.String(32), nullable=False)
    last_detected_at = db.Column(db.String(32), nullable=False)
    detections = db.Column(db.Integer, nullable=False, default=1)

    def to_dict(self):
        return {
            "account": self.account_name,
            "flagged_at": self.flagged_at,
            "last_detected_at": self.last_detected_at,
            "detections": self.detections,
        }
