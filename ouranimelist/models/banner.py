"""
Model: Banner

A tracked release schedule, owned by exactly one account. Titles are unique per
owner, not globally.
"""

from ouranimelist.db import db, now_utc


class Banner(db.Model):
    __tablename__ = "banners"

    # Surrogate key, only used to keep insertion order stable
    id = db.Column(db.Integer, primary_key=True)
    owner = db.Column(db.String(100), db.ForeignKey("accounts.name"), nullable=False)
    title = db.Column(db.String, nullable=False)
    image = db.Column(db.LargeBinary)
    release_day = db.Column(db.String(16), nullable=False)
    release_time = db.Column(db.String(16), nullable=False)
    current_episodes = db.Column(db.Integer, nullable=False, default=0)
    total_episodes = db.Column(db.Integer, nullable=False, default=0)
    added_at = db.Column(db.DateTime, default=now_utc)

    __table_args__ = (
        db.UniqueConstraint("owner", "title", name="uq_banners_owner_title"),
        db.Index("idx_banners_owner_release_day", "owner", "release_day"),
    )

    def to_dict(self, include_image=True):
        import base64

        data = {
            "title": self.title,
            "release_day": self.release_day,
            "release_time": self.release_time,
            "current_episodes": self.current_episodes,
            "total_episodes": self.total_episodes,
        }
        if include_image:
            data["image"] = base64.b64encode(self.image).decode("ascii") if self.image else None
        return data
