"""
Model: Account
"""

from flask_login import UserMixin

from ouranimelist.db import db, now_utc


class Account(UserMixin, db.Model):
    __tablename__ = "accounts"

    name = db.Column(db.String(100), primary_key=True)
    password = db.Column(db.String(255), nullable=False)
    admin_access = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, default=now_utc)

    @property
    def is_admin(self):
        return bool(self.admin_access)

    @property
    def role(self):
        return "Admin" if self.is_admin else "User"

    def get_id(self):
        return self.name

    def has_admin_access(self):
        return self.is_admin

    def has_access(self, access):
        if access == "admin":
            return self.has_admin_access()
        return access == "user"
