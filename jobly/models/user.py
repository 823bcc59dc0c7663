"""
User model for authentication.

Users log in with a username and password; is_admin grants access to the
admin-only routes.
"""

from sqlalchemy import Column, String, Text, Boolean, CheckConstraint
from jobly.core.database import Base


class User(Base):
    __tablename__ = "users"

    username = Column(String(25), primary_key=True)
    password = Column(Text, nullable=False)  # bcrypt hash
    first_name = Column(Text, nullable=False)
    last_name = Column(Text, nullable=False)
    email = Column(Text, CheckConstraint("email LIKE '_%@%'"), nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)

    def __repr__(self):
        return f"<User(username='{self.username}', is_admin={self.is_admin})>"
