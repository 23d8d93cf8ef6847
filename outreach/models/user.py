"""
User models — login identity + profile.

An AuthIdentity is what sign-in checks against. Inserting one creates the
matching User profile (pending approval) through the after_insert hook below,
so callers never write profiles directly on sign-up.
"""
import uuid

from sqlalchemy import Column, Text, DateTime, JSON, ForeignKey, event
from sqlalchemy.sql import func

from outreach.database import Base


def _new_id():
    return str(uuid.uuid4())


class AuthIdentity(Base):
    __tablename__ = 'auth_identities'

    id = Column(Text, primary_key=True, default=_new_id)
    email = Column(Text, nullable=False, unique=True)
    password_hash = Column(Text, nullable=False)
    user_metadata = Column(JSON, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class User(Base):
    __tablename__ = 'users'

    id = Column(Text, ForeignKey('auth_identities.id'), primary_key=True)
    email = Column(Text, nullable=False)
    name = Column(Text, default='')
    role = Column(Text, nullable=False, default='analyst')
    status = Column(Text, nullable=False, default='pending_approval')
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    last_login_at = Column(DateTime(timezone=True), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'role': self.role,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'last_login_at': self.last_login_at.isoformat() if self.last_login_at else None,
        }


@event.listens_for(AuthIdentity, 'after_insert')
def create_profile_for_identity(mapper, connection, target):
    """Insert the profile row for a freshly registered identity."""
    meta = target.user_metadata or {}
    connection.execute(
        User.__table__.insert().values(
            id=target.id,
            email=target.email,
            name=meta.get('name') or target.email.split('@')[0],
            role='analyst',
            status='pending_approval',
        )
    )
