"""
Setting model — key/value configuration rows edited by admins.
"""
from sqlalchemy import Column, Text, DateTime, JSON, ForeignKey
from sqlalchemy.sql import func

from outreach.database import Base


class Setting(Base):
    __tablename__ = 'settings'

    key = Column(Text, primary_key=True)
    value = Column(JSON, nullable=True)
    description = Column(Text, default='')
    updated_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_by = Column(Text, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
