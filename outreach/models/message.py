"""
Message model — immutable record written when a Draft is sent.
"""
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from outreach.database import Base


class Message(Base):
    __tablename__ = 'messages'

    id = Column(Integer, primary_key=True, autoincrement=True)
    draft_id = Column(Integer, ForeignKey('drafts.id'), nullable=False, index=True)
    page_id = Column(Integer, ForeignKey('pages.id'), nullable=False)
    platform = Column(Text, nullable=False)  # facebook / email
    platform_message_id = Column(Text, nullable=True)
    status = Column(Text, nullable=False, default='sent')
    sent_at = Column(DateTime(timezone=True), server_default=func.now())
    sent_by = Column(Text, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    error_message = Column(Text, nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'draft_id': self.draft_id,
            'page_id': self.page_id,
            'platform': self.platform,
            'platform_message_id': self.platform_message_id,
            'status': self.status,
            'sent_at': self.sent_at.isoformat() if self.sent_at else None,
            'sent_by': self.sent_by,
            'error_message': self.error_message,
        }
