"""
Reply model — inbound answer to a Message, classified upstream.
"""
from sqlalchemy import Column, Integer, Float, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from outreach.database import Base


class Reply(Base):
    __tablename__ = 'replies'

    id = Column(Integer, primary_key=True, autoincrement=True)
    message_id = Column(Integer, ForeignKey('messages.id'), nullable=False, index=True)
    page_id = Column(Integer, ForeignKey('pages.id'), nullable=False)
    platform = Column(Text, nullable=False)
    content = Column(Text, default='')
    classification = Column(Text, nullable=True)
    confidence_score = Column(Float, nullable=True)
    received_at = Column(DateTime(timezone=True), server_default=func.now())
    read_at = Column(DateTime(timezone=True), nullable=True)
    responded_at = Column(DateTime(timezone=True), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'message_id': self.message_id,
            'page_id': self.page_id,
            'platform': self.platform,
            'content': self.content,
            'classification': self.classification,
            'confidence_score': self.confidence_score,
            'received_at': self.received_at.isoformat() if self.received_at else None,
            'read_at': self.read_at.isoformat() if self.read_at else None,
            'responded_at': self.responded_at.isoformat() if self.responded_at else None,
        }
