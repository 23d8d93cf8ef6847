"""
Draft model — editable outreach message derived from an Analysis.
"""
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from outreach.database import Base


class Draft(Base):
    __tablename__ = 'drafts'

    id = Column(Integer, primary_key=True, autoincrement=True)
    campaign_id = Column(Integer, ForeignKey('campaigns.id', ondelete='SET NULL'), nullable=True, index=True)
    page_id = Column(Integer, ForeignKey('pages.id'), nullable=False)
    analysis_id = Column(Integer, ForeignKey('analyses.id'), nullable=False, index=True)
    fb_message = Column(Text, nullable=True)
    email_subject = Column(Text, nullable=True)
    email_body = Column(Text, nullable=True)
    pdf_path = Column(Text, nullable=True)
    status = Column(Text, nullable=False, default='pending')
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(Text, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    reviewed_by = Column(Text, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)
    scheduled_for = Column(DateTime(timezone=True), nullable=True)
    version = Column(Integer, nullable=False, default=1)

    def to_dict(self):
        return {
            'id': self.id,
            'campaign_id': self.campaign_id,
            'page_id': self.page_id,
            'analysis_id': self.analysis_id,
            'fb_message': self.fb_message,
            'email_subject': self.email_subject,
            'email_body': self.email_body,
            'pdf_path': self.pdf_path,
            'status': self.status,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'created_by': self.created_by,
            'reviewed_by': self.reviewed_by,
            'reviewed_at': self.reviewed_at.isoformat() if self.reviewed_at else None,
            'scheduled_for': self.scheduled_for.isoformat() if self.scheduled_for else None,
            'version': self.version,
        }
