"""
Page model — one row per Facebook Page URL, reused on re-analysis.
"""
from sqlalchemy import Column, Integer, Text, DateTime, ForeignKey
from sqlalchemy.sql import func

from outreach.database import Base


class Page(Base):
    __tablename__ = 'pages'

    id = Column(Integer, primary_key=True, autoincrement=True)
    url = Column(Text, nullable=False, unique=True)
    page_id = Column(Text, nullable=True)  # Facebook's own page id, when known
    name = Column(Text, default='')
    category = Column(Text, nullable=True)
    contact_email = Column(Text, nullable=True)
    about = Column(Text, nullable=True)
    cover_image_url = Column(Text, nullable=True)
    profile_image_url = Column(Text, nullable=True)
    last_analyzed_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    created_by = Column(Text, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'url': self.url,
            'page_id': self.page_id,
            'name': self.name,
            'category': self.category,
            'contact_email': self.contact_email,
            'about': self.about,
            'cover_image_url': self.cover_image_url,
            'profile_image_url': self.profile_image_url,
            'last_analyzed_at': self.last_analyzed_at.isoformat() if self.last_analyzed_at else None,
            'created_at': self.created_at.isoformat() if self.created_at else None,
            'created_by': self.created_by,
        }
