"""
Analysis model — one scored assessment of a Page.

Rows are never edited; deleting one removes its drafts as well
(see services.pages.delete_analysis).
"""
from sqlalchemy import Column, Integer, Float, Text, DateTime, JSON, ForeignKey
from sqlalchemy.sql import func

from outreach.database import Base


class Analysis(Base):
    __tablename__ = 'analyses'

    id = Column(Integer, primary_key=True, autoincrement=True)
    page_id = Column(Integer, ForeignKey('pages.id'), nullable=False, index=True)
    overall_score = Column(Integer, nullable=False)
    issues = Column(JSON, default=list)        # [{type, severity, description}]
    suggestions = Column(JSON, default=list)   # [{title, description, priority}]
    images_analyzed = Column(Integer, default=0)
    need_decision = Column(Text, nullable=False)  # yes / maybe / no
    confidence_score = Column(Float, nullable=True)
    rationale = Column(Text, default='')
    analysis_date = Column(DateTime(timezone=True), server_default=func.now())
    analyzed_by = Column(Text, ForeignKey('users.id', ondelete='SET NULL'), nullable=True)

    def to_dict(self):
        return {
            'id': self.id,
            'page_id': self.page_id,
            'overall_score': self.overall_score,
            'issues': self.issues or [],
            'suggestions': self.suggestions or [],
            'images_analyzed': self.images_analyzed,
            'need_decision': self.need_decision,
            'confidence_score': self.confidence_score,
            'rationale': self.rationale,
            'analysis_date': self.analysis_date.isoformat() if self.analysis_date else None,
            'analyzed_by': self.analyzed_by,
        }
