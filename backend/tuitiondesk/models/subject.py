"""
Modèles SQLAlchemy pour les matières et les inscriptions élève ↔ matière.
"""

from sqlalchemy import Column, DateTime, ForeignKey, String, func
from sqlalchemy.dialects.postgresql import UUID

from tuitiondesk.database import Base


class Subject(Base):
    __tablename__ = "subjects"

    code = Column(String(50), primary_key=True)  # immuable après création
    name = Column(String(150), nullable=False)
    standard = Column(String(10), nullable=False)  # S1-S6, F1-F5, CP...
    type = Column(String(20), nullable=False)  # Classroom, 1 to 1
    subject = Column(String(150), nullable=False)  # nom de base nettoyé, sert au regroupement
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class StudentSubject(Base):
    """Inscription d'un élève à une matière. Source de vérité des inscriptions."""
    __tablename__ = "student_subjects"

    student_id = Column(UUID(as_uuid=True), ForeignKey("students.id", ondelete="CASCADE"), primary_key=True)
    subject_code = Column(String(50), ForeignKey("subjects.code", ondelete="RESTRICT"), primary_key=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
