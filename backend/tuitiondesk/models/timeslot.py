"""
Modèle SQLAlchemy pour les créneaux horaires.

Un créneau sans élève est un créneau de classe (normal) ; un créneau avec élève
est un cours particulier (1 to 1). student_id référence l'identifiant métier de
l'élève (students.student_id) sans clé étrangère : un cours particulier peut
survivre à la désinscription de l'élève.
"""

import uuid
from sqlalchemy import CheckConstraint, Column, DateTime, ForeignKey, String, func
from sqlalchemy.dialects.postgresql import UUID

from tuitiondesk.database import Base


class Timeslot(Base):
    __tablename__ = "timeslots"
    __table_args__ = (
        CheckConstraint(
            "(student_id IS NULL AND student_name IS NULL) "
            "OR (student_id IS NOT NULL AND student_name IS NOT NULL)",
            name="timeslot_student_pairing",
        ),
    )

    timeslot_id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    subject_code = Column(String(50), ForeignKey("subjects.code", ondelete="CASCADE"), nullable=False, index=True)
    day = Column(String(10), nullable=False)  # Monday ... Sunday
    start_time = Column(String(8), nullable=False)  # HH:MM ou HH:MM:SS
    end_time = Column(String(8), nullable=False)
    teacher_name = Column(String(150), nullable=False, default="")
    student_id = Column(String(50), nullable=True, index=True)
    student_name = Column(String(150), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
