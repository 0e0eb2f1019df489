"""
Modèle SQLAlchemy pour la table students.
Les matières suivies ne sont pas stockées ici : voir student_subjects.
"""

import uuid
from sqlalchemy import Boolean, Column, Date, DateTime, String, func
from sqlalchemy.dialects.postgresql import ARRAY, UUID

from tuitiondesk.database import Base


class Student(Base):
    __tablename__ = "students"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    student_id = Column(String(50), unique=True, nullable=False)  # identifiant métier (ex. "S0001")
    name = Column(String(150), nullable=False)
    full_name = Column(String(255), nullable=True)
    parent_name = Column(String(150), nullable=True)
    student_phone = Column(String(30), nullable=True)
    parent_phone = Column(String(30), nullable=True)
    email = Column(String(255), nullable=True)
    school = Column(String(150), nullable=True)
    grade = Column(String(20), nullable=True)
    status = Column(String(20), nullable=False, default="pending")  # active, pending, trial, inactive, removed
    class_in_id = Column(String(50), nullable=True)
    registered_date = Column(Date, nullable=True)
    modes = Column(ARRAY(String(20)), nullable=True)  # NORMAL, 1 TO 1, OTHERS
    dlp = Column(String(10), nullable=False, default="non-DLP")

    # Suivi financier
    recurring_payment = Column(Boolean, default=False)
    next_recurring_payment_date = Column(Date, nullable=True)
    last_payment_made_date = Column(Date, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())
