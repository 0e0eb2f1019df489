"""
Accès PostgreSQL du tableau de bord.

Un seul moteur par processus, injecté dans les routes par get_db. Les services
valident eux-mêmes leur transaction : un remplacement de planning ou une
synchronisation d'inscriptions se termine par un unique commit, ou un rollback.
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from tuitiondesk.config import settings

# pool_pre_ping : la base hébergée ferme les connexions restées inactives
engine = create_engine(settings.DATABASE_URL, pool_pre_ping=True)

# autoflush désactivé : sync_student_subjects lit les inscriptions courantes
# avant d'écrire, sans pousser les modifications de l'élève en cours d'édition
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

Base = declarative_base()


def get_db():
    """Session par requête ; toute transaction laissée ouverte est annulée à la fermeture."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
