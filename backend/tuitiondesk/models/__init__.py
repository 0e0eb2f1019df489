# Importe tous les modèles pour enregistrer leurs tables dans Base.metadata
# avant que SQLAlchemy tente de résoudre les clés étrangères inter-modèles.

from tuitiondesk.models.user import User  # noqa: F401
from tuitiondesk.models.student import Student  # noqa: F401
from tuitiondesk.models.subject import Subject, StudentSubject  # noqa: F401
from tuitiondesk.models.timeslot import Timeslot  # noqa: F401
