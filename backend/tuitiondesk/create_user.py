"""
Création d'un compte depuis la ligne de commande (premier administrateur).

Usage : python -m tuitiondesk.create_user --name "Admin" --email admin@centre.my --password ******** --role admin
"""

import argparse
import logging
import sys

from pydantic import ValidationError

import tuitiondesk.models  # noqa: F401
from tuitiondesk.database import SessionLocal
from tuitiondesk.errors import DomainError
from tuitiondesk.schemas.user import UserCreate
from tuitiondesk.services import user_service

logger = logging.getLogger(__name__)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Crée un compte du tableau de bord.")
    parser.add_argument("--name", required=True)
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    parser.add_argument("--role", default="admin", choices=["admin", "staff"])
    return parser.parse_args(argv)


def main(argv=None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    args = parse_args(argv)
    try:
        data = UserCreate(name=args.name, email=args.email, role=args.role, password=args.password)
    except ValidationError as e:
        logger.error("Données invalides : %s", e.errors()[0]["msg"])
        return 2

    db = SessionLocal()
    try:
        user = user_service.create_user(db, data)
    except DomainError as e:
        logger.error("%s", e.message)
        return 1
    finally:
        db.close()

    logger.info("Compte créé : %s (%s, %s)", user.email, user.role, user.id)
    return 0


if __name__ == "__main__":
    sys.exit(main())
