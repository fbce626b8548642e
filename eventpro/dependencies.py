# eventpro/dependencies.py
from fastapi import Depends

from eventpro.database import Database, get_database
from eventpro.services.dashboard import DashboardService
from eventpro.services.events import EventService
from eventpro.services.inscriptions import InscriptionService
from eventpro.services.users import UserService


def get_user_service(db: Database = Depends(get_database)) -> UserService:
    return UserService(db.users)


def get_event_service(db: Database = Depends(get_database)) -> EventService:
    return EventService(db.events, db.users)


def get_inscription_service(db: Database = Depends(get_database)) -> InscriptionService:
    return InscriptionService(db.inscriptions, db.events, db.users)


def get_dashboard_service(db: Database = Depends(get_database)) -> DashboardService:
    return DashboardService(db.events, db.inscriptions, db.users)
