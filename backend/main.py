import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from backend.core.config import get_settings, validate_runtime_config
from backend.core.exceptions import register_exception_handlers
from backend.core.log_config import configure_logging
from backend.database import Base, engine
from backend.models import admin, donor, medical_staff, question  # noqa: F401
from backend.routes import auth_routes, question_routes

settings = get_settings()
configure_logging(settings)

app = FastAPI(title='BloodConnect API')

app.add_middleware(
    CORSMiddleware,
    allow_origins=list(settings.cors_origins),
    allow_methods=['GET', 'POST'],
    allow_headers=['Content-Type', 'Authorization'],
)

register_exception_handlers(app)

logger = logging.getLogger(__name__)


@app.on_event('startup')
def initialize_database() -> None:
    validate_runtime_config(settings)
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError:
        logger.exception('Database initialization failed. Check DATABASE_URL and database credentials.')


@app.get('/')
def root():
    return {'status': 'BloodConnect API Running'}


app.include_router(auth_routes.router)
app.include_router(question_routes.router)
