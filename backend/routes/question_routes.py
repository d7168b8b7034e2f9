from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from backend.database import get_db
from backend.store import fetch_questions

router = APIRouter(tags=['questions'])


@router.get('/questions')
def list_questions(db: Session = Depends(get_db)):
    return {'success': True, 'questions': fetch_questions(db)}
