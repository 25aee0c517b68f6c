import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session
from ....domain.errors import PersistenceFailure
from ....infrastructure.db import get_db
from ....infrastructure.models import Progress, utcnow
from ....infrastructure.metrics import db_queries_total
from ..schemas import ProgressSave, ProgressOut

router = APIRouter(prefix="/api/progress", tags=["progress"])
logger = structlog.get_logger()

# диалекты, умеющие INSERT ... ON CONFLICT DO UPDATE
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}

def _upsert_insert(db: Session):
    dialect = db.get_bind().dialect.name
    try:
        return _UPSERT_INSERTS[dialect]
    except KeyError:
        raise PersistenceFailure(f"progress upsert is not supported for {dialect}")

@router.post("", response_model=ProgressOut)
def save_progress(payload: ProgressSave, db: Session = Depends(get_db)):
    # атомарный UPSERT по (student_id, course_id): изменяемые поля перезаписываются целиком
    insert = _upsert_insert(db)
    stmt = insert(Progress).values(
        student_id=payload.student_id,
        course_id=payload.course_id,
        completed_lessons=payload.completed_lessons,
        quiz_results=payload.quiz_results,  # хранится как прислал клиент
        completion_percentage=payload.completion_percentage,
        updated_at=utcnow(),
    )
    stmt = stmt.on_conflict_do_update(
        index_elements=["student_id", "course_id"],
        set_={
            "completed_lessons": stmt.excluded.completed_lessons,
            "quiz_results": stmt.excluded.quiz_results,
            "completion_percentage": stmt.excluded.completion_percentage,
            "updated_at": stmt.excluded.updated_at,
        },
    )
    db_queries_total.labels(operation="upsert").inc()
    db.execute(stmt)
    db.commit()

    row = db.execute(
        select(Progress).where(Progress.student_id == payload.student_id,
                               Progress.course_id == payload.course_id)
    ).scalar_one()
    logger.info("progress_saved", student_id=payload.student_id, course_id=payload.course_id,
                completion_percentage=payload.completion_percentage)
    return ProgressOut.model_validate(row)

@router.get("/{student_id}", response_model=list[ProgressOut])
def student_progress(student_id: str, db: Session = Depends(get_db)):
    db_queries_total.labels(operation="select").inc()
    q = (select(Progress)
         .where(Progress.student_id == student_id)
         .order_by(Progress.id))
    rows = db.execute(q).scalars().all()
    return [ProgressOut.model_validate(r) for r in rows]

@router.get("/{student_id}/{course_id}", response_model=ProgressOut)
def course_progress(student_id: str, course_id: str, db: Session = Depends(get_db)):
    db_queries_total.labels(operation="select").inc()
    row = db.execute(
        select(Progress).where(Progress.student_id == student_id,
                               Progress.course_id == course_id)
    ).scalar_one_or_none()
    if not row:
        # прогресса ещё нет: пустой прогресс вместо 404
        return ProgressOut(student_id=student_id, course_id=course_id)
    return ProgressOut.model_validate(row)
