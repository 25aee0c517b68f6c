import structlog
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from ....domain.errors import NotFound
from ....infrastructure.db import get_db
from ....infrastructure.models import Course, Lesson
from ....infrastructure.cache import get_cache, set_cache, course_key
from ....infrastructure.metrics import cache_hits_total, cache_misses_total, db_queries_total
from ..schemas import CourseOut, CourseCreate

router = APIRouter(prefix="/api/courses", tags=["courses"])
logger = structlog.get_logger()

@router.post("", response_model=CourseOut, status_code=status.HTTP_201_CREATED)
def create_course(payload: CourseCreate, db: Session = Depends(get_db)):
    row = Course(title=payload.title, description=payload.description)
    row.lessons = [
        Lesson(position=i, title=l.title, type=l.type, content_url=l.content_url)
        for i, l in enumerate(payload.lessons)
    ]
    db_queries_total.labels(operation="insert").inc()
    db.add(row); db.commit(); db.refresh(row)
    result = CourseOut.model_validate(row)
    # Курс неизменяем: кладём его в кэш сразу; список курсов не кэшируется
    set_cache(course_key(row.id), result.model_dump(mode="json", by_alias=True))
    logger.info("course_created", course_id=row.id, lessons=len(row.lessons))
    return result

@router.get("", response_model=list[CourseOut])
def list_courses(db: Session = Depends(get_db)):
    db_queries_total.labels(operation="select").inc()
    rows = db.query(Course).order_by(Course.created_at, Course.id).all()
    return [CourseOut.model_validate(row) for row in rows]

@router.get("/{course_id}", response_model=CourseOut)
def get_course(course_id: str, db: Session = Depends(get_db)):
    cached = get_cache(course_key(course_id))
    if cached is not None:
        cache_hits_total.inc()
        return cached

    cache_misses_total.inc()
    db_queries_total.labels(operation="select").inc()
    # id произвольной формы: неизвестный или битый id одинаково дают 404
    row = db.get(Course, course_id)
    if not row:
        raise NotFound("Course not found")
    result = CourseOut.model_validate(row)
    set_cache(course_key(course_id), result.model_dump(mode="json", by_alias=True))
    return result
