import structlog
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from ....config import settings
from ....infrastructure.db import get_db
from ....infrastructure.ratelimit import limiter
from ....infrastructure.repositories import StudentRepository
from ....infrastructure.security import PasswordHasher
from ....infrastructure.metrics import db_queries_total
from ....application.use_cases.register_student import RegisterStudent
from ....application.use_cases.login_student import LoginStudent
from ....application.use_cases.enroll_student import EnrollStudent
from ..schemas import RegisterReq, LoginReq, LoginResp, EnrollReq, MessageResp, CourseOut

router = APIRouter(prefix="/api", tags=["students"])
logger = structlog.get_logger()

@router.post("/students/register", response_model=MessageResp, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.REGISTER_RATE_LIMIT)
def register(request: Request, payload: RegisterReq, db: Session = Depends(get_db)):
    uc = RegisterStudent(repo=StudentRepository(db), hasher=PasswordHasher())
    student = uc.execute(payload.username, payload.password)
    logger.info("student_registered", student_id=student.id)
    # id наружу не отдаём, его возвращает только логин
    return MessageResp(message="Registration successful")

@router.post("/students/login", response_model=LoginResp)
@limiter.limit(settings.LOGIN_RATE_LIMIT)
def login(request: Request, payload: LoginReq, db: Session = Depends(get_db)):
    uc = LoginStudent(repo=StudentRepository(db), hasher=PasswordHasher())
    student = uc.execute(payload.username, payload.password)
    return LoginResp(student_id=student.id, username=student.username)

@router.post("/enroll", response_model=MessageResp)
def enroll(payload: EnrollReq, db: Session = Depends(get_db)):
    EnrollStudent(repo=StudentRepository(db)).execute(payload.student_id, payload.course_id)
    logger.info("student_enrolled", student_id=payload.student_id, course_id=payload.course_id)
    return MessageResp(message="Course enrolled successfully!")

@router.get("/students/{student_id}/enrolled", response_model=list[CourseOut])
def enrolled_courses(student_id: str, db: Session = Depends(get_db)):
    # неизвестный студент -> пустой список, а не 404
    db_queries_total.labels(operation="select").inc()
    rows = StudentRepository(db).enrolled_courses(student_id)
    return [CourseOut.model_validate(row) for row in rows]
