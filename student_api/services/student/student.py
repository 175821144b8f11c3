import logging
from contextlib import contextmanager
from typing import Iterator, List, Sequence

from sqlalchemy import delete, insert, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from student_api.core.exceptions import (
    ConstraintViolation,
    InvalidArgument,
    NotFound,
    StorageFailure,
)
from student_api.models.student import Student
from student_api.schemas.student import FieldChange, StudentField

logger = logging.getLogger(__name__)

students = Student.__table__

# Only these columns can ever appear in the SET clause of an update
UPDATABLE_COLUMNS = {
    StudentField.NAME: students.c.name,
    StudentField.EMAIL: students.c.email,
    StudentField.AGE: students.c.age,
}


@contextmanager
def _storage_errors(db: Session, action: str) -> Iterator[None]:
    """Roll back and translate driver errors into domain errors."""
    try:
        yield
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Constraint violation while trying to {action}: {e.orig}")
        raise ConstraintViolation("a student with this email already exists") from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to {action}: {e}")
        raise StorageFailure(f"failed to {action}") from e


def create_student(db: Session, name: str, email: str, age: int) -> int:
    """Insert a student and return its generated id."""
    with _storage_errors(db, "create student"):
        result = db.execute(insert(students).values(name=name, email=email, age=age))
        db.commit()

    student_id = result.inserted_primary_key[0]
    logger.info(f"Student created successfully (id={student_id})")
    return student_id


def get_student(db: Session, student_id: int) -> Student:
    """Fetch one student, raising NotFound when the id does not exist."""
    query = (
        select(Student)
        .where(Student.id == student_id)
        .execution_options(populate_existing=True)
    )
    with _storage_errors(db, "fetch student"):
        student = db.execute(query).scalar_one_or_none()

    if student is None:
        raise NotFound(f"student with id {student_id} not found")
    return student


def get_students(db: Session) -> List[Student]:
    """All students; an empty table gives an empty list."""
    with _storage_errors(db, "fetch students"):
        return list(db.execute(select(Student).order_by(Student.id)).scalars().all())


def update_student(db: Session, student_id: int, changes: Sequence[FieldChange]) -> Student:
    """
    Apply a partial update and return the row as stored afterwards.

    Only the columns named by ``changes`` are written, in a single UPDATE
    statement. The row is read back after the commit rather than trusting the
    driver's affected-row count.
    """
    if not changes:
        raise InvalidArgument("no fields to update")

    get_student(db, student_id)

    values = {UPDATABLE_COLUMNS[change.field]: change.value for change in changes}
    with _storage_errors(db, "update student"):
        db.execute(update(students).where(students.c.id == student_id).values(values))
        db.commit()

    logger.info(
        f"Student {student_id} updated: {', '.join(change.field.value for change in changes)}"
    )
    return get_student(db, student_id)


def delete_student(db: Session, student_id: int) -> int:
    """
    Delete a student and return the number of rows removed.

    Existence is checked first. A concurrent delete between the check and the
    statement leaves the row gone either way.
    """
    get_student(db, student_id)

    with _storage_errors(db, "delete student"):
        result = db.execute(delete(students).where(students.c.id == student_id))
        db.commit()

    logger.info(f"Student {student_id} deleted")
    return result.rowcount
