import logging

from student_api.core.config import settings
from student_api.core.database import Database
from student_api.core.logging import setup_logging
from student_api.services.student import student as crud_student

logger = logging.getLogger(__name__)

SAMPLE_STUDENTS = [
    {"name": "Nguyen Van A", "email": "vana@example.com", "age": 20},
    {"name": "Tran Thi B", "email": "thib@example.com", "age": 21},
    {"name": "Le Van C", "email": "vanc@example.com", "age": 22},
]


def seed_data(database: Database) -> int:
    """
    Insert sample students into an empty table.

    Returns the number of students created; 0 when the table already holds data.
    """
    db = database.SessionLocal()
    try:
        # Check if data already exists to avoid duplication
        if crud_student.get_students(db):
            logger.info("Database already contains data. Skipping seed.")
            return 0

        logger.info("Seeding data...")
        for student in SAMPLE_STUDENTS:
            crud_student.create_student(db, **student)
    finally:
        db.close()  # Always close the connection

    logger.info(f"Seeded {len(SAMPLE_STUDENTS)} students")
    return len(SAMPLE_STUDENTS)


if __name__ == "__main__":
    setup_logging(settings.LOG_LEVEL)
    database = Database(settings.DATABASE_URL, echo=settings.DB_ECHO_SQL)
    database.init()
    seed_data(database)
    database.dispose()
