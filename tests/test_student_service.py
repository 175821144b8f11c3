"""Unit tests for the student storage functions."""

import logging

import pytest

from student_api.core.exceptions import (
    ConstraintViolation,
    InvalidArgument,
    NotFound,
    StorageFailure,
)
from student_api.schemas.student import AgeChange, EmailChange, NameChange
from student_api.services.student import student as crud_student


@pytest.fixture
def student_id(db):
    return crud_student.create_student(db, name="John Doe", email="john@example.com", age=20)


class TestCreateAndRead:
    """Test cases for create_student, get_student and get_students."""

    def test_round_trip(self, db, student_id):
        """Test that a created student reads back unchanged."""
        student = crud_student.get_student(db, student_id)

        assert student_id >= 1
        assert (student.id, student.name, student.email, student.age) == (
            student_id,
            "John Doe",
            "john@example.com",
            20,
        )

    def test_ids_increase(self, db, student_id):
        """Test that each insert gets a new id."""
        second = crud_student.create_student(db, name="Ada", email="ada@example.com", age=36)

        assert second > student_id

    def test_duplicate_email(self, db, student_id):
        """Test that the unique email constraint is enforced by storage."""
        with pytest.raises(ConstraintViolation):
            crud_student.create_student(db, name="Other", email="john@example.com", age=40)

        # The session was rolled back and is still usable
        assert len(crud_student.get_students(db)) == 1
        assert crud_student.get_student(db, student_id).name == "John Doe"

    def test_get_missing(self, db):
        """Test that an unknown id raises NotFound."""
        with pytest.raises(NotFound, match="student with id 3 not found"):
            crud_student.get_student(db, 3)

    def test_list_empty(self, db):
        """Test that an empty table gives an empty list."""
        assert crud_student.get_students(db) == []

    def test_create_is_logged(self, db, caplog):
        """Test that creation is logged at INFO."""
        caplog.set_level(logging.INFO, logger="student_api")

        new_id = crud_student.create_student(db, name="Ada", email="ada@example.com", age=36)

        assert f"Student created successfully (id={new_id})" in caplog.text


class TestUpdate:
    """Test cases for update_student."""

    def test_only_given_field_changes(self, db, student_id):
        """Test that update(id, age=25) leaves name and email alone."""
        student = crud_student.update_student(db, student_id, [AgeChange(25)])

        assert student.age == 25
        assert student.name == "John Doe"
        assert student.email == "john@example.com"

    def test_all_fields(self, db, student_id):
        """Test changing every mutable field at once."""
        student = crud_student.update_student(
            db,
            student_id,
            [NameChange("Jane Doe"), EmailChange("jane@example.com"), AgeChange(30)],
        )

        assert (student.id, student.name, student.email, student.age) == (
            student_id,
            "Jane Doe",
            "jane@example.com",
            30,
        )

    def test_returns_stored_row(self, db, student_id):
        """Test that the returned row matches a fresh read."""
        crud_student.update_student(db, student_id, [NameChange("J. Doe")])

        assert crud_student.get_student(db, student_id).name == "J. Doe"

    def test_no_changes(self, db, student_id):
        """Test that an empty change set is an invalid argument."""
        with pytest.raises(InvalidArgument, match="no fields to update"):
            crud_student.update_student(db, student_id, [])

    def test_no_changes_checked_before_existence(self, db):
        """Test that an empty change set fails even for a missing id."""
        with pytest.raises(InvalidArgument):
            crud_student.update_student(db, 99, [])

    def test_missing(self, db):
        """Test that updating an unknown id raises NotFound."""
        with pytest.raises(NotFound):
            crud_student.update_student(db, 99, [AgeChange(30)])

    def test_duplicate_email(self, db, student_id):
        """Test that moving to a taken email is a constraint violation."""
        other = crud_student.create_student(db, name="Ada", email="ada@example.com", age=36)

        with pytest.raises(ConstraintViolation):
            crud_student.update_student(db, other, [EmailChange("john@example.com")])

        assert crud_student.get_student(db, other).email == "ada@example.com"


class TestDelete:
    """Test cases for delete_student."""

    def test_delete_existing(self, db, student_id):
        """Test that deleting returns 1 and the row is gone."""
        assert crud_student.delete_student(db, student_id) == 1

        with pytest.raises(NotFound):
            crud_student.get_student(db, student_id)

    def test_delete_missing(self, db):
        """Test that deleting an unknown id raises NotFound."""
        with pytest.raises(NotFound):
            crud_student.delete_student(db, 5)


class TestStorageFailure:
    """Test that driver errors are wrapped."""

    def test_missing_table(self, database, db):
        """Test that a broken schema surfaces as StorageFailure."""
        database.drop_tables()

        with pytest.raises(StorageFailure, match="failed to fetch students"):
            crud_student.get_students(db)

    def test_failure_on_write(self, database, db):
        """Test that a failed insert surfaces as StorageFailure."""
        database.drop_tables()

        with pytest.raises(StorageFailure, match="failed to create student"):
            crud_student.create_student(db, name="Ada", email="ada@example.com", age=36)
