from typing import Any, Dict, List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from student_api.api.deps import get_db, get_json_body, get_patch_body, get_student_id
from student_api.core.validation import validate_payload
from student_api.schemas.response import SuccessResponse
from student_api.schemas.student import Student, StudentCreate, StudentUpdate
from student_api.services.student import student as crud_student

router = APIRouter()


@router.post("", response_model=SuccessResponse[int], status_code=status.HTTP_201_CREATED)
def create_student(
    payload: Dict[str, Any] = Depends(get_json_body),
    db: Session = Depends(get_db)
):
    """
    Create a student

    Body:
    - **name**: non-empty string
    - **email**: valid email address, unique across students
    - **age**: integer between 1 and 120
    """
    student = validate_payload(StudentCreate, payload)
    student_id = crud_student.create_student(
        db, name=student.name, email=student.email, age=student.age
    )
    return SuccessResponse[int](message="student created successfully", data=student_id)


@router.get("", response_model=SuccessResponse[List[Student]])
def get_students(db: Session = Depends(get_db)):
    """
    List every student
    """
    students = crud_student.get_students(db)
    return SuccessResponse[List[Student]](
        message="students fetched successfully",
        data=[Student.model_validate(s) for s in students],
    )


@router.get("/{student_id}", response_model=SuccessResponse[Student])
def get_student(
    student_id: int = Depends(get_student_id),
    db: Session = Depends(get_db)
):
    """
    Fetch one student by id
    """
    student = crud_student.get_student(db, student_id=student_id)
    return SuccessResponse[Student](
        message="student fetched successfully",
        data=Student.model_validate(student),
    )


@router.patch("/{student_id}", response_model=SuccessResponse[Student])
def update_student(
    student_id: int = Depends(get_student_id),
    payload: Dict[str, Any] = Depends(get_patch_body),
    db: Session = Depends(get_db)
):
    """
    Update some fields of a student

    Any subset of **name**, **email** and **age**; other keys are ignored.
    """
    changes = validate_payload(StudentUpdate, payload).to_changes()
    student = crud_student.update_student(db, student_id=student_id, changes=changes)
    return SuccessResponse[Student](
        message="student updated successfully",
        data=Student.model_validate(student),
    )


@router.delete("/{student_id}", response_model=SuccessResponse[int])
def delete_student(
    student_id: int = Depends(get_student_id),
    db: Session = Depends(get_db)
):
    """
    Delete a student, returning the number of rows removed
    """
    rows_deleted = crud_student.delete_student(db, student_id=student_id)
    return SuccessResponse[int](message="student deleted successfully", data=rows_deleted)
