from dataclasses import dataclass
from enum import Enum
from typing import Annotated, ClassVar, List, Union

from email_validator import validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field


MIN_AGE = 1
MAX_AGE = 120


def _check_email(v: str) -> str:
    """
    Check address syntax but store the address exactly as sent.
    The display-name form (`Name <addr>`) is not an address.
    """
    if "<" in v:
        raise ValueError("display names are not allowed")
    validate_email(v, check_deliverability=False)
    return v


Email = Annotated[str, AfterValidator(_check_email)]


class StudentField(str, Enum):
    """Columns a partial update is allowed to touch."""

    NAME = "name"
    EMAIL = "email"
    AGE = "age"


@dataclass(frozen=True)
class NameChange:
    value: str
    field: ClassVar[StudentField] = StudentField.NAME


@dataclass(frozen=True)
class EmailChange:
    value: str
    field: ClassVar[StudentField] = StudentField.EMAIL


@dataclass(frozen=True)
class AgeChange:
    value: int
    field: ClassVar[StudentField] = StudentField.AGE


FieldChange = Union[NameChange, EmailChange, AgeChange]


class StudentCreate(BaseModel):
    name: str = Field(min_length=1)
    email: Email
    age: int = Field(ge=MIN_AGE, le=MAX_AGE, strict=True)


class StudentUpdate(BaseModel):
    """
    PATCH body. Every field is optional but an explicit ``null`` is rejected;
    unknown keys are dropped.
    """

    name: str = Field(None, min_length=1)
    email: Email = None
    age: int = Field(None, ge=MIN_AGE, le=MAX_AGE, strict=True)

    def to_changes(self) -> List[FieldChange]:
        """Tagged changes for the fields actually present in the request body."""
        changes: List[FieldChange] = []
        if "name" in self.model_fields_set:
            changes.append(NameChange(self.name))
        if "email" in self.model_fields_set:
            changes.append(EmailChange(self.email))
        if "age" in self.model_fields_set:
            changes.append(AgeChange(self.age))
        return changes


class Student(BaseModel):
    id: int
    name: str
    email: str
    age: int

    model_config = ConfigDict(from_attributes=True)
