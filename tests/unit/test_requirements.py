"""Unit tests for physical requirement tracking."""

import pytest

from app.core.exceptions import LedgerValidationError
from app.ledger.requirements import adjust_requirement
from app.schemas.ledger import PhysicalRequirement
from tests.factories import make_student


def _student():
    return make_student(physical_requirements=[
        PhysicalRequirement(name="Reams", required=4, brought=1),
        PhysicalRequirement(name="Gloves", required=2, brought=0),
    ])


def test_bringing_items():
    updated = adjust_requirement(_student(), "Reams", 2)
    assert updated.physical_requirements[0].brought == 3
    assert updated.physical_requirements[1].brought == 0


def test_never_below_zero():
    updated = adjust_requirement(_student(), "Reams", -5)
    assert updated.physical_requirements[0].brought == 0


def test_original_is_not_modified():
    student = _student()
    adjust_requirement(student, "Gloves", 1)
    assert student.physical_requirements[1].brought == 0


def test_unknown_requirement():
    with pytest.raises(LedgerValidationError):
        adjust_requirement(_student(), "Boots", 1)
