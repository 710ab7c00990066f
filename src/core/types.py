"""Shared type aliases used across the planner modules."""
from __future__ import annotations

from typing import Annotated, Union

from pydantic import Field, StringConstraints

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
PeopleCount = Annotated[int, Field(gt=0)]
Money = float
PlanId = Union[int, str]
