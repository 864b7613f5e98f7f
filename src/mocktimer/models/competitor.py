"""Competitor definition model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from mocktimer.config import CAR_NUMBER_OFFSET


class Competitor(BaseModel):
    """A racer on the roster, identified by its transponder id."""

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        str_min_length=1,
        protected_namespaces=(),
    )

    first_name: str
    last_name: str
    rfid: int = Field(gt=0)
    tag: str
    category: str
    make: str
    model: str

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def car_number(self) -> int:
        """Displayed car number derived from the transponder id."""
        return self.rfid - CAR_NUMBER_OFFSET
