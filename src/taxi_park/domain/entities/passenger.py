# domain/entities/passenger.py
from dataclasses import dataclass


@dataclass(frozen=True)
class Passenger:
    id: int

    def __str__(self) -> str:
        return f"P-{self.id}"
