# domain/entities/driver.py
from dataclasses import dataclass


@dataclass(frozen=True)
class Driver:
    id: int

    def __str__(self) -> str:
        return f"D-{self.id}"
