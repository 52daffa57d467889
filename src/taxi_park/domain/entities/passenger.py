# domain/entities/passenger.py
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Passenger:
    name: str
