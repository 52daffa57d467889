# domain/entities/driver.py
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Driver:
    name: str
