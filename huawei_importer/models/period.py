# huawei_importer/models/period.py
from dataclasses import dataclass


@dataclass(frozen=True)
class Period:
    year: int
    month: int  # 1..12

    def __str__(self) -> str:
        return f"{self.year}-{self.month:02d}"
