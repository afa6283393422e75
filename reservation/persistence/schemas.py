from pydantic import BaseModel
from typing import Optional


class DataFileInfo(BaseModel):
    """Location and size of the data file"""
    path: str
    exists: bool
    size_bytes: Optional[int] = None

    def describe(self) -> str:
        if self.exists:
            return f"Data file: {self.path} ({self.size_bytes} bytes)"
        return "Data file: Not found"


class PersistenceSummary(BaseModel):
    message: str
    trains: int
    bookings: int
