from .service import DataPersistence
from .schemas import DataFileInfo, PersistenceSummary

__all__ = ["DataPersistence", "DataFileInfo", "PersistenceSummary"]
