from pydantic import BaseModel
from typing import Dict, List


class DashboardSection(BaseModel):
    key: str
    title: str
    counts: Dict[str, int]
    total: int


class DashboardResponse(BaseModel):
    sections: List[DashboardSection]
    documents: int
