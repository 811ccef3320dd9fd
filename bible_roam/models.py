from typing import List, Optional
from pydantic import BaseModel


class RoamBlock(BaseModel):
    string: str
    heading: Optional[int] = None
    children: Optional[List["RoamBlock"]] = None


class RoamDocument(BaseModel):
    title: str
    children: List[RoamBlock]
