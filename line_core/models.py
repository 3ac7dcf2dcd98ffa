from __future__ import annotations
from typing import Dict, List, Literal
from pydantic import BaseModel, Field, model_validator

from .constants import LINE_SIZE, CATEGORY_A, CATEGORY_B

Category = Literal["O", "W"]

class Player(BaseModel):
    id: str
    name: str
    category: Category
    number: int = 0  # display number, recomputed from position in its category

class LinePattern(BaseModel):
    a_count: int = Field(ge=0)
    b_count: int = Field(ge=0)

    @model_validator(mode="after")
    def _fills_line(self):
        if self.a_count + self.b_count != LINE_SIZE:
            raise ValueError(f"pattern must fill a line of {LINE_SIZE}")
        return self

    def count_for(self, category: str) -> int:
        return self.a_count if category == CATEGORY_A else self.b_count

class RotationState(BaseModel):
    line_index: int = Field(default=0, ge=0)
    point_number: int = Field(default=1, ge=1)
    cursors: Dict[str, int] = Field(default_factory=lambda: {CATEGORY_A: 0, CATEGORY_B: 0})

class HistoryEntry(BaseModel):
    state: RotationState                              # snapshot taken before the advance
    team: Literal[1, 2]
    line: List[str] = Field(default_factory=list)     # player ids that played the point
    point_number: int = 1

class SeedPlayer(BaseModel):
    name: str
    category: Category
