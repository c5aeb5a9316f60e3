from collections import Counter
from typing import Iterable, List, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

Clause = Tuple[int, ...]

def literal_set_signature(clauses: Iterable[Clause]) -> Counter:
    """
    Multiset of clauses with each clause's literals sorted by variable.
    Two formulas have equal signatures when they differ only in clause
    order and in literal order inside clauses.
    """
    return Counter(tuple(sorted(clause, key=lambda lit: (abs(lit), lit))) for clause in clauses)

class CnfDocument(BaseModel):
    """Parsed CNF: built once, read-only afterwards."""
    model_config = ConfigDict(frozen=True)

    max_var: int = Field(ge=0)
    clauses: List[Clause] = Field(default_factory=list)

    @field_validator('clauses')
    @classmethod
    def validate_clauses(cls, v: List[Clause], info) -> List[Clause]:
        max_var = info.data.get('max_var')
        for i, clause in enumerate(v):
            for lit in clause:
                if lit == 0:
                    raise ValueError(f"Literal 0 is invalid in clause {i}")
                if max_var is not None and abs(lit) > max_var:
                    raise ValueError(f"Literal {lit} exceeds max_var {max_var} in clause {i}")
        return v

    @property
    def num_clauses(self) -> int:
        return len(self.clauses)

    def signature(self) -> Counter:
        return literal_set_signature(self.clauses)
