"""Analysis Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - AnalyzeRequest.clause: 1-10000 chars, stripped, non-empty
    - ClauseInput ids are unique within one request
    - DiffRequest sides may be empty strings (an empty side is a pure insert/delete)

Design Decisions:
    - field_validator for side-effect-free transforms (strip)
    - Responses are the core's plain dicts; only requests get models
"""

from pydantic import BaseModel, Field, field_validator, model_validator


class ClauseInput(BaseModel):
    """One clause of a multi-clause document."""
    id: str = Field(min_length=1, max_length=100)
    text: str = Field(min_length=1, max_length=10_000)
    section_number: str | None = Field(None, max_length=50)
    defined_terms: list[str] = Field(default_factory=list, max_length=50)

    @field_validator("id", "text")
    @classmethod
    def strip_required(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("cannot be empty or whitespace")
        return v

    @field_validator("defined_terms")
    @classmethod
    def drop_blank_terms(cls, v: list[str]) -> list[str]:
        return [t.strip() for t in v if t.strip()]


def _check_unique_ids(clauses: list[ClauseInput]) -> None:
    seen: set[str] = set()
    for clause in clauses:
        if clause.id in seen:
            raise ValueError(f"duplicate clause id: {clause.id}")
        seen.add(clause.id)


class AnalyzeRequest(BaseModel):
    """Single-clause analysis, optionally with rewrite and a clause list."""
    clause: str = Field(min_length=1, max_length=10_000)
    with_rewrite: bool = False
    clauses: list[ClauseInput] | None = None

    @field_validator("clause")
    @classmethod
    def strip_clause(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("clause cannot be empty or whitespace")
        return v

    @model_validator(mode="after")
    def check_clause_ids(self) -> "AnalyzeRequest":
        if self.clauses:
            _check_unique_ids(self.clauses)
        return self


class ClauseGraphRequest(BaseModel):
    """Dependency graph + equivalence classes for a clause list."""
    clauses: list[ClauseInput] = Field(min_length=1)
    threshold: float | None = Field(None, ge=0.0, le=1.0)

    @model_validator(mode="after")
    def check_clause_ids(self) -> "ClauseGraphRequest":
        _check_unique_ids(self.clauses)
        return self


class DiffRequest(BaseModel):
    """Word-level diff between two texts."""
    original: str = Field(max_length=10_000)
    revised: str = Field(max_length=10_000)
