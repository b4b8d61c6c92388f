# src/configkit/schema.py
"""
LLM output contract (schema).

Purpose:
- Define the strict, machine-validated shape of the four generated sections.
- Keep probabilistic output away from the audit-relevant sections: only
  role, context, directives and build sequence can ever be overridden.

Design principles:
- Every field is optional; a missing or blank section means "use the template".
- Unknown keys from the model are ignored rather than rejected.
- Validation via Pydantic before anything reaches the assembler.
"""
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Keys accepted in a caller-supplied override mapping, in document order.
OVERRIDE_KEYS = ("role", "context", "directives", "buildSeq")


class AISections(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    # Replaces the "## Role" body
    role: Optional[str] = Field(None, description="2-3 sentences: who the assistant is, what it builds, priorities.")

    # Replaces the "## Project Context" body
    context: Optional[str] = Field(None, description="3-5 sentences: what the project does and for whom.")

    # Replaces the "## Behavioral Directives" body (markdown bullets)
    directives: Optional[str] = Field(None, description="8-10 '- ' bullets of project-specific rules.")

    # Replaces the "## Build Sequence" body (numbered list)
    build_seq: Optional[str] = Field(None, alias="buildSeq", description="6-8 numbered build steps.")

    @field_validator("role", "context", "directives", "build_seq", mode="before")
    @classmethod
    def _blank_is_absent(cls, v):
        # Non-string or whitespace-only values carry no usable override.
        if not isinstance(v, str) or not v.strip():
            return None
        return v

    def has_any(self) -> bool:
        return any((self.role, self.context, self.directives, self.build_seq))
