from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ChatMessage(BaseModel):
    """A single turn of the assistant conversation."""
    role: Literal["user", "assistant", "model", "system"] = "user"
    content: str


class AssistantRequest(BaseModel):
    """
    Body of POST /idea-assistant. Either a one-shot `input` or a full
    `messages` history may be sent; `input` wins when both are present.
    """
    input: Optional[str] = None
    messages: Optional[List[ChatMessage]] = None

    def conversation(self) -> List[ChatMessage]:
        if self.input and self.input.strip():
            return [ChatMessage(role="user", content=self.input)]
        return [m for m in (self.messages or []) if m.content.strip()]


class IdeaRatings(BaseModel):
    """Scores out of 5. Out-of-range values are clamped when rendered."""
    model_config = ConfigDict(populate_by_name=True, allow_inf_nan=False)

    feasibility: Optional[float] = None
    innovation: Optional[float] = None
    public_impact: Optional[float] = Field(None, alias="publicImpact")
    time_to_mvp: Optional[float] = Field(None, alias="timeToMvp")
    revenue: Optional[float] = None
    overall: Optional[float] = None


class IdeaRecord(BaseModel):
    """
    Structured pitch produced by the focused chat. Only the title is
    required; every other field adds a slide when present.
    """
    model_config = ConfigDict(populate_by_name=True)

    title: str
    problem: Optional[str] = None
    solution: Optional[str] = None
    differentiator: Optional[str] = None
    market: Optional[str] = None
    validation: List[str] = Field(default_factory=list)
    mvp_time: Optional[str] = Field(None, alias="mvpTime")
    pitch: Optional[str] = None
    ratings: Optional[IdeaRatings] = None
    notes: List[str] = Field(default_factory=list)

    @field_validator("validation", "notes", mode="before")
    @classmethod
    def none_as_empty(cls, v):
        return [] if v is None else v


class StructureRequest(BaseModel):
    """Body of POST /idea-assistant/structure."""
    title: str = Field(..., min_length=1)
    messages: List[ChatMessage] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list)


class OutlineSlide(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str


class Outline(BaseModel):
    """Ordered slide titles parsed from a markdown slide outline."""
    model_config = ConfigDict(frozen=True)

    title: str
    slides: List[OutlineSlide]


class Registration(BaseModel):
    """Registration form record. Extra form fields are accepted as-is."""
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    full_name: str = Field(..., alias="fullName")
    email: str
    phone: str
    college: str
    department: str
    idea_title: str = Field(..., alias="ideaTitle")
    idea_summary: str = Field(..., alias="ideaSummary")


def describe_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into a single readable line."""
    parts = []
    for err in error.errors():
        location = ".".join(str(part) for part in err.get("loc", ()))
        parts.append(f"{location}: {err.get('msg')}" if location else str(err.get("msg")))
    return "; ".join(parts)
