from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from src.projects.schemas import IdeaUpdate


class GeneratedIdeaReport(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    literature_summary: str
    research_gaps: str
    novelty_score: float = Field(ge=0, le=100)
    similarity_score: float = Field(ge=0, le=100)
    feasibility_assessment: str
    ai_suggestions: str | None = None


class AutonomousIdea(BaseModel):
    id: str
    question: str
    rationale: str


class GenerateReportRequest(BaseModel):
    idea: IdeaUpdate | None = None
