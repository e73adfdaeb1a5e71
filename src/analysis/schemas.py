from pydantic import BaseModel


class GenerateQueryRequest(BaseModel):
    query: str


class DataReviewRequest(BaseModel):
    approved: bool


class RunAnalysisRequest(BaseModel):
    plan: str | None = None


class ValidateAnalysisRequest(BaseModel):
    interpretation: str | None = None
