from datetime import datetime
from enum import Enum
from typing import Any
from pydantic import BaseModel, Field


class ModuleStage(str, Enum):
    IDEA_GENERATION = "Idea Generation & Validation"
    PROPOSAL_DEVELOPMENT = "Proposal Development & Ethics"
    DATA_COLLECTION_ANALYSIS = "Data Collection, Aggregation & Analysis"
    MANUSCRIPT_WRITING = "Manuscript Writing & Publication"


MODULE_STAGES_ORDERED: list[ModuleStage] = [
    ModuleStage.IDEA_GENERATION,
    ModuleStage.PROPOSAL_DEVELOPMENT,
    ModuleStage.DATA_COLLECTION_ANALYSIS,
    ModuleStage.MANUSCRIPT_WRITING,
]


class IdeationMode(str, Enum):
    CLINICIAN_LED = "Clinician-Led Ideation (AI-Assisted)"
    AI_CO_CREATION = "AI Co-Creation Partnership"
    AUTONOMOUS_AI = "Autonomous AI Exploration"


class IdeaValidationStage(str, Enum):
    PRELIMINARY_SCREENING = "Preliminary Screening"
    IN_DEPTH_ANALYSIS = "In-depth Analysis"


class DataCollectionPathway(str, Enum):
    PATHWAY_A = "Pathway A: Engineer-Assisted & AI-Powered Querying"
    PATHWAY_B = "Pathway B: AI-Assisted GUI Extraction"


class EthicsStatus(str, Enum):
    NOT_SUBMITTED = "Not Submitted"
    SUBMITTED = "Submitted"
    FEEDBACK_RECEIVED = "Feedback Received"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class ManuscriptStatus(str, Enum):
    DRAFTING = "Drafting"
    REVIEW = "Review"
    READY_FOR_SUBMISSION = "Ready for Submission"


class ExpertRole(str, Enum):
    RESEARCHER = "researcher"
    STATISTICIAN = "statistician"
    DATA_ENGINEER = "data_engineer"


class AIReport(BaseModel):
    literature_summary: str
    research_gaps: str
    feasibility_assessment: str
    novelty_rating: str | None = None
    similarity_rating: str | None = None
    ai_suggestions: str | None = None


class ResearchIdea(BaseModel):
    concept: str = ""
    background: str | None = None
    objective: str | None = None
    methodology: str | None = None
    significance: str | None = None
    expected_outcomes: str | None = None
    ai_report: AIReport | None = None
    is_novel: bool | None = None
    expert_assigned: bool | None = None
    ideation_mode: IdeationMode | None = None
    novelty_score: float | None = None
    similarity_score: float | None = None
    validation_stage: IdeaValidationStage | None = None


class Proposal(BaseModel):
    title: str = ""
    sections: dict[str, str] = Field(default_factory=dict)
    ethics_status: EthicsStatus = EthicsStatus.NOT_SUBMITTED
    ethics_feedback: str | None = None
    statistician_assigned: bool | None = None
    precedent_comparison_report: str | None = None


class DataSet(BaseModel):
    name: str = ""
    description: str = ""
    source_query: str | None = None
    simulated_data: list[dict[str, Any]] | None = None
    collection_pathway: DataCollectionPathway | None = None
    data_engineer_reviewed: bool | None = None
    data_engineer_approved: bool | None = None


class StatisticalAnalysis(BaseModel):
    plan: str = ""
    test_types: list[str] | None = None
    measures_to_report: list[str] | None = None
    figures_and_tables_plan: list[str] | None = None
    is_plan_locked: bool | None = None
    results: str | None = None
    tables: str | None = None
    figures: str | None = None
    statistician_interpretation: str | None = None
    is_validated: bool | None = None


class Manuscript(BaseModel):
    title: str = ""
    target_journal: str | None = None
    sections: dict[str, str] = Field(default_factory=dict)
    references: str | None = None
    status: ManuscriptStatus = ManuscriptStatus.DRAFTING
    keywords: str | None = None
    authors: str | None = None
    affiliations: str | None = None
    acknowledgements: str | None = None
    author_contributions: str | None = None
    conflict_of_interest_statement: str | None = None
    funding_statement: str | None = None
    recommended_article_type: str | None = None
    recommended_word_counts: str | None = None
    recommended_figure_types: str | None = None


class ResearchProject(BaseModel):
    id: str
    title: str
    hcp_id: str
    current_stage: ModuleStage = ModuleStage.IDEA_GENERATION
    idea: ResearchIdea | None = None
    proposal: Proposal | None = None
    data_set: DataSet | None = None
    analysis: StatisticalAnalysis | None = None
    manuscript: Manuscript | None = None
    assigned_researcher: str | None = None
    assigned_statistician: str | None = None
    assigned_data_engineer: str | None = None
    created_at: datetime
    updated_at: datetime


# Partial updates. Only fields that are explicitly set are applied.
class IdeaUpdate(BaseModel):
    concept: str | None = None
    background: str | None = None
    objective: str | None = None
    methodology: str | None = None
    significance: str | None = None
    expected_outcomes: str | None = None
    ai_report: AIReport | None = None
    is_novel: bool | None = None
    expert_assigned: bool | None = None
    ideation_mode: IdeationMode | None = None
    novelty_score: float | None = None
    similarity_score: float | None = None
    validation_stage: IdeaValidationStage | None = None


class ProposalUpdate(BaseModel):
    title: str | None = None
    sections: dict[str, str] | None = None
    ethics_status: EthicsStatus | None = None
    ethics_feedback: str | None = None
    statistician_assigned: bool | None = None
    precedent_comparison_report: str | None = None


class DataSetUpdate(BaseModel):
    name: str | None = None
    description: str | None = None
    source_query: str | None = None
    simulated_data: list[dict[str, Any]] | None = None
    collection_pathway: DataCollectionPathway | None = None
    data_engineer_reviewed: bool | None = None
    data_engineer_approved: bool | None = None


class AnalysisUpdate(BaseModel):
    plan: str | None = None
    test_types: list[str] | None = None
    measures_to_report: list[str] | None = None
    figures_and_tables_plan: list[str] | None = None
    is_plan_locked: bool | None = None
    results: str | None = None
    tables: str | None = None
    figures: str | None = None
    statistician_interpretation: str | None = None
    is_validated: bool | None = None


class ManuscriptUpdate(BaseModel):
    title: str | None = None
    target_journal: str | None = None
    sections: dict[str, str] | None = None
    references: str | None = None
    status: ManuscriptStatus | None = None
    keywords: str | None = None
    authors: str | None = None
    affiliations: str | None = None
    acknowledgements: str | None = None
    author_contributions: str | None = None
    conflict_of_interest_statement: str | None = None
    funding_statement: str | None = None
    recommended_article_type: str | None = None
    recommended_word_counts: str | None = None
    recommended_figure_types: str | None = None


class CreateProjectRequest(BaseModel):
    title: str
    ideation_mode: IdeationMode = IdeationMode.CLINICIAN_LED


class AssignExpertRequest(BaseModel):
    role: ExpertRole
    user_id: str
