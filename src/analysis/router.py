from fastapi import APIRouter, Depends

from src.analysis.dependencies import get_analysis_service
from src.analysis.schemas import (
    DataReviewRequest,
    GenerateQueryRequest,
    RunAnalysisRequest,
    ValidateAnalysisRequest,
)
from src.analysis.service import AnalysisService
from src.common.exceptions import (
    ResourceType,
    resource_not_found_response,
    stage_gate_response,
)
from src.projects.schemas import AnalysisUpdate, ResearchProject
from src.users.dependencies import get_current_user, require_roles
from src.users.schemas import UserRole

can_query = Depends(
    require_roles(UserRole.HCP, UserRole.RESEARCHER, UserRole.STATISTICIAN)
)

router = APIRouter(
    prefix="/projects/{project_id}",
    tags=["Data & Analysis"],
    dependencies=[Depends(get_current_user)],
    responses={
        **resource_not_found_response(ResourceType.PROJECT),
        **stage_gate_response(
            "An approved research proposal is required to begin data collection and analysis."
        ),
    },
)


@router.post("/data/query", dependencies=[can_query])
def generate_query(
    project_id: str,
    query_input: GenerateQueryRequest,
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> ResearchProject:
    return analysis_service.generate_query(project_id, query_input.query)


@router.post("/data/extract", dependencies=[can_query])
def extract_data(
    project_id: str,
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> ResearchProject:
    return analysis_service.extract_data(project_id)


@router.post(
    "/data/review", dependencies=[Depends(require_roles(UserRole.DATA_ENGINEER))]
)
def review_data(
    project_id: str,
    review_input: DataReviewRequest,
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> ResearchProject:
    return analysis_service.review_data(project_id, review_input.approved)


@router.put("/analysis", dependencies=[can_query])
def save_analysis(
    project_id: str,
    analysis_input: AnalysisUpdate,
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> ResearchProject:
    return analysis_service.save_analysis(project_id, analysis_input)


@router.post("/analysis/run", dependencies=[can_query])
def run_analysis(
    project_id: str,
    analysis_input: RunAnalysisRequest | None = None,
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> ResearchProject:
    return analysis_service.run_analysis(
        project_id, analysis_input.plan if analysis_input else None
    )


@router.post(
    "/analysis/validate",
    dependencies=[Depends(require_roles(UserRole.STATISTICIAN))],
)
def validate_analysis(
    project_id: str,
    validation_input: ValidateAnalysisRequest | None = None,
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> ResearchProject:
    return analysis_service.validate_analysis(
        project_id, validation_input.interpretation if validation_input else None
    )


@router.post(
    "/analysis/proceed",
    dependencies=[Depends(require_roles(UserRole.HCP, UserRole.RESEARCHER))],
    responses={
        **stage_gate_response(
            "Statistical analysis must be validated by a Statistician before proceeding."
        )
    },
)
def proceed_to_manuscript(
    project_id: str,
    analysis_service: AnalysisService = Depends(get_analysis_service),
) -> ResearchProject:
    return analysis_service.proceed_to_manuscript(project_id)
