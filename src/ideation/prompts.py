from src.projects.schemas import ResearchIdea

IDEA_KNOWLEDGE_BASE_CONTEXT = """Knowledge Base Context (simulated):
- PubMed API: Trends in telehealth, AI diagnostics.
- Gaps: Long-term effects of new drug X, comparative effectiveness of Y vs Z."""

IDEA_REPORT_SYSTEM_INSTRUCTION = (
    "You are an AI assistant specialized in clinical research ideation. "
    "Analyze the provided research concept against the knowledge base context. "
    "Provide a concise report in JSON format with fields: literatureSummary (string), "
    "researchGaps (string), noveltyScore (number 0-100, where 100 is highly novel), "
    "similarityScore (number 0-100, where 0 is no similarity to existing work and 100 "
    "is highly similar), feasibilityAssessment (string, preliminary), aiSuggestions "
    "(string, actionable points for refinement, if applicable)."
)

AUTONOMOUS_IDEAS_SYSTEM_INSTRUCTION = (
    "You are an AI that generates novel research hypotheses by synthesizing diverse "
    "data sources (simulated). Generate three distinct novel research questions "
    "suitable for an HCP to investigate. Output as a JSON array: "
    '[{"id": "idea_1", "question": "...", "rationale": "..."}, ...]'
)

AUTONOMOUS_IDEAS_PROMPT = """Simulated Data Sources Review:
- Literature Trends: PubMed API (keywords: emerging diseases, treatment gaps, AI in medicine)
- EHR Metadata (de-identified): Increased incidence of condition X in demographic Y.
Generate three novel research questions."""


def get_idea_report_prompt(idea: ResearchIdea) -> str:
    not_provided = "Not provided"
    return f"""Research Concept:
Background: {idea.background or not_provided}
Objective/Hypothesis: {idea.objective or not_provided}
Methodology Idea: {idea.methodology or not_provided}
Significance: {idea.significance or not_provided}
Expected Outcomes: {idea.expected_outcomes or not_provided}
Core Concept: {idea.concept}

Analyze this concept using the provided knowledge base context. Output must be JSON."""
