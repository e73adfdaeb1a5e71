from src.projects.schemas import ResearchProject

PROPOSAL_SECTIONS: dict[str, str] = {
    "background": "Detailed Background",
    "objectives": "Research Objectives/Hypotheses",
    "methodology": "Methodology",
    "sampleSize": "Sample Size Justification",
    "dataAnalysisPlan": "Data Analysis Plan",
    "budget": "Budget (Brief Outline)",
    "ethics": "Ethical Considerations",
    "dissemination": "Dissemination Plan",
}

INSTITUTIONAL_GUIDELINES = (
    "Simulated Institutional Research Guidelines for proposal development and ethics."
)

AI_SUGGESTIONS_SEPARATOR = "\n\n--- AI Suggestions ---\n"


def get_section_context(section_id: str) -> str:
    return f"""Knowledge Base Context:
- {INSTITUTIONAL_GUIDELINES}
- Example approved proposal section for '{section_id}': [Simulated content for a strong {section_id} section...]
- Common pitfalls for '{section_id}': [Simulated list of common mistakes for this section...]"""


def get_section_system_instruction(section_name: str) -> str:
    return (
        "You are an AI assistant for writing clinical research proposals. "
        f"For the section '{section_name}', provide contextual suggestions. "
        "Focus on structure, key elements, and compliance."
    )


def get_section_prompt(
    project: ResearchProject, section_name: str, section_content: str
) -> str:
    idea = project.idea
    return f"""Research Idea Summary:
Project Title: {project.title}
Core Idea: {(idea.concept if idea else "") or "N/A"}
Background: {(idea.background if idea else None) or "N/A"}
Objective: {(idea.objective if idea else None) or "N/A"}

Current content for section "{section_name}":
---
{section_content}
---
Provide suggestions to enhance this section based on the RAG context. Output as a bulleted list."""
