from src.manuscripts.schemas import SectionHelpType
from src.projects.schemas import ResearchProject

MANUSCRIPT_SECTIONS: dict[str, str] = {
    "abstract": "Abstract",
    "introduction": "Introduction",
    "methods": "Methods",
    "results": "Results",
    "discussion": "Discussion",
    "conclusions": "Conclusions",
    "references": "References",
}

JOURNAL_SYSTEM_INSTRUCTION = (
    "You are an AI research assistant for publication strategy. Based on the "
    "abstract/summary, suggest 3-5 suitable journals. Provide name, scope, impact "
    "factor (simulated), and rationale. Use RAG with simulated journal databases. "
    "Output as JSON: [{name, scope, impactFactor, rationale}, ...]"
)

JOURNAL_DATABASE_CONTEXT = (
    "Journal A (Cardiology, IF 50), Journal B (General Med, IF 10), Conf Z (Specialty Y)"
)


def get_section_system_instruction(help_type: SectionHelpType, section_name: str) -> str:
    if help_type == SectionHelpType.STRUCTURE:
        return (
            "You are an AI manuscript writing assistant. Provide structural guidance "
            f"for the '{section_name}' section."
        )
    if help_type == SectionHelpType.LANGUAGE:
        return (
            "You are an AI language editor. Refine the language for clarity, "
            "conciseness, academic tone. Correct grammar and spelling."
        )
    return (
        "You are an AI referencing assistant. Format for in-text citations and "
        "bibliography (simulate Vancouver or APA)."
    )


_PROMPT_ACTIONS: dict[SectionHelpType, str] = {
    SectionHelpType.STRUCTURE: "Provide an outline or key structural elements. If content exists, suggest improvements to its structure.",
    SectionHelpType.LANGUAGE: "Refine the following text:",
    SectionHelpType.REFERENCES: "Format the following references or text with citations:",
}


def get_section_prompt(
    project: ResearchProject,
    help_type: SectionHelpType,
    section_name: str,
    section_content: str,
    target_journal: str | None,
) -> str:
    analysis = project.analysis
    key_findings = (
        (analysis.statistician_interpretation or (analysis.results or "")[:500])
        if analysis
        else ""
    )
    return f"""Study Summary:
Project Title: {project.title}
Key Findings: {key_findings or "N/A"}
Target Journal: {target_journal or "Not specified"}

Current content for section "{section_name}":
---
{section_content}
---
{_PROMPT_ACTIONS[help_type]}"""


def get_journal_prompt(abstract: str, keywords: str) -> str:
    return f"""Study Abstract/Summary:
---
{abstract}
---
Keywords: (Infer or use: {keywords})
Simulated RAG context: {JOURNAL_DATABASE_CONTEXT}
Suggest suitable journals/conferences."""
