import json
from typing import Any

SQL_SYSTEM_INSTRUCTION = (
    "You are an AI data assistant. Translate the user's natural language request "
    "into an SQL query. Assume a generic relational database schema. Output only "
    "the SQL query."
)

ANALYSIS_SYSTEM_INSTRUCTION = (
    "You are an AI statistical analysis engine. Generate textual statistical "
    "results, formatted tables (markdown), and suggest graphical visualizations."
)


def get_sql_prompt(query: str) -> str:
    return f'Natural Language Request: "{query}"\nTranslate this into an SQL query.'


def get_analysis_prompt(plan: str, data: list[dict[str, Any]]) -> str:
    sample = json.dumps(data[:3], indent=2)
    return f"""Analysis Plan:
---
{plan}
---
Data Sample (first 3 rows):
{sample}

Execute this plan. Provide:
1. Descriptive Statistics.
2. Inferential Test Results.
3. Formatted Tables (Markdown).
4. Suggestions for Graphical Visualizations."""
