from enum import Enum
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class SectionHelpType(str, Enum):
    STRUCTURE = "structure"
    LANGUAGE = "language"
    REFERENCES = "references"


class SectionAssistRequest(BaseModel):
    help_type: SectionHelpType
    target_journal: str | None = None


class JournalSuggestion(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    scope: str
    impact_factor: str | None = None
    country: str | None = None
    aims_link: str | None = None
    rationale: str | None = None
