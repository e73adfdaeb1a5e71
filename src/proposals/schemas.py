from pydantic import BaseModel


class EthicsFeedbackRequest(BaseModel):
    feedback: str | None = None
