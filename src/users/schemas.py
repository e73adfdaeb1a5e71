from enum import Enum
from pydantic import BaseModel


class UserRole(str, Enum):
    HCP = "Healthcare Professional (HCP)"
    RESEARCHER = "Experienced Researcher"
    STATISTICIAN = "Statistician"
    DATA_ENGINEER = "Data Engineer/Custodian"
    ADMIN = "System Administrator"


class User(BaseModel):
    id: str
    name: str
    role: UserRole
