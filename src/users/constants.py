from src.users.schemas import User, UserRole

USER_ROLE_DESCRIPTIONS: dict[UserRole, str] = {
    UserRole.HCP: "Initiate and conduct research projects.",
    UserRole.RESEARCHER: "Provide mentorship and methodological input.",
    UserRole.STATISTICIAN: "Define analysis plans and validate outputs.",
    UserRole.DATA_ENGINEER: "Review and approve data queries, manage data access.",
    UserRole.ADMIN: "Manage platform settings and users.",
}

MOCK_USERS: list[User] = [
    User(id="user_hcp_1", name="Dr. Alice Smith", role=UserRole.HCP),
    User(id="user_researcher_1", name="Prof. Bob Johnson", role=UserRole.RESEARCHER),
    User(id="user_statistician_1", name="Dr. Carol White", role=UserRole.STATISTICIAN),
    User(id="user_data_engineer_1", name="Mr. David Lee", role=UserRole.DATA_ENGINEER),
    User(id="user_admin_1", name="Admin User", role=UserRole.ADMIN),
]


def find_user(user_id: str) -> User | None:
    return next((user for user in MOCK_USERS if user.id == user_id), None)


def find_user_by_role(role: UserRole) -> User | None:
    return next((user for user in MOCK_USERS if user.role == role), None)
