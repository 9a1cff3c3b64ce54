from .approval import ApprovalWorkflow  # noqa: F401
from .pending_projects import PendingProjectRepository  # noqa: F401
from .projects import ProjectRepository  # noqa: F401
