# SQLModel definitions, imported here so the metadata is populated for Alembic.
from .base import TimestampMixin  # noqa: F401
from .reference import Agency, FocalArea, FundingSource, Location  # noqa: F401
from .project import PROJECT_FIELD_NAMES, Project, ProjectFields  # noqa: F401
from .wash import WASHComponent  # noqa: F401
from .assignments import (  # noqa: F401
    ProjectAgency,
    ProjectFocalArea,
    ProjectFundingSource,
    ProjectLocation,
)
from .pending_project import PendingProject  # noqa: F401
