from .blame_service import BlameService
from .project_url_service import ProjectUrlService
from .report_service import BlameReportService


__all__ = [
    'BlameService',
    'ProjectUrlService',
    'BlameReportService',
]
