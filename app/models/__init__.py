from app.models.github_connection import GitHubConnection
from app.models.github_snapshot import GitHubSnapshot, SyncStatus
from app.models.resume import Resume
from app.models.user import User

__all__ = [
    "User",
    "GitHubConnection",
    "GitHubSnapshot",
    "SyncStatus",
    "Resume",
]
