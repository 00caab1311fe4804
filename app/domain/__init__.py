from app.domain.github_connection_operations import github_connection_ops
from app.domain.github_snapshot_operations import github_snapshot_ops
from app.domain.resume_operations import resume_ops
from app.domain.user_operations import user_ops

__all__ = [
    "github_connection_ops",
    "github_snapshot_ops",
    "resume_ops",
    "user_ops",
]
