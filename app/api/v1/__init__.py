from app.api.v1 import github, resumes

__all__ = [
    "github",
    "resumes",
]
