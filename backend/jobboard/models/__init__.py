from jobboard.models.user import User
from jobboard.models.job import Job
from jobboard.models.application import Application

__all__ = ["User", "Job", "Application"]
