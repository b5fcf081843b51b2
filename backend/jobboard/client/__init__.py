from jobboard.client.api import ApiClient
from jobboard.client.applications import ApplicationIntake
from jobboard.client.dashboard import DashboardController, DashboardState, EditModal, Notice
from jobboard.client.identity import (
    FederatedAssertion,
    FederatedProvider,
    IdentityBridge,
    IdentityClaims,
    PasswordCredential,
    PasswordDirectory,
)
from jobboard.client.jobs import JobRepository
from jobboard.client.session import Session, SessionStore, SessionUser

__all__ = [
    "ApiClient",
    "ApplicationIntake",
    "DashboardController",
    "DashboardState",
    "EditModal",
    "Notice",
    "FederatedAssertion",
    "FederatedProvider",
    "IdentityBridge",
    "IdentityClaims",
    "PasswordCredential",
    "PasswordDirectory",
    "JobRepository",
    "Session",
    "SessionStore",
    "SessionUser",
]
