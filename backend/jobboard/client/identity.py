"""
Identity bridge: turns a password or federated sign-in into a session.

Providers verify the credential and hand back identity claims (email, name,
photo). Only those claims reach the backend, which matches or provisions the
user and issues the session token. Secrets never leave the provider.
"""
import logging

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from jobboard.client.api import ApiClient
from jobboard.client.session import Session, SessionStore, SessionUser
from jobboard.config import settings
from jobboard.errors import (
    IdentityProviderUnavailable,
    InvalidCredential,
    JobBoardError,
    TokenIssuanceFailed,
    Unauthorized,
    UpstreamUnavailable,
    ValidationFailed,
)
from jobboard.utils.security import hash_secret, verify_secret

logger = logging.getLogger("jobboard.client.identity")


class PasswordCredential(BaseModel):
    model_config = ConfigDict(frozen=True)

    email: str
    secret: str = Field(repr=False)


class FederatedAssertion(BaseModel):
    model_config = ConfigDict(frozen=True)

    id_token: str = Field(repr=False)


class IdentityClaims(BaseModel):
    email: str
    name: str
    photo: str | None = None


class PasswordDirectory:
    """Identity provider for primary credentials, backed by argon2 hashes.

    Accounts live in this object only. It stands in for an external password
    provider, so registrations do not outlive the instance.
    """

    def __init__(self):
        self._accounts: dict[str, tuple[str, str]] = {}  # email -> (hash, display name)
        self._dummy_hash: str | None = None

    def register(self, email: str, secret: str, name: str):
        self._accounts[email.strip().lower()] = (hash_secret(secret), name)

    async def verify(self, credential: PasswordCredential) -> IdentityClaims:
        email = credential.email.strip().lower()
        account = self._accounts.get(email)
        if account is None:
            # Spend the same hashing work so unknown accounts are not detectable by timing.
            if self._dummy_hash is None:
                self._dummy_hash = hash_secret("unused-dummy-secret")
            verify_secret(self._dummy_hash, credential.secret)
            raise InvalidCredential()
        stored_hash, name = account
        if not verify_secret(stored_hash, credential.secret):
            raise InvalidCredential()
        return IdentityClaims(email=email, name=name)


class FederatedProvider:
    """Verifies an external ID token against a token-info endpoint."""

    def __init__(
        self,
        tokeninfo_url: str | None = None,
        client_id: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.tokeninfo_url = tokeninfo_url or settings.tokeninfo_url
        self.client_id = client_id if client_id is not None else settings.federated_client_id
        self.timeout = timeout if timeout is not None else settings.request_timeout_seconds
        self._transport = transport

    async def verify(self, assertion: FederatedAssertion) -> IdentityClaims:
        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(self.tokeninfo_url, params={"id_token": assertion.id_token})
        except httpx.TransportError as exc:
            logger.warning("Identity provider unreachable: %s", exc.__class__.__name__)
            raise IdentityProviderUnavailable("Identity provider unreachable") from exc

        if response.status_code >= 500:
            raise IdentityProviderUnavailable(f"Identity provider error ({response.status_code})")
        if response.status_code >= 400:
            raise InvalidCredential()
        try:
            claims = response.json()
        except ValueError:
            raise InvalidCredential() from None
        if not isinstance(claims, dict):
            raise InvalidCredential()

        email = str(claims.get("email") or "").strip().lower()
        if not email or str(claims.get("email_verified")).lower() != "true":
            raise InvalidCredential()
        if self.client_id and claims.get("aud") != self.client_id:
            raise InvalidCredential()
        try:
            return IdentityClaims(
                email=email,
                name=claims.get("name") or email.split("@", 1)[0],
                photo=claims.get("picture"),
            )
        except ValidationError:
            raise InvalidCredential() from None


class IdentityBridge:
    def __init__(
        self,
        api: ApiClient,
        store: SessionStore,
        passwords: PasswordDirectory | None = None,
        federated: FederatedProvider | None = None,
    ):
        self.api = api
        self.store = store
        self.passwords = passwords
        self.federated = federated

    async def _verify(self, credential) -> IdentityClaims:
        if isinstance(credential, PasswordCredential):
            provider = self.passwords
        elif isinstance(credential, FederatedAssertion):
            provider = self.federated
        else:
            raise InvalidCredential()
        if provider is None:
            raise IdentityProviderUnavailable("No identity provider configured for this sign-in method")
        return await provider.verify(credential)

    async def authenticate(self, credential) -> Session:
        """Verify ``credential``, obtain a token and make it the active session."""
        claims = await self._verify(credential)

        try:
            response = await self.api.request("POST", "/auth/login", json=claims.model_dump())
        except UpstreamUnavailable as exc:
            raise IdentityProviderUnavailable("Sign-in service unreachable") from exc
        except (Unauthorized, ValidationFailed) as exc:
            raise InvalidCredential() from exc
        except JobBoardError as exc:
            raise TokenIssuanceFailed("Sign-in service did not issue a token") from exc

        try:
            body = response.json()
        except ValueError:
            body = None
        user = body.get("user") if isinstance(body, dict) else None
        if not isinstance(user, dict):
            raise TokenIssuanceFailed("Sign-in service did not issue a token")
        token = body.get("token") or user.get("token")
        if not isinstance(token, str) or not token or not user.get("id"):
            raise TokenIssuanceFailed("Sign-in service did not issue a token")

        try:
            session = Session(
                token=token,
                user=SessionUser(
                    id=user["id"],
                    name=user.get("name") or claims.name,
                    email=str(user.get("email") or claims.email).lower(),
                    photo=user.get("photo") or claims.photo,
                ),
            )
        except ValidationError as exc:
            raise TokenIssuanceFailed("Sign-in service returned an unusable profile") from exc
        self.store.set(session)
        logger.info("Signed in as user %s", session.user.id)
        return session

    async def logout(self):
        """Revoke the active token if possible and always clear the store."""
        session = self.store.get()
        try:
            if session is not None:
                await self.api.request("POST", "/auth/logout", session=session)
        except JobBoardError as exc:
            logger.info("Server-side logout skipped: %s", exc.code)
        finally:
            self.store.clear()
