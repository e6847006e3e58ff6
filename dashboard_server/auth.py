import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError
from supabase import AuthApiError, AuthInvalidCredentialsError, Client, create_client

from .config import Settings

logger = logging.getLogger(__name__)

CREDENTIALS_PROVIDER = "credentials"
ACCESS_TOKEN_COOKIE = "sb-access-token"
REFRESH_TOKEN_COOKIE = "sb-refresh-token"


class SignInErrorKind(str, Enum):
    CREDENTIALS_SIGNIN = "CredentialsSignin"
    CONFIGURATION = "Configuration"


class SignInError(Exception):
    def __init__(self, kind: SignInErrorKind, message: Optional[str] = None):
        super().__init__(message or kind.value)
        self.kind = kind


class Credentials(BaseModel):
    # The login form also posts fields like redirectTo
    model_config = ConfigDict(extra="ignore")

    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+$")
    password: str = Field(min_length=6)


class SupabaseSignIn:
    """Credentials sign-in backed by Supabase auth.

    Every attempt runs on its own auth client, so one user's session never
    lingers in server memory for the next. The session is handed back to the
    caller to give to the browser; failures are classified so callers never
    have to inspect messages.
    """

    def __init__(self, client_factory: Optional[Callable[[], Client]] = None):
        if client_factory is None:
            settings = Settings.from_env()
            settings.require("supabase_url", "supabase_anon_key")
            client_factory = lambda: create_client(settings.supabase_url, settings.supabase_anon_key)
        self.client_factory = client_factory

    def sign_in(self, provider: str, credentials: Dict[str, Any]) -> Any:
        """Returns the Supabase session of the signed-in user."""
        if provider != CREDENTIALS_PROVIDER:
            raise SignInError(SignInErrorKind.CONFIGURATION, f"Unsupported sign-in provider: {provider}")

        try:
            parsed = Credentials.model_validate(credentials)
        except ValidationError as e:
            logger.info("Rejected malformed credentials: %d error(s)", e.error_count())
            raise SignInError(SignInErrorKind.CREDENTIALS_SIGNIN, "Invalid credentials.") from e

        client = self.client_factory()
        try:
            response = client.auth.sign_in_with_password({"email": parsed.email, "password": parsed.password})
        except AuthInvalidCredentialsError as e:
            raise SignInError(SignInErrorKind.CREDENTIALS_SIGNIN, e.message) from e
        except AuthApiError as e:
            if getattr(e, "code", None) == "invalid_credentials":
                logger.info("Sign-in failed for %s", parsed.email)
                raise SignInError(SignInErrorKind.CREDENTIALS_SIGNIN, e.message) from e
            raise
        return response.session
