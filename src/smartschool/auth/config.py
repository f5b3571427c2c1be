from __future__ import annotations

from pydantic import Field, SecretStr, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .urls import ensure_absolute_url


class ClientConfig(BaseSettings):
    """Configuration for logging in and for the underlying HTTP client.

    This model reads environment variables automatically using the
    ``SMARTSCHOOL_`` prefix (e.g., ``SMARTSCHOOL_URL``) and validates the
    fields that belong together. Every field can also be passed by keyword.

    Environment variables:
        - SMARTSCHOOL_URL
        - SMARTSCHOOL_USERNAME
        - SMARTSCHOOL_PASSWORD
        - SMARTSCHOOL_TIMEOUT
        - SMARTSCHOOL_USER_AGENT
        - SMARTSCHOOL_VERIFY
    """

    model_config = SettingsConfigDict(
        env_prefix="SMARTSCHOOL_",
        case_sensitive=False,
        extra="ignore",
    )

    url: str | None = Field(default=None, description="Base URL of the instance.")
    username: str | None = None
    password: SecretStr | None = None
    timeout: float | None = Field(
        default=None, description="Transport timeout in seconds."
    )
    user_agent: str | None = None
    verify: bool = Field(default=True, description="Verify TLS certificates.")

    @field_validator("url")
    @classmethod
    def _ensure_absolute(cls, v: str | None) -> str | None:
        """Reject relative URLs; absolute ones are kept verbatim."""
        if v is not None:
            ensure_absolute_url(v)
        return v

    @field_validator("timeout")
    @classmethod
    def _ensure_positive_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError(f"timeout must be positive, got {v}")
        return v

    @model_validator(mode="after")
    def _credentials_come_in_pairs(self) -> "ClientConfig":
        """A username without a password (or the reverse) is a mistake."""
        if bool(self.username) != bool(self.password):
            raise ValueError("username and password must be provided together.")
        return self

    def require_credentials(self) -> tuple[str, str, str]:
        """Return ``(url, username, password)`` or fail if any is missing.

        Raises:
            ValueError: If the url or the credentials are not configured.
        """
        if not (self.url and self.username and self.password):
            raise ValueError(
                "logging in from configuration requires url, username and password "
                "(SMARTSCHOOL_URL, SMARTSCHOOL_USERNAME, SMARTSCHOOL_PASSWORD)."
            )
        return self.url, self.username, self.password.get_secret_value()
