from pydantic_settings import BaseSettings

# Settings field -> environment variable, in the order they are reported.
CREDENTIAL_ENV_VARS = {
    "google_client_id": "GOOGLE_CLIENT_ID",
    "google_client_secret": "GOOGLE_CLIENT_SECRET",
    "google_refresh_token": "GOOGLE_REFRESH_TOKEN",
}


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    # Google OAuth2 (installed-app client + offline refresh token)
    google_client_id: str = ""
    google_client_secret: str = ""
    google_refresh_token: str = ""
    google_token_uri: str = "https://oauth2.googleapis.com/token"

    # Logging
    log_level: str = "INFO"
    log_json: bool = True
    log_file: str = ""

    def missing_credentials(self) -> list[str]:
        """Return env var names of required credentials that are empty."""
        return [env for field, env in CREDENTIAL_ENV_VARS.items() if not getattr(self, field)]


def get_settings() -> Settings:
    return Settings()
