"""GiftHub Server Configuration."""

import secrets
from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Server
    app_name: str = "FamilyGiftHub"
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = False
    cors_origins: list[str] = ["*"]

    # Paths
    data_dir: Path = Path.home() / "gifthub" / "data"

    # Database
    db_path: Path = Path.home() / "gifthub" / "data" / "gifthub.db"

    # JWT
    jwt_secret: str = ""
    jwt_algorithm: str = "HS256"
    credential_expire_days: int = 30

    # Family codes
    family_code_length: int = 6
    family_code_alphabet: str = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"  # no 0, 1, I, O
    family_code_retries: int = 5

    model_config = {"env_prefix": "GIFTHUB_"}

    def ensure_dirs(self) -> None:
        """Create all required directories."""
        for d in [self.data_dir, self.db_path.parent]:
            d.mkdir(parents=True, exist_ok=True)

    def ensure_secrets(self) -> None:
        """Generate the JWT secret if not set, persist it so tokens survive restarts."""
        secrets_file = self.data_dir / ".secrets"
        saved = {}
        if secrets_file.exists():
            for line in secrets_file.read_text().strip().splitlines():
                if "=" in line:
                    k, v = line.split("=", 1)
                    saved[k.strip()] = v.strip()

        if not self.jwt_secret:
            self.jwt_secret = saved.get("jwt_secret", "") or secrets.token_urlsafe(32)

        secrets_file.write_text(f"jwt_secret={self.jwt_secret}\n")


settings = Settings()
settings.ensure_dirs()
settings.ensure_secrets()
