import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

# Load the appropriate .env file on module import
env = os.environ.get("BLOGAPI_ENV", "development").lower()
env_file = f".env.{env}"
if os.path.exists(env_file):
    load_dotenv(env_file)
else:
    # Fall back to the default .env file
    load_dotenv()


@dataclass
class Config:
    environment: str
    database_url: str
    test_database_url: str
    migrations_path: Path
    log_level: str
    seed_count: int

    @classmethod
    def from_env(cls) -> "Config":
        return cls(
            environment=env,
            database_url=os.environ.get(
                "DATABASE_URL", "postgresql://localhost:5432/blog_api"
            ),
            test_database_url=os.environ.get(
                "TEST_DATABASE_URL", "postgresql://localhost:5432/blog_api_test"
            ),
            migrations_path=Path(os.environ.get("MIGRATIONS_PATH", "./migrations")),
            log_level=os.environ.get("LOG_LEVEL", "INFO").upper(),
            seed_count=int(os.environ.get("SEED_COUNT", "10")),
        )


config = Config.from_env()
