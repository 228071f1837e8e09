"""Session store configuration via environment variables.

Build one ``Settings`` at process start and pass it to ``Session`` and
``DynamoDBSessionStore``; nothing in the core reads the environment.
"""

from pydantic_settings import BaseSettings

DEFAULT_TTL_MINUTES = 15


class Settings(BaseSettings):
    session_table: str = "sessions"
    session_ttl_minutes: int = DEFAULT_TTL_MINUTES
    dynamodb_endpoint: str = ""  # For DynamoDB Local
    aws_region: str = "eu-west-1"

    model_config = {"env_prefix": "", "case_sensitive": False, "frozen": True}
