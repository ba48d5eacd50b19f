from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_prefix": "CF_", "env_file": ".env", "env_file_encoding": "utf-8"}

    auth_username: str = Field(default="admin")
    auth_password: str = Field(min_length=1)
    jwt_secret: str = Field(min_length=32)
    jwt_expire_minutes: int = Field(default=1440)
    llm_provider: str = Field(default="anthropic", pattern=r"^(openai|anthropic)$")
    llm_model: str = Field(default="claude-3-haiku-20240307")
    llm_max_tokens: int = Field(default=2000, gt=0)
    openai_api_key: str = Field(default="")
    anthropic_api_key: str = Field(default="")
    default_currency: str = Field(default="USD")
    default_period: str = Field(default="30d", pattern=r"^(7d|30d|90d|1y)$")
    expense_alert_threshold: int = Field(default=80, ge=0, le=100)
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)
    db_path: str = Field(default="cashflow.db")
    upload_base_url: str = Field(default="http://localhost:9000/cashflow-uploads")
    upload_url_ttl_seconds: int = Field(default=300, gt=0)
    cors_origins: str = Field(default="http://localhost:3000")


settings = Settings()
