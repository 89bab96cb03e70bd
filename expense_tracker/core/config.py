from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # App settings
    PROJECT_NAME: str = "ExpenseBudgetEngine"
    API_PREFIX: str = "/api"
    DEBUG: bool = Field(default=False)
    LOG_LEVEL: str = Field(default="INFO")

    # DynamoDB
    DYNAMO_REGION: str = Field(default="eu-west-1")
    DYNAMO_USERS_TABLE: str = Field(default="smart-expense-users", validation_alias="DYNAMO_TABLE_USERS")
    DYNAMO_EXPENSES_TABLE: str = Field(default="smart-expense-expenses", validation_alias="DYNAMO_TABLE_EXPENSES")

    # Budget persistence: "dynamo", "json" or "memory"
    BUDGET_STORAGE_BACKEND: str = Field(default="dynamo")
    BUDGET_STORE_DIR: str = Field(default="data/budgets")

    # Analytics
    DEFAULT_TIME_WINDOW: str = Field(default="6months")


settings = Settings()
