import pydantic_settings as settings


class Settings(settings.BaseSettings):
    model_config = settings.SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        env_nested_delimiter="_",
        env_nested_max_split=1,
        env_prefix="",
        validate_default=True
    )
