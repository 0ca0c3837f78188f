from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Rule document: empty means the packaged data/rules.json
    RULES_FILE: str = ""

    # Catalog boundary: normalized descriptors are memoized per handle
    CATALOG_CACHE_TTL_SECONDS: int = 300

    class Config:
        env_file = ".env"


settings = Settings()
