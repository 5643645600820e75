from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    project_name: str = "ticketdesk"

    # emulated network round-trip for every service call, 0 disables it
    simulated_latency_ms: int = 0

    # identity used when a request carries no session (seeded admin)
    default_user_id: str = "1"
    anonymous_fallback: bool = True

    seed_demo_data: bool = True

    default_page_size: int = 10
    max_page_size: int = 200

    # placeholder returned by login/register, not a real credential
    auth_token: str = "mock-jwt-token"

    log_level: str = "INFO"
    log_json: bool = False


settings = Settings()
