from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    PROJECT_NAME: str = "Theater Box Office"
    API_PREFIX: str = ""

    # Session cookie (signed JWT carrying the person id)
    SECRET_KEY: str = "changeme"
    SESSION_COOKIE_NAME: str = "boxoffice_session"
    SESSION_EXPIRE_MINUTES: int = 60 * 24

    # Database
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_USER: str = "postgres"
    POSTGRES_PASSWORD: str = "password"
    POSTGRES_DB: str = "teatr_db"
    POSTGRES_PORT: int = 5432
    DATABASE_URL: str = ""

    # The relational schema is owned by the store; only create it for local setups
    AUTO_CREATE_SCHEMA: bool = False

    # Posters
    UPLOAD_DIR: str = "static/images"
    POSTER_URL_PREFIX: str = "/images/"
    DEFAULT_POSTER_URL: str = "/images/default-poster.png"

    # Reports
    REPORT_FONT_PATH: str = "fonts/Roboto-Regular.ttf"
    CURRENCY: str = "PLN"

    DEFAULT_ACTOR_SALARY: int = 3000

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    def assemble_db_url(self) -> str:
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

settings = Settings()
settings.DATABASE_URL = settings.assemble_db_url()
