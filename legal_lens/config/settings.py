from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    upload_max_size_bytes: int = 10 * 1024 * 1024
    document_max_age_hours: int = 24
    retain_file_buffer: bool = False

    document_store: str = "memory"
    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "legal_lens"
    db_username: str = "legal_lens"
    db_password: str = "secret"

    extraction_engine: str = "documentai"
    documentai_project_id: str = ""
    documentai_location: str = "us"
    documentai_processor_id: str = ""

    analysis_provider: str = "openai"
    analysis_timeout_seconds: int = 60
    analysis_max_output_tokens: int = 8192
    chat_max_output_tokens: int = 2048
    chat_language: str = "English"

    analysis_openai_api_key: str = ""
    analysis_openai_model_name: str = "gpt-4o-mini"
    analysis_openai_temperature: float = 0.2

    analysis_openai_compatible_api_key: str = ""
    analysis_openai_compatible_model_name: str = ""
    analysis_openai_compatible_base_url: str = ""

    analysis_openrouter_api_key: str = ""
    analysis_openrouter_model_name: str = ""
    analysis_groq_api_key: str = ""
    analysis_groq_model_name: str = ""
    analysis_together_api_key: str = ""
    analysis_together_model_name: str = ""
    analysis_deepseek_api_key: str = ""
    analysis_deepseek_model_name: str = ""
    analysis_ollama_api_key: str = "ollama"
    analysis_ollama_model_name: str = ""
    analysis_gemini_api_key: str = ""
    analysis_gemini_model_name: str = "gemini-1.5-pro"
