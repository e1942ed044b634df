"""
Configuration management for NLP Gateway.

Uses Pydantic for validation and pydantic-settings for environment variable support.
"""

from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class WatsonConfig(BaseSettings):
    """IBM Watson provider configuration.

    Natural Language Understanding (sentiment, keywords) and Language
    Translator (identify, translate) are separate service instances, each
    with its own API key and service URL.

    Environment variables: WATSON_NLU_API_KEY, WATSON_NLU_URL,
    WATSON_TRANSLATOR_API_KEY, WATSON_TRANSLATOR_URL, etc.
    """

    model_config = SettingsConfigDict(env_prefix="WATSON_")

    # Natural Language Understanding
    nlu_api_key: str = Field(default="", description="NLU API key")
    nlu_url: str = Field(
        default="https://api.us-south.natural-language-understanding.watson.cloud.ibm.com",
        description="NLU service instance URL",
    )
    nlu_version: str = Field(default="2022-04-07", description="NLU API version date")

    # Language Translator
    translator_api_key: str = Field(default="", description="Language Translator API key")
    translator_url: str = Field(
        default="https://api.us-south.language-translator.watson.cloud.ibm.com",
        description="Language Translator service instance URL",
    )
    translator_version: str = Field(default="2018-05-01", description="Translator API version date")

    # IAM token endpoint
    iam_url: str = Field(
        default="https://iam.cloud.ibm.com/identity/token",
        description="IAM token endpoint",
    )

    # HTTP settings
    timeout_seconds: float = Field(default=30.0, gt=0, le=300, description="Request timeout")

    # Result shaping
    keywords_limit: int = Field(default=50, ge=1, le=250, description="Maximum keywords requested")
    max_detected_languages: int = Field(
        default=3, ge=1, le=10, description="Number of language candidates returned"
    )

    @field_validator("nlu_url", "translator_url", "iam_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        """Remove trailing slashes from service URLs."""
        return v.rstrip("/")


class WordCloudConfig(BaseSettings):
    """Word cloud (keyword frequency) configuration."""

    model_config = SettingsConfigDict(env_prefix="WORD_CLOUD_")

    stopwords_language: str = Field(default="english", description="NLTK stopword corpus language")
    extra_stopwords: list[str] = Field(default_factory=list, description="Additional stopwords")
    deduplicate: bool = Field(default=False, description="Emit one entry per matched word")
    ignore_keyword_case: bool = Field(default=False, description="Lowercase keywords before matching")

    @field_validator("stopwords_language")
    @classmethod
    def normalize_language(cls, v: str) -> str:
        """Normalize corpus language name."""
        return v.lower().strip()

    @field_validator("extra_stopwords")
    @classmethod
    def lowercase_stopwords(cls, v: list[str]) -> list[str]:
        """Tokens are lowercased, so stopwords must be too."""
        return [word.lower() for word in v]


class TranslationConfig(BaseSettings):
    """Translation configuration."""

    model_config = SettingsConfigDict(env_prefix="TRANSLATION_")

    default_target_language: str = Field(default="en", description="Target when none is given")


class LoggingConfig(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(env_prefix="LOG_")

    level: str = Field(default="INFO", description="Log level")
    format: str = Field(
        default="<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
        description="Log format"
    )

    # File logging
    file_enabled: bool = Field(default=True, description="Enable file logging")
    file_path: str = Field(default="logs/nlp_gateway.log", description="Log file path")
    rotation: str = Field(default="100 MB", description="Log rotation size")
    retention: str = Field(default="30 days", description="Log retention period")

    # Console logging
    console_enabled: bool = Field(default=True, description="Enable console logging")

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Validate log level."""
        valid_levels = ["TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"]
        v = v.upper()
        if v not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v


class WebConfig(BaseSettings):
    """Web API configuration."""

    model_config = SettingsConfigDict(env_prefix="WEB_")

    host: str = Field(default="127.0.0.1", description="Web server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Web server port")
    debug: bool = Field(default=False, description="Debug mode")


class Config(BaseSettings):
    """Main application configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="NLP_GATEWAY_",
        case_sensitive=False,
    )

    # Application
    version: str = Field(default="0.1.0", description="Application version")
    app_name: str = Field(default="NLP Gateway", description="Application name")
    debug: bool = Field(default=False, description="Debug mode")

    # Sub-configurations
    watson: WatsonConfig = Field(default_factory=WatsonConfig)
    word_cloud: WordCloudConfig = Field(default_factory=WordCloudConfig)
    translation: TranslationConfig = Field(default_factory=TranslationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    web: WebConfig = Field(default_factory=WebConfig)

    # Paths
    config_dir: str = Field(default="config", description="Configuration directory")

    def get_config_path(self, name: str) -> Path:
        """Get path to a configuration file."""
        return Path(self.config_dir) / name


_NESTED_CONFIGS = {
    "watson": WatsonConfig,
    "word_cloud": WordCloudConfig,
    "translation": TranslationConfig,
    "logging": LoggingConfig,
    "web": WebConfig,
}

# Global configuration instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config()
    return _config


def load_config_from_yaml(yaml_path: str) -> Config:
    """Load configuration from a YAML file.

    Note: Values loaded from YAML take precedence over environment variables.
    Empty or null values in a section are ignored, so the environment still
    supplies them.
    For environment variable overrides, use .env file or set them directly.

    Args:
        yaml_path: Path to the YAML configuration file.

    Returns:
        Config instance loaded from the file.
    """
    import yaml

    yaml_file = Path(yaml_path)
    if not yaml_file.exists():
        raise FileNotFoundError(f"Configuration file not found: {yaml_path}")

    with yaml_file.open("r", encoding="utf-8") as f:
        config_dict = yaml.safe_load(f) or {}

    main_config = {}
    for key, value in config_dict.items():
        if key not in _NESTED_CONFIGS:
            main_config[key] = value

    # Nested sections are built separately so their env vars still apply.
    # Blank values are left out so they do not mask the environment.
    for key, config_class in _NESTED_CONFIGS.items():
        section = config_dict.get(key) or {}
        values = {k: v for k, v in section.items() if v is not None and v != ""}
        main_config[key] = config_class(**values)

    return Config(**main_config)


def reload_config() -> Config:
    """Reload configuration from environment and YAML files."""
    global _config
    _config = None

    config_yaml = Path("config/config.yaml")
    if config_yaml.exists():
        _config = load_config_from_yaml(str(config_yaml))
    else:
        _config = Config()

    return _config
