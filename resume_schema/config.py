# resume_schema/config.py
import os
from dataclasses import dataclass, field
from typing import List

import yaml
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Environment settings (RESUME_SCHEMA_* variables or .env)"""

    model_config = SettingsConfigDict(
        env_prefix="RESUME_SCHEMA_",
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    config_path: str = "config/resume_schema.yaml"
    log_level: str = "INFO"
    debug_cache: bool = False


@dataclass
class ResumeSchemaConfig:
    """Configuration for schema registry, migration and context building"""

    # Migration
    schema_version: str = "1.0.0"
    default_optimization_level: str = "basic"

    # Caches
    builder_cache_capacity: int = 200
    context_cache_capacity: int = 50
    debug_cache: bool = False

    # Additional YAML schema catalogs registered after the defaults
    extra_schema_files: List[str] = field(default_factory=list)

    # Review text
    review_section_separator: str = "\n\n---\n\n"

    @classmethod
    def from_yaml(cls, path: str):
        """Load configuration from YAML file"""
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        return cls(**data.get('resume_schema', {}))


def get_settings() -> Settings:
    return Settings()


def get_config(settings: Settings = None) -> ResumeSchemaConfig:
    """Get configuration from the YAML file named by settings, or defaults"""
    settings = settings or get_settings()

    if os.path.exists(settings.config_path):
        config = ResumeSchemaConfig.from_yaml(settings.config_path)
    else:
        config = ResumeSchemaConfig()

    if settings.debug_cache:
        config.debug_cache = True
    return config
