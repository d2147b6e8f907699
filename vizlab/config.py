from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Literal, Optional


class ViewModelSettings(BaseSettings):
    """View model conversion defaults"""
    tree_parent_policy: Literal["last_wins", "first_wins", "reject"] = Field(
        default="last_wins",
        description="How a tree node with several incoming links picks its parent"
    )
    graph_include_predicates: bool = Field(
        default=False,
        description="Label graph links with the predicate value"
    )
    graph_literals_as_nodes: bool = Field(
        default=True,
        description="Turn literal objects into graph nodes"
    )
    table_fill_missing: bool = Field(
        default=False,
        description="Give every table row every header column"
    )
    table_subject_column: Optional[str] = Field(
        default=None,
        description="Column name holding the row subject (unset = no column)"
    )

    model_config = SettingsConfigDict(
        env_prefix='VIEWMODEL_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )


class LoaderSettings(BaseSettings):
    """Source loading configuration"""
    default_rdf_format: str = Field(
        default="turtle",
        description="rdflib parser used when the file suffix is not recognised"
    )

    model_config = SettingsConfigDict(
        env_prefix='LOADER_',
        env_file='.env',
        env_file_encoding='utf-8',
        extra='ignore'
    )


class AppSettings(BaseSettings):
    """Application settings"""
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Logging level"
    )

    # Component settings
    view_models: ViewModelSettings = Field(default_factory=ViewModelSettings)
    loader: LoaderSettings = Field(default_factory=LoaderSettings)

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=False,
        extra='ignore'
    )


# Singleton instance
_settings: AppSettings | None = None


def get_settings() -> AppSettings:
    """Get application settings (singleton)"""
    global _settings
    if _settings is None:
        _settings = AppSettings()
    return _settings


def reset_settings() -> None:
    """Drop the cached settings so the next get_settings() re-reads the environment"""
    global _settings
    _settings = None
