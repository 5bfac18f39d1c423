"""
Configuration management for SnipCheck
支持环境变量、配置文件、命令行覆盖的统一管理
"""

from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Type

import yaml

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)


DEFAULT_TOOLCHAINS: Dict[str, Dict[str, Any]] = {
    "c": {"command": "gcc -fsyntax-only -x c -", "suffix": ".c"},
    "cpp": {"command": "g++ -fsyntax-only -x c++ -", "suffix": ".cpp"},
    "c++": {"command": "g++ -fsyntax-only -x c++ -", "suffix": ".cpp"},
    "python": {"command": "python3 -m py_compile {file}", "suffix": ".py"},
    "py": {"command": "python3 -m py_compile {file}", "suffix": ".py"},
    "sh": {"command": "bash -n", "suffix": ".sh"},
    "bash": {"command": "bash -n", "suffix": ".sh"},
}

OUTPUT_FORMATS = ("text", "jsonl", "json")


class ToolchainSpec(BaseModel):
    """External syntax checker for one language tag"""
    command: str = Field(..., min_length=1, description="Command template, {file} is replaced by a temp file path")
    suffix: Optional[str] = Field(default=None, description="Temp file suffix when {file} is used")

    model_config = ConfigDict(frozen=True)

    @property
    def uses_file(self) -> bool:
        return "{file}" in self.command


class VerifierConfig(BaseSettings):
    """Verifier configuration"""
    model_config = SettingsConfigDict(env_prefix="SNIPCHECK_VERIFIER_")

    workers: int = Field(default=1, ge=1, description="Number of concurrent checker invocations")
    timeout: Optional[float] = Field(default=None, gt=0, description="Global timeout for a run (seconds)")


class OutputConfig(BaseSettings):
    """Output configuration"""
    model_config = SettingsConfigDict(env_prefix="SNIPCHECK_OUTPUT_")

    format: str = Field(default="text", description="Summary format (text/jsonl/json)")

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str) -> str:
        v = v.lower()
        if v not in OUTPUT_FORMATS:
            raise ValueError(f"Unsupported output format: {v}. Valid formats: {list(OUTPUT_FORMATS)}")
        return v


class Config(BaseSettings):
    """Main configuration for SnipCheck"""
    model_config = SettingsConfigDict(
        env_prefix="SNIPCHECK_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Basic settings
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Log level")
    log_file: Optional[str] = Field(default=None, description="Log file path (no file logging if unset)")

    # Sub-configurations
    verifier: VerifierConfig = Field(default_factory=VerifierConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    toolchains: Dict[str, ToolchainSpec] = Field(
        default_factory=lambda: {tag: ToolchainSpec(**spec) for tag, spec in DEFAULT_TOOLCHAINS.items()},
        description="Language tag -> checker command",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        return v.upper()

    @field_validator("toolchains", mode="before")
    @classmethod
    def normalize_toolchains(cls, v: Any) -> Any:
        """Accept plain command strings and lowercase the tags"""
        if not isinstance(v, dict):
            return v
        normalized = {}
        for tag, spec in v.items():
            if isinstance(spec, str):
                spec = {"command": spec}
            normalized[str(tag).strip().lower()] = spec
        return normalized

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: Type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        # The YAML file (model_config["yaml_file"]) ranks below env and .env
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )

    @classmethod
    def from_file(cls, config_file: str) -> "Config":
        """
        Load configuration from a YAML file

        Environment variables and .env still override values from the file.
        """
        with open(config_file, "r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
        if config_data is not None and not isinstance(config_data, dict):
            raise ValueError(f"Config file {config_file} must contain a mapping")

        class FileConfig(cls):
            model_config = SettingsConfigDict(yaml_file=config_file, yaml_file_encoding="utf-8")

        return cls(**FileConfig().model_dump())

    def ensure_log_directory(self) -> None:
        if self.log_file:
            Path(self.log_file).parent.mkdir(parents=True, exist_ok=True)


# Global default configuration
config = Config()
