"""Configuration management for TubeVault."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field
from ruamel.yaml import YAML

from .models.options import BackupOptions

DEFAULT_CONFIG_PATH = Path.home() / ".config/tubevault/config.yaml"


class BackupConfig(BaseModel):
    """Configuration for export operations."""

    json_indent: Optional[int] = Field(default=2, description="Indent for JSON backups (None for compact)")
    verify_integrity: bool = Field(default=True, description="Verify raw database exports by hash")
    hash_algorithm: str = Field(default="sha256", description="Hash algorithm for integrity checks")
    chunk_size: int = Field(default=65536, description="Chunk size for stream copies in bytes")
    default_options: BackupOptions = Field(
        default_factory=BackupOptions,
        description="Categories included when the caller does not choose"
    )


class RestoreConfig(BaseModel):
    """Configuration for restore operations."""

    show_progress: bool = Field(default=False, description="Show progress bars while merging")


class StorageConfig(BaseModel):
    """Configuration for the local backup directory."""

    backup_root: Path = Field(
        default_factory=lambda: Path.home() / ".local/share/tubevault/backups",
        description="Directory holding backup files"
    )
    include_timestamp: bool = Field(default=True, description="Add a timestamp to backup file names")
    max_backup_files: int = Field(default=5, description="Backup files kept when pruning (0 keeps all)")


class TubeVaultConfig(BaseModel):
    """Main configuration for TubeVault."""

    backup: BackupConfig = Field(default_factory=BackupConfig)
    restore: RestoreConfig = Field(default_factory=RestoreConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)

    log_level: str = Field(default="INFO", description="Logging level")
    log_file: Optional[Path] = Field(default=None, description="Optional detailed log file")

    class Config:
        """Pydantic configuration."""

        validate_assignment = True


def load_config(config_path: Optional[Path] = None) -> TubeVaultConfig:
    """Load configuration from file or create default."""

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    if config_path.exists():
        yaml = YAML(typ="safe")
        with open(config_path, "r") as f:
            data = yaml.load(f) or {}
        return TubeVaultConfig(**data)
    else:
        config = TubeVaultConfig()
        save_config(config, config_path)
        return config


def save_config(config: TubeVaultConfig, config_path: Optional[Path] = None) -> None:
    """Save configuration to file."""

    if config_path is None:
        config_path = DEFAULT_CONFIG_PATH

    config_path.parent.mkdir(parents=True, exist_ok=True)

    yaml = YAML()
    yaml.default_flow_style = False

    with open(config_path, "w") as f:
        yaml.dump(config.model_dump(mode="json"), f)


def get_config() -> TubeVaultConfig:
    """Get the global configuration instance."""

    if not hasattr(get_config, "_config"):
        get_config._config = load_config()

    return get_config._config
