"""
Configuration Manager Module

Handles loading, saving, and managing application configuration.
Maps between the dataclasses below and a JSON file.
"""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from infrastructure.logger import get_logger

logger = get_logger("ConfigManager")


@dataclass
class Paths:
    """File paths configuration."""
    roster_store: str = "roster.json"   # employees + performance
    last_import_file: str = ""
    bracket_tables: str = ""            # optional JSON override of the brackets
    custom_font_path: str = ""          # TTF for PDF output


@dataclass
class OutputSettings:
    """Output settings for generated reports."""
    output_dir: str = ""  # Default empty = current directory
    csv_filename_pattern: str = "relatorio_premiacao_{year}_{month}.csv"
    excel_filename_pattern: str = "relatorio_premiacao_{year}_{month}.xlsx"
    pdf_filename_pattern: str = "relatorio_premiacao_{year}_{month}.pdf"
    generate_excel: bool = True
    generate_pdf: bool = True
    csv_delimiter: str = ";"

    # Ordering: "roster", "total" or "name"
    sort_by: str = "roster"


@dataclass
class AppConfig:
    """Main application configuration container."""
    paths: Paths = field(default_factory=Paths)
    output_settings: OutputSettings = field(default_factory=OutputSettings)
    log_level: str = "INFO"


class ConfigManager:
    """
    Manages application configuration with JSON persistence.

    Responsibilities:
    - Load configuration from JSON file
    - Save configuration to JSON file
    - Provide default configuration
    - Convert between dataclass and dict representations
    """

    DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "config.json"

    def __init__(self, config_path: Optional[Path] = None):
        self.config_path = config_path or self.DEFAULT_CONFIG_PATH
        self._config: AppConfig = AppConfig()

    @property
    def config(self) -> AppConfig:
        """Get current configuration."""
        return self._config

    def load(self) -> AppConfig:
        """Load configuration from JSON file."""
        if self.config_path.exists():
            try:
                with open(self.config_path, 'r', encoding='utf-8') as f:
                    data = json.load(f)
                self._config = self._dict_to_config(data)
            except (json.JSONDecodeError, AttributeError, TypeError) as e:
                logger.warning(f"Falha ao carregar configuração, usando padrões: {e}")
                self._config = AppConfig()
        else:
            self._config = AppConfig()
        return self._config

    def save(self) -> None:
        """Save current configuration to JSON file."""
        data = self._config_to_dict(self._config)
        self.config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.config_path, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

    def update(self, **kwargs) -> None:
        """Update specific configuration values."""
        for key, value in kwargs.items():
            if hasattr(self._config, key):
                setattr(self._config, key, value)
        self.save()

    def resolve_path(self, value: str) -> Path:
        """Resolve a configured path relative to the config file's directory."""
        path = Path(value)
        if path.is_absolute():
            return path
        return self.config_path.parent / path

    def _config_to_dict(self, config: AppConfig) -> dict:
        """Convert AppConfig dataclass to dictionary."""
        return {
            "paths": {
                "roster_store": config.paths.roster_store,
                "last_import_file": config.paths.last_import_file,
                "bracket_tables": config.paths.bracket_tables,
                "custom_font_path": config.paths.custom_font_path
            },
            "output_settings": {
                "output_dir": config.output_settings.output_dir,
                "csv_filename_pattern": config.output_settings.csv_filename_pattern,
                "excel_filename_pattern": config.output_settings.excel_filename_pattern,
                "pdf_filename_pattern": config.output_settings.pdf_filename_pattern,
                "generate_excel": config.output_settings.generate_excel,
                "generate_pdf": config.output_settings.generate_pdf,
                "csv_delimiter": config.output_settings.csv_delimiter,
                "sort_by": config.output_settings.sort_by
            },
            "log_level": config.log_level
        }

    def _dict_to_config(self, data: dict) -> AppConfig:
        """Convert dictionary to AppConfig dataclass."""
        paths_data = data.get("paths", {})
        output_data = data.get("output_settings", {})
        defaults = OutputSettings()

        paths = Paths(
            roster_store=paths_data.get("roster_store", "roster.json"),
            last_import_file=paths_data.get("last_import_file", ""),
            bracket_tables=paths_data.get("bracket_tables", ""),
            custom_font_path=paths_data.get("custom_font_path", "")
        )

        output_settings = OutputSettings(
            output_dir=output_data.get("output_dir", defaults.output_dir),
            csv_filename_pattern=output_data.get("csv_filename_pattern", defaults.csv_filename_pattern),
            excel_filename_pattern=output_data.get("excel_filename_pattern", defaults.excel_filename_pattern),
            pdf_filename_pattern=output_data.get("pdf_filename_pattern", defaults.pdf_filename_pattern),
            generate_excel=output_data.get("generate_excel", defaults.generate_excel),
            generate_pdf=output_data.get("generate_pdf", defaults.generate_pdf),
            csv_delimiter=output_data.get("csv_delimiter", defaults.csv_delimiter),
            sort_by=output_data.get("sort_by", defaults.sort_by)
        )

        return AppConfig(
            paths=paths,
            output_settings=output_settings,
            log_level=data.get("log_level", "INFO")
        )
