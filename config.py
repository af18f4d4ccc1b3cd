"""
Configuration loading/saving for Financey
"""
from __future__ import annotations
import json
import os
from dataclasses import asdict, dataclass
from typing import Optional

from exceptions import ConfigurationError
from utils import app_dir

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
SETTINGS_FILE = "settings.json"


@dataclass
class AppSettings:
    """User-tunable settings"""
    date_column: str = "Transaction Date"
    description_column: str = "Description"
    amount_column: str = "Amount"
    log_level: str = "INFO"


def settings_to_dict(settings: AppSettings) -> dict:
    """Convert AppSettings object to dictionary for JSON serialization"""
    return asdict(settings)


def dict_to_settings(d: dict) -> AppSettings:
    """Convert dictionary from JSON to a validated AppSettings object"""
    defaults = AppSettings()
    settings = AppSettings(
        date_column=str(d.get("date_column", defaults.date_column)),
        description_column=str(d.get("description_column", defaults.description_column)),
        amount_column=str(d.get("amount_column", defaults.amount_column)),
        log_level=str(d.get("log_level", defaults.log_level)).upper(),
    )
    validate_settings(settings)
    return settings


def validate_settings(settings: AppSettings) -> None:
    """Raise ConfigurationError if settings cannot be used"""
    if settings.log_level not in VALID_LOG_LEVELS:
        raise ConfigurationError(
            f"Log level must be one of: {list(VALID_LOG_LEVELS)}",
            details={"log_level": settings.log_level},
        )
    columns = [settings.date_column, settings.description_column, settings.amount_column]
    if not all(c.strip() for c in columns):
        raise ConfigurationError("Column names must not be empty", details={"columns": columns})
    if len(set(columns)) != len(columns):
        raise ConfigurationError("Column names must be distinct", details={"columns": columns})
    if any("," in c for c in columns):
        raise ConfigurationError("Column names must not contain commas", details={"columns": columns})


def load_settings(path: str) -> AppSettings:
    """Load settings from JSON file; a missing file yields defaults"""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        data = {}
    except json.JSONDecodeError as ex:
        raise ConfigurationError(f"Settings file is not valid JSON: {ex}", details={"path": path}) from ex

    if not isinstance(data, dict):
        raise ConfigurationError("Settings file must hold a JSON object", details={"path": path})

    env_level = os.getenv("LOG_LEVEL")
    if env_level:
        data = dict(data, log_level=env_level)
    return dict_to_settings(data)


def save_settings(settings: AppSettings, path: str) -> None:
    """Write settings to JSON file"""
    validate_settings(settings)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(settings_to_dict(settings), f, ensure_ascii=False, indent=2)


def get_default_settings(path: Optional[str] = None) -> AppSettings:
    """Load settings from the application directory"""
    return load_settings(path or os.path.join(app_dir(), SETTINGS_FILE))
