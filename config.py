"""
Central configuration for rules, AI and session settings.
Pydantic models give type-safe settings loaded from the environment or JSON.
"""
from __future__ import annotations

import json
import logging
import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

from draughts.difficulty import Difficulty
from draughts.types import Player

ConfigDict = Dict[str, Any]


def _parse_bool(v: Any) -> bool:
    if isinstance(v, str):
        return v.strip().lower() in ('1', 'true', 'yes', 'on')
    return bool(v)


class RulesSettings(BaseModel):
    """Game rule toggles."""

    mandatory_capture: bool = Field(default=True, description="Require captures when available")
    move_hints: bool = Field(default=True, description="Highlight legal destinations (rendering only)")

    @field_validator('mandatory_capture', 'move_hints', mode='before')
    @classmethod
    def validate_bool_fields(cls, v):
        return _parse_bool(v)


class AISettings(BaseModel):
    """Computer opponent settings."""

    difficulty: int = Field(default=1, description="Difficulty level index (0..4, clamped when mapped)")
    seed: Optional[int] = Field(default=None, description="Seed for the search RNG")

    @property
    def tier(self) -> Difficulty:
        return Difficulty.from_level_index(self.difficulty)


class SessionSettings(BaseModel):
    """Per-session choices made once before play starts."""

    human_color: str = Field(default="WHITE", description="Side the human plays")
    starting_player: str = Field(default="WHITE", description="Side that moves first")
    vs_ai: bool = Field(default=True, description="Play against the computer")

    @field_validator('vs_ai', mode='before')
    @classmethod
    def validate_vs_ai(cls, v):
        return _parse_bool(v)

    @field_validator('human_color', 'starting_player', mode='before')
    @classmethod
    def validate_color(cls, v):
        return Player.from_color_string(None if v is None else str(v), Player.WHITE).value

    @property
    def human(self) -> Player:
        return Player(self.human_color)

    @property
    def starting(self) -> Player:
        return Player(self.starting_player)


class LoggingSettings(BaseModel):
    """Logging configuration."""

    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR']
        v_upper = v.upper() if isinstance(v, str) else str(v).upper()
        if v_upper not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}")
        return v_upper


class DraughtsConfig(BaseModel):
    """Main configuration model."""

    rules: RulesSettings = Field(default_factory=RulesSettings)
    ai: AISettings = Field(default_factory=AISettings)
    session: SessionSettings = Field(default_factory=SessionSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    version: str = Field(default="1.0.0", description="Configuration version")
    config_file: Optional[str] = Field(default=None, description="Path to config file")

    @classmethod
    def from_env(cls) -> 'DraughtsConfig':
        """Create configuration from environment variables."""
        seed = os.getenv('DRAUGHTS_SEED')
        return cls(
            rules=RulesSettings(
                mandatory_capture=os.getenv('DRAUGHTS_MANDATORY', 'true'),
                move_hints=os.getenv('DRAUGHTS_HINTS', 'true'),
            ),
            ai=AISettings(
                difficulty=int(os.getenv('DRAUGHTS_DIFFICULTY', '1')),
                seed=int(seed) if seed else None,
            ),
            session=SessionSettings(
                human_color=os.getenv('DRAUGHTS_HUMAN_COLOR', 'WHITE'),
                starting_player=os.getenv('DRAUGHTS_STARTING_PLAYER', 'WHITE'),
                vs_ai=os.getenv('DRAUGHTS_VS_AI', 'true'),
            ),
            logging=LoggingSettings(
                log_level=os.getenv('DRAUGHTS_LOG_LEVEL', 'INFO'),
            ),
        )

    def to_dict(self) -> ConfigDict:
        return self.model_dump()

    def save_to_file(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        config_dict = self.to_dict()
        config_dict['config_file'] = filepath
        with open(filepath, 'w') as f:
            json.dump(config_dict, f, indent=2)

    @classmethod
    def load_from_file(cls, filepath: str) -> 'DraughtsConfig':
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)
        data['config_file'] = filepath
        return cls.model_validate(data)


# Global configuration instance
_config: Optional[DraughtsConfig] = None


def get_config() -> DraughtsConfig:
    """Get or create the global configuration instance."""
    global _config
    if _config is None:
        _config = DraughtsConfig.from_env()
    return _config


def load_config_from_file(filepath: str) -> DraughtsConfig:
    """Load configuration from file and update global instance."""
    global _config
    _config = DraughtsConfig.load_from_file(filepath)
    return _config


def reset_config() -> None:
    """Reset the global configuration to defaults."""
    global _config
    _config = None


def setup_logging(level: Optional[str] = None) -> None:
    """Configure root logging once; level from argument, else settings (DRAUGHTS_LOG_LEVEL)."""
    if getattr(setup_logging, "_configured", False):
        return
    name = (level or get_config().logging.log_level).upper()
    logging.basicConfig(
        level=getattr(logging, name, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    setup_logging._configured = True  # type: ignore[attr-defined]
