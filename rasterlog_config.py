#!/usr/bin/env python3
"""
🐧 RasterLog - Configuration Module
===================================
Copyright (c) 2025 PNGN-Tec LLC

Centralized Configuration System
=================================
Complete configuration for terminal raster logging including:
- Density ramp and terminal size budget
- Character cell aspect correction
- Downsampling algorithm selection
- Color output mode and terminal capability detection
- Log emission settings

Configuration Overview
======================
All settings live in plain dataclasses that validate themselves. A
process-wide ConfigurationManager holds the active configuration, applies
environment overrides at startup and supports runtime reloading with
rollback when the new configuration does not validate.

Environment Overrides
=====================
- RASTERLOG_MAX_COLUMNS: Maximum rendered columns
- RASTERLOG_MAX_ROWS: Maximum rendered text rows
- RASTERLOG_CHAR_ASPECT: Height/width ratio of a terminal cell
- RASTERLOG_SCALING: nearest | bilinear | area
- RASTERLOG_COLOR: auto | always | never
- RASTERLOG_SINGLE_MESSAGE: Emit each frame as one multi-line message

Color Capability
================
Truecolor output is used when COLORTERM reports "truecolor" or "24bit"
(or RASTERLOG_COLOR forces it). The signal is read on every call so that
toggling it between calls takes effect immediately.
"""

import threading
import logging
import os
from typing import Mapping, Optional
from dataclasses import dataclass, field
from enum import Enum

# Configure logging
logger = logging.getLogger('rasterlog_config')

# ============================================================================
# TERMINAL BUDGET
# ============================================================================

MAX_COLUMNS = 120        # Characters wide
MAX_ROWS = 60            # Text lines tall
CHAR_ASPECT = 2          # Cell height / cell width

# ============================================================================
# CHARACTER SETS
# ============================================================================

# Density ramp from least to most dense
DENSITY_RAMP = " .:-=+*#%@"

# Marker drawn instead of a grid for buffers without elements
EMPTY_MARKER = "<empty>"

# COLORTERM values that announce 24-bit color support
TRUECOLOR_VALUES = ('truecolor', '24bit')

# ============================================================================
# CONFIGURATION ENUMS
# ============================================================================

class ScalingAlgorithm(Enum):
    """Representative-sample rules for downsampling"""
    NEAREST = "nearest"
    BILINEAR = "bilinear"
    AREA = "area"


class ColorMode(Enum):
    """Color output policy"""
    AUTO = "auto"
    ALWAYS = "always"
    NEVER = "never"


# ============================================================================
# RENDERING CONFIGURATION
# ============================================================================

@dataclass
class RenderingConfig:
    """
    Rendering and terminal budget configuration.

    Attributes:
        ramp: Glyphs ordered from least to most visually dense
        max_columns: Upper bound on rendered grid columns
        max_rows: Upper bound on rendered text rows
        char_aspect: Terminal cell height divided by its width
        scaling_algorithm: Representative-sample rule for downsampling
        empty_marker: Body text for buffers without elements
    """

    ramp: str = DENSITY_RAMP
    max_columns: int = MAX_COLUMNS
    max_rows: int = MAX_ROWS
    char_aspect: int = CHAR_ASPECT
    scaling_algorithm: ScalingAlgorithm = ScalingAlgorithm.BILINEAR
    empty_marker: str = EMPTY_MARKER

    def validate(self) -> bool:
        """Validate rendering configuration"""
        if len(self.ramp) < 2:
            raise ValueError("Density ramp needs at least two glyphs")
        if self.max_columns <= 0 or self.max_rows <= 0:
            raise ValueError("Terminal budget must be positive")
        if self.char_aspect < 1:
            raise ValueError("Character aspect must be at least 1")
        if not self.empty_marker:
            raise ValueError("Empty marker must not be blank")
        return True


# ============================================================================
# OUTPUT CONFIGURATION
# ============================================================================

@dataclass
class OutputConfig:
    """Log emission and color settings"""

    color_mode: ColorMode = ColorMode.AUTO
    single_message: bool = False
    logger_name: str = "RasterLog.Terminal"

    def validate(self) -> bool:
        """Validate output configuration"""
        if not isinstance(self.color_mode, ColorMode):
            raise ValueError(f"Unknown color mode: {self.color_mode!r}")
        if not self.logger_name:
            raise ValueError("Logger name must not be empty")
        return True


# ============================================================================
# MAIN CONFIGURATION CLASS
# ============================================================================

@dataclass
class RasterLogConfig:
    """Complete system configuration"""

    # Sub-configurations
    rendering: RenderingConfig = field(default_factory=RenderingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    # System-wide settings
    log_level: str = "INFO"

    def validate(self) -> bool:
        """Validate entire configuration"""
        self.rendering.validate()
        self.output.validate()
        if logging.getLevelName(self.log_level.upper()) not in (
                logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL):
            raise ValueError(f"Unknown log level: {self.log_level}")
        return True


# ============================================================================
# CONFIGURATION MANAGER (SINGLETON)
# ============================================================================

class ConfigurationManager:
    """
    Singleton configuration manager with runtime reloading.
    Thread-safe management of global configuration.
    """

    _instance = None
    _lock = threading.Lock()

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super().__new__(cls)
                    cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        if self._initialized:
            return

        self._config = RasterLogConfig()
        self._config_lock = threading.RLock()
        self._load_environment_overrides(self._config)
        self._apply_log_level(self._config)

        self._initialized = True
        logger.info("Configuration manager initialized")

    @staticmethod
    def _load_environment_overrides(config: RasterLogConfig):
        """Load configuration overrides from environment variables"""

        # Logging
        if 'RASTERLOG_LOG_LEVEL' in os.environ:
            config.log_level = os.environ['RASTERLOG_LOG_LEVEL']

        # Rendering settings
        if 'RASTERLOG_MAX_COLUMNS' in os.environ:
            config.rendering.max_columns = int(os.environ['RASTERLOG_MAX_COLUMNS'])
        if 'RASTERLOG_MAX_ROWS' in os.environ:
            config.rendering.max_rows = int(os.environ['RASTERLOG_MAX_ROWS'])
        if 'RASTERLOG_CHAR_ASPECT' in os.environ:
            config.rendering.char_aspect = int(os.environ['RASTERLOG_CHAR_ASPECT'])
        if 'RASTERLOG_SCALING' in os.environ:
            config.rendering.scaling_algorithm = ScalingAlgorithm(os.environ['RASTERLOG_SCALING'].lower())

        # Output settings
        if 'RASTERLOG_COLOR' in os.environ:
            config.output.color_mode = ColorMode(os.environ['RASTERLOG_COLOR'].lower())
        if 'RASTERLOG_SINGLE_MESSAGE' in os.environ:
            config.output.single_message = os.environ['RASTERLOG_SINGLE_MESSAGE'].lower() in ('true', '1', 'yes')

    @staticmethod
    def _apply_log_level(config: RasterLogConfig):
        """Set the frame logger, and the render logger beneath it, to the configured level"""
        logging.getLogger(config.output.logger_name).setLevel(config.log_level.upper())

    @property
    def config(self) -> RasterLogConfig:
        """Get current configuration"""
        with self._config_lock:
            return self._config

    def reload(self, new_config: Optional[RasterLogConfig] = None) -> bool:
        """
        Replace the active configuration.

        Args:
            new_config: New configuration to apply (defaults plus environment if None)

        Returns:
            True if reload successful
        """
        with self._config_lock:
            old_config = self._config

            try:
                if new_config is None:
                    new_config = RasterLogConfig()
                    self._load_environment_overrides(new_config)
                new_config.validate()
                self._config = new_config
                self._apply_log_level(new_config)

                logger.info("Configuration reloaded successfully")
                return True

            except ValueError as e:
                logger.error(f"Configuration reload failed: {e}")
                self._config = old_config
                return False


# ============================================================================
# PUBLIC API FUNCTIONS
# ============================================================================

_manager = ConfigurationManager()

def get_config() -> RasterLogConfig:
    """Get current system configuration"""
    return _manager.config

def reload_config(new_config: Optional[RasterLogConfig] = None) -> bool:
    """Reload system configuration"""
    return _manager.reload(new_config)

def get_rendering_config() -> RenderingConfig:
    """Get rendering configuration"""
    return _manager.config.rendering

def get_output_config() -> OutputConfig:
    """Get output configuration"""
    return _manager.config.output


# ============================================================================
# TERMINAL CAPABILITY
# ============================================================================

def color_supported(environ: Optional[Mapping[str, str]] = None,
                    config: Optional[OutputConfig] = None) -> bool:
    """
    Decide whether 24-bit color escapes may be emitted.

    Args:
        environ: Environment mapping to inspect (os.environ if None)
        config: Output configuration (active configuration if None)

    Returns:
        True when the terminal announces truecolor support
    """
    config = config or get_output_config()
    if config.color_mode is ColorMode.ALWAYS:
        return True
    if config.color_mode is ColorMode.NEVER:
        return False

    environ = os.environ if environ is None else environ
    return environ.get('COLORTERM', '').strip().lower() in TRUECOLOR_VALUES
