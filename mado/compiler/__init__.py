"""Configuration file handling; the kernel only sees validated models."""

from mado.compiler.config_loader import ConfigLoader, load_config

__all__ = ["ConfigLoader", "load_config"]
