"""
Configuration module for the analytics core.
"""
from .settings import (
    FlowChainConfig,
    get_config,
    load_config,
    reload_config
)

__all__ = [
    'FlowChainConfig',
    'get_config',
    'load_config',
    'reload_config'
]
