#!filepath: tracedoc/__init__.py

from .utils.logger import Logging, logs
from .config.app_config import AppConfig
from .store.memory import DictActorRegistry, InMemoryFactStore
from .store.loader import load_trace
from .assembler import DocumentAssembler

__all__ = [
    "logs", "Logging",
    "AppConfig",
    "InMemoryFactStore", "DictActorRegistry",
    "load_trace",
    "DocumentAssembler",
]
