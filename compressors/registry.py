"""
Pluggable Compressor Registry
=============================

Built-in compressors plus third-party compressors discovered through the
``compresstimator.compressors`` entry point group.
"""

import logging
from dataclasses import dataclass
from importlib.metadata import entry_points
from typing import Dict, List, Optional, Type

from .base import Compressor
from .lz4_compressor import LZ4Compressor
from .stdlib_compressors import Bzip2Compressor, GzipCompressor
from .zstd_compressor import ZstdCompressor

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = 'compresstimator.compressors'

BUILTIN_COMPRESSORS = (LZ4Compressor, ZstdCompressor, GzipCompressor, Bzip2Compressor)


class UnknownCompressorError(KeyError):
    """No compressor is registered under the requested name"""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else super().__str__()


@dataclass
class CompressorInfo:
    """Information about a compressor plugin"""
    name: str
    compressor_class: Type[Compressor]
    source: str = "builtin"  # "builtin", "plugin", "custom"
    description: str = ""


class CompressorRegistry:
    """
    Central registry for compressors.

    Supports compressor discovery via:
    1. Built-in compressors
    2. Entry points (setuptools plugins)
    3. Runtime registration (custom compressors)
    """

    def __init__(self):
        self._compressors: Dict[str, CompressorInfo] = {}
        self._loaded = False

    def _load_builtin_compressors(self):
        for compressor_class in BUILTIN_COMPRESSORS:
            self.register(CompressorInfo(
                name=compressor_class.NAME,
                compressor_class=compressor_class,
                source="builtin",
                description=compressor_class.DESCRIPTION,
            ))

    def _load_plugin_compressors(self):
        for ep in entry_points(group=ENTRY_POINT_GROUP):
            try:
                compressor_class = ep.load()
            except Exception as e:
                logger.error(f"Failed to load plugin compressor {ep.name}: {e}")
                continue

            if not (isinstance(compressor_class, type) and issubclass(compressor_class, Compressor)):
                logger.error(f"Plugin compressor {ep.name} is not a Compressor subclass")
                continue
            if ep.name in self._compressors:
                logger.warning(f"Plugin compressor {ep.name} ignored, name already registered")
                continue

            self.register(CompressorInfo(
                name=ep.name,
                compressor_class=compressor_class,
                source="plugin",
                description=compressor_class.DESCRIPTION or f"Plugin compressor {ep.name}",
            ))
            logger.info(f"Loaded plugin compressor: {ep.name}")

    def load_compressors(self):
        """Load built-in and plugin compressors once"""
        if self._loaded:
            return
        self._load_builtin_compressors()
        self._load_plugin_compressors()
        self._loaded = True
        logger.debug(f"Compressor registry loaded: {', '.join(self._compressors)}")

    def register(self, info: CompressorInfo):
        """Register a compressor, replacing any previous one of the same name"""
        if not issubclass(info.compressor_class, Compressor):
            raise TypeError(f"{info.compressor_class!r} is not a Compressor subclass")
        self._compressors[info.name] = info

    def get(self, name: str) -> CompressorInfo:
        self.load_compressors()
        try:
            return self._compressors[name]
        except KeyError:
            raise UnknownCompressorError(
                f"Unknown compressor '{name}' (available: {', '.join(sorted(self._compressors))})"
            ) from None

    def create(self, name: str, level: Optional[int] = None) -> Compressor:
        """Instantiate the compressor called name"""
        return self.get(name).compressor_class(level)

    def available(self) -> List[CompressorInfo]:
        self.load_compressors()
        return sorted(self._compressors.values(), key=lambda info: info.name)


_registry: Optional[CompressorRegistry] = None


def get_compressor_registry() -> CompressorRegistry:
    """Return the process-wide compressor registry, loading it on first use"""
    global _registry
    if _registry is None:
        _registry = CompressorRegistry()
        _registry.load_compressors()
    return _registry
