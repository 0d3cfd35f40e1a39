"""Runtime wiring helper for CLI and server."""

from dataclasses import dataclass
from pathlib import Path

from .adapters.pad_store import FsPadStore
from .config import MoinExportConfig, load_config
from .core.ports import DocumentStore
from .export.moinmoin import ExportOptions


@dataclass
class Runtime:
    """Container for all wired components."""
    store: DocumentStore
    options: ExportOptions
    config: MoinExportConfig


def build_runtime(
    store_path: Path | None = None,
    config_path: Path | None = None,
) -> Runtime:
    """Build and wire all components for a pad directory."""
    config = load_config(config_path=config_path, store_path=store_path)
    
    # Use config values if CLI args not provided
    if store_path is None:
        store_path = config.store.root
    
    store = FsPadStore(store_path)
    options = ExportOptions(
        strip_heading_marker=config.export.strip_heading_marker,
        banner=config.export.banner,
    )
    
    return Runtime(store=store, options=options, config=config)
