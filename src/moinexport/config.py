"""Configuration loader for moinexport.toml."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

try:
    import tomllib
except ImportError:
    import tomli as tomllib  # type: ignore

CONFIG_NAME = "moinexport.toml"


@dataclass
class StoreConfig:
    """Pad store configuration."""
    root: Path


@dataclass
class ExportConfig:
    """MoinMoin export configuration."""
    strip_heading_marker: bool = True
    banner: bool = True


@dataclass
class ServerConfig:
    """HTTP server configuration."""
    host: str = "127.0.0.1"
    port: int = 9001


@dataclass
class MoinExportConfig:
    """Complete moinexport configuration."""
    store: StoreConfig
    export: ExportConfig
    server: ServerConfig


def load_config(config_path: Path | None = None, store_path: Path | None = None) -> MoinExportConfig:
    """
    Load configuration from moinexport.toml.
    
    Search order:
    1. config_path (if provided)
    2. cwd/moinexport.toml
    3. store_path/moinexport.toml
    
    Args:
        config_path: Explicit path to config file
        store_path: Pad directory for fallback search
    
    Returns:
        MoinExportConfig with resolved settings
    """
    toml_data: dict[str, Any] = {}
    
    search_paths = []
    if config_path:
        search_paths.append(config_path)
    search_paths.append(Path.cwd() / CONFIG_NAME)
    if store_path:
        search_paths.append(store_path / CONFIG_NAME)
    
    for path in search_paths:
        if path.exists():
            with open(path, "rb") as f:
                toml_data = tomllib.load(f)
            break
    
    store_data = toml_data.get("store", {})
    store_config = StoreConfig(
        root=Path(store_data.get("root", store_path or Path("./pads"))),
    )
    
    export_data = toml_data.get("export", {})
    export_config = ExportConfig(
        strip_heading_marker=bool(export_data.get("strip_heading_marker", True)),
        banner=bool(export_data.get("banner", True)),
    )
    
    server_data = toml_data.get("server", {})
    server_config = ServerConfig(
        host=str(server_data.get("host", "127.0.0.1")),
        port=int(server_data.get("port", 9001)),
    )
    
    return MoinExportConfig(
        store=store_config,
        export=export_config,
        server=server_config,
    )
