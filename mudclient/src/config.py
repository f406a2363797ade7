"""
Client configuration management.

Loads configuration from a YAML file with environment variable overrides.
Uses Pydantic for validation and type safety.
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

DEFAULT_CONFIG_PATH = Path(__file__).parent / "client_config.yml"

# Used when no usable WebSocket port is configured.
DEFAULT_WS_PORT = 843


def _valid_port(port: Optional[int]) -> bool:
    return port is not None and 1 <= port <= 65535


class Endpoint(BaseModel):
    """A fully resolved WebSocket endpoint."""
    host: str
    port: int
    secure: bool = False
    path: str = ""

    @property
    def url(self) -> str:
        scheme = "wss" if self.secure else "ws"
        return f"{scheme}://{self.host}:{self.port}/{self.path.lstrip('/')}"


class SocketConfig(BaseModel):
    """Remote game and WebSocket gateway settings."""
    host: str = Field(default="localhost", description="Gateway hostname or IP")
    port: int = Field(default=4000, description="Game server port behind the gateway")
    ws_port: Optional[int] = Field(default=None, description="WebSocket gateway port")
    policy_port: Optional[int] = Field(default=None, description="Fallback gateway port when ws_port is unusable")
    ws_path: Optional[str] = Field(default=None, description="WebSocket path, defaults to port_<port>")
    ssl: bool = Field(default=False, description="Connect with wss://")
    open_timeout: float = Field(default=10.0, description="Seconds to wait for the handshake")

    def resolve_endpoint(self) -> Endpoint:
        """Build the endpoint from the current settings."""
        ws_port = self.ws_port
        if not _valid_port(ws_port):
            ws_port = self.policy_port
        if not _valid_port(ws_port):
            ws_port = DEFAULT_WS_PORT

        path = self.ws_path
        if path is None:
            path = f"port_{self.port}"

        return Endpoint(host=self.host or "localhost", port=ws_port, secure=self.ssl, path=path)


class InterfaceConfig(BaseModel):
    """Line editor and output settings."""
    history_size: int = Field(default=15, ge=1, description="Number of submitted lines kept for recall")
    initial_echo_mode: str = Field(default="plain", description="Echo mode on start (plain or masked)")
    encoding: str = Field(default="utf-8", description="Text encoding used on the wire")
    line_ending: str = Field(default="\r\n", description="Appended to every submitted line")
    notice_timeout: float = Field(default=5.0, description="Seconds connectivity advisories stay up")
    scrollback: int = Field(default=1000, ge=1, description="Output lines the window keeps for scrolling")


class KeyBindings(BaseModel):
    """Keyboard shortcuts for the line editor."""
    submit: list[str] = Field(default=["return", "kp_enter"], description="Submit the line")
    recall_previous: list[str] = Field(default=["up"], description="Recall the previous line")
    recall_next: list[str] = Field(default=["down"], description="Recall the next line")
    complete: list[str] = Field(default=["tab"], description="Complete the word at the cursor")
    backspace: list[str] = Field(default=["backspace"], description="Delete before the cursor")
    delete: list[str] = Field(default=["delete"], description="Delete after the cursor")
    cursor_left: list[str] = Field(default=["left"], description="Move the cursor left")
    cursor_right: list[str] = Field(default=["right"], description="Move the cursor right")
    cursor_home: list[str] = Field(default=["home"], description="Move the cursor to the start")
    cursor_end: list[str] = Field(default=["end"], description="Move the cursor to the end")
    scroll_up: list[str] = Field(default=["pageup"], description="Scroll the output up")
    scroll_down: list[str] = Field(default=["pagedown"], description="Scroll the output down")


class DebugConfig(BaseModel):
    """Debug and development settings."""
    log_level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR)")


class ClientConfig(BaseModel):
    """Complete client configuration."""
    socket: SocketConfig = Field(default_factory=SocketConfig)
    interface: InterfaceConfig = Field(default_factory=InterfaceConfig)
    key_bindings: KeyBindings = Field(default_factory=KeyBindings)
    debug: DebugConfig = Field(default_factory=DebugConfig)

    @classmethod
    def from_yaml(cls, path: Optional[Path] = None) -> "ClientConfig":
        """Load configuration from YAML file."""
        path = path or DEFAULT_CONFIG_PATH

        data = {}
        if path.exists():
            with open(path, "r") as f:
                data = yaml.safe_load(f) or {}

        # Apply environment variable overrides
        data = cls._apply_env_overrides(data)

        return cls(**data)

    @staticmethod
    def _apply_env_overrides(data: dict) -> dict:
        """Apply environment variable overrides to config data."""
        env_mappings = {
            "MUD_HOST": ("socket", "host"),
            "MUD_PORT": ("socket", "port"),
            "MUD_WS_PORT": ("socket", "ws_port"),
            "MUD_POLICY_PORT": ("socket", "policy_port"),
            "MUD_WS_PATH": ("socket", "ws_path"),
            "MUD_SSL": ("socket", "ssl"),
            "LOG_LEVEL": ("debug", "log_level"),
        }

        for env_var, (section, key) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                if section not in data:
                    data[section] = {}

                # Convert types based on default
                if key in ("port", "ws_port", "policy_port"):
                    data[section][key] = int(value)
                elif key == "ssl":
                    data[section][key] = value.lower() in ("true", "1", "yes")
                else:
                    data[section][key] = value

        return data

    def save(self, path: Optional[Path] = None) -> Path:
        """Write this configuration to a YAML file."""
        path = path or DEFAULT_CONFIG_PATH
        data = self.model_dump()
        with open(path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)
        return path


def get_config() -> ClientConfig:
    """Get the singleton configuration instance."""
    if not hasattr(get_config, "_instance"):
        get_config._instance = ClientConfig.from_yaml()
    return get_config._instance


def reload_config(path: Optional[Path] = None) -> ClientConfig:
    """Reload configuration from file."""
    get_config._instance = ClientConfig.from_yaml(path)
    return get_config._instance
