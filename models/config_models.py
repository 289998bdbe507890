"""Configuration data models for the translation router.

Each dataclass mirrors one section of the INI file; field names match the keys in that section.
"""

from __future__ import annotations

from dataclasses import dataclass, field

__all__: list[str] = ["Backend", "Config", "General", "Languages", "Server"]


@dataclass
class General:
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    LOG_FILE: str = ""
    SCRIPT_NAME: str = ""


@dataclass
class Backend:
    ENGINE: str = "azure"
    API_KEY: str = ""
    API_URL: str = ""
    REGION: str = ""
    TIMEOUT: float = 10.0

    def __repr__(self) -> str:
        # Keep the key out of logs.
        masked: str = "***" if self.API_KEY else ""
        return (
            f"Backend(ENGINE={self.ENGINE!r}, API_KEY={masked!r}, API_URL={self.API_URL!r}, "
            f"REGION={self.REGION!r}, TIMEOUT={self.TIMEOUT!r})"
        )


@dataclass
class Languages:
    # Empty means every language provider known to the registry.
    ENABLED: list[str] = field(default_factory=list)


@dataclass
class Server:
    HOST: str = "127.0.0.1"
    PORT: int = 8080


@dataclass
class Config:
    GENERAL: General = field(default_factory=General)
    BACKEND: Backend = field(default_factory=Backend)
    LANGUAGES: Languages = field(default_factory=Languages)
    SERVER: Server = field(default_factory=Server)
