from __future__ import annotations

from typing import Dict

from pydantic import BaseModel, Field


class AppConfig(BaseModel):
    default_source: str = "source.http"
    plugins: Dict[str, str] = Field(default_factory=lambda: {
        "source.http": "oztail.plugins.sources.http.impl:HttpSessionSource",
        "source.file": "oztail.plugins.sources.file.impl:JsonFileSessionSource",
    })

    def source_key(self, name: str) -> str:
        """Accept either ``http`` or the full ``source.http`` key."""
        return name if name.startswith("source.") else f"source.{name}"


SDK_CONFIG = AppConfig()
