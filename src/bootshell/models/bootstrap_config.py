"""Parsed command line for a single bootstrap run."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class BootstrapConfig(BaseModel):
    """Where the command text comes from and where extra code lives."""

    model_config = ConfigDict(frozen=True)

    classpath: Path | None = None
    batch: bool = False
    file: Path | None = None
    inline_tokens: tuple[str, ...] = ()

    @property
    def inline_command(self) -> str:
        # Every token is followed by a space, including the last one.
        return "".join(f"{token} " for token in self.inline_tokens)
