"""Environment-driven engine configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Iterable, Mapping, Optional

from .telemetry import ENV_PREFIX

# Forms whose binding vector holds name/value pairs.
BINDING_FORMS: tuple[str, ...] = (
    "let",
    "for",
    "loop",
    "binding",
    "with-local-vars",
    "doseq",
    "with-redefs",
    "when-let",
    "if-let",
    "when-some",
    "if-some",
    "when-first",
    "with-open",
    "dotimes",
    "letfn",
    "let*",
    "loop*",
)

_TRUTHY = {"1", "true", "yes", "on"}


def _split_forms(raw: str) -> tuple[str, ...]:
    return tuple(dict.fromkeys(part.strip() for part in raw.split(",") if part.strip()))


@dataclass(frozen=True, slots=True)
class PareditConfig:
    """Tunables consulted by the structural operations."""

    strict_close: bool = True
    pair_forms: tuple[str, ...] = BINDING_FORMS

    def __post_init__(self) -> None:
        object.__setattr__(self, "pair_forms", tuple(self.pair_forms))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "PareditConfig":
        source = os.environ if environ is None else environ
        strict_raw = source.get(f"{ENV_PREFIX}STRICT_CLOSE")
        forms_raw = source.get(f"{ENV_PREFIX}PAIR_FORMS")
        return cls(
            strict_close=(
                True if strict_raw is None else strict_raw.strip().lower() in _TRUTHY
            ),
            pair_forms=_split_forms(forms_raw) if forms_raw else BINDING_FORMS,
        )

    def with_pair_forms(self, forms: Iterable[str]) -> "PareditConfig":
        return PareditConfig(strict_close=self.strict_close, pair_forms=tuple(forms))


_ACTIVE: Optional[PareditConfig] = None


def configure(config: Optional[PareditConfig] = None) -> PareditConfig:
    """Adopt ``config`` (or re-read the environment when omitted)."""

    global _ACTIVE
    _ACTIVE = config if config is not None else PareditConfig.from_env()
    return _ACTIVE


def get_config() -> PareditConfig:
    if _ACTIVE is None:
        return configure()
    return _ACTIVE


__all__ = ["BINDING_FORMS", "PareditConfig", "configure", "get_config"]
