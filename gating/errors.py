"""
gating/errors.py — wyjątki GateKeep.

Silnik (gate, extract_markers, resolve, apply_actions) nie rzuca wyjątków dla
żadnego wejścia tekstowego: brak dopasowania to po prostu brak akcji.
Wyjątki dotyczą konfiguracji i kolaboratorów zewnętrznych (origin).
"""

from __future__ import annotations


class GatingError(Exception):
    """Bazowy wyjątek GateKeep."""


class ConfigError(GatingError):
    """Niepoprawna wartość konfiguracji (np. nieznana polityka bramki strony)."""


class OriginError(GatingError):
    """Nie udało się pobrać treści z originu."""

    def __init__(self, url: str, reason: str) -> None:
        super().__init__(f"Błąd pobierania {url}: {reason}")
        self.url = url
        self.reason = reason
