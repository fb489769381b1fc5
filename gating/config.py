"""
gating/config.py — konfiguracja ustalana przy starcie procesu.

Zmienne środowiskowe (wszystkie opcjonalne):
  GATEKEEP_ORIGIN          bazowy URL originu
  GATEKEEP_PAGE_TEASER     domyślna ścieżka teasera strony
  GATEKEEP_SECTION_TEASER  domyślna ścieżka teasera sekcji
  GATEKEEP_BLOCK_TEASER    domyślna ścieżka teasera bloku
  GATEKEEP_BYPASS_PATHS    prefiksy ścieżek omijających silnik (po przecinku)
  GATEKEEP_HTML_TYPES      typy treści przetwarzane przez silnik (po przecinku)
  GATEKEEP_PAGE_POLICY     always-teaser | tease-only-when-unauthenticated
  GATEKEEP_SUBSTRATE       soup | scan
  GATEKEEP_FETCH_TIMEOUT   timeout pobierania z originu (sekundy)

Opcjonalnie plik .env w katalogu głównym projektu:
  GATEKEEP_ORIGIN=https://main--www--example.aem.live

Publiczne API:
  GatingConfig                   zamrożona konfiguracja
  load_config(env=None)          → GatingConfig
"""

from __future__ import annotations

import os
import pathlib
from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping

from dotenv import load_dotenv

from data_model.common import Granularity, PageGatePolicy
from html_parser.substrate import SubstrateKind

from .errors import ConfigError

DEFAULT_ORIGIN          = "https://main--www--example.aem.live"
DEFAULT_PAGE_TEASER     = "/fragments/teasers/content-teaser"
DEFAULT_SECTION_TEASER  = "/fragments/teasers/content-teaser"
DEFAULT_BLOCK_TEASER    = "/fragments/teasers/block-teaser"
DEFAULT_BYPASS_PATHS    = ("/fragments/", "/nav.plain.html", "/footer.plain.html", "/eds-config/")
DEFAULT_HTML_TYPES      = ("text/html",)
DEFAULT_FETCH_TIMEOUT   = 30.0

_ENV_FILE = pathlib.Path(__file__).resolve().parent.parent / ".env"


@dataclass(frozen=True, slots=True)
class GatingConfig:
    """
    Konfiguracja silnika i handlera proxy.

    - origin_base_url:      bazowy URL originu (tekst teasera = origin + ścieżka)
    - default_*_teaser:     ścieżki teaserów używane gdy znacznik ich nie deklaruje
    - bypass_path_prefixes: ścieżki, dla których silnik w ogóle nie jest wywoływany
    - html_content_types:   typy treści przetwarzane przez silnik
    - page_gate_policy:     zachowanie aktywnej bramki strony dla zalogowanych
    - substrate:            podłoże markupu (soup / scan)
    - fetch_timeout:        timeout żądania do originu w sekundach
    """
    origin_base_url:        str = DEFAULT_ORIGIN
    default_page_teaser:    str = DEFAULT_PAGE_TEASER
    default_section_teaser: str = DEFAULT_SECTION_TEASER
    default_block_teaser:   str = DEFAULT_BLOCK_TEASER
    bypass_path_prefixes:   tuple[str, ...] = DEFAULT_BYPASS_PATHS
    html_content_types:     tuple[str, ...] = DEFAULT_HTML_TYPES
    page_gate_policy:       PageGatePolicy = PageGatePolicy.TEASE_ONLY_WHEN_UNAUTHENTICATED
    substrate:              SubstrateKind = SubstrateKind.SOUP
    fetch_timeout:          float = DEFAULT_FETCH_TIMEOUT

    def default_teaser(self, granularity: Granularity) -> str:
        match granularity:
            case Granularity.PAGE:
                return self.default_page_teaser
            case Granularity.SECTION:
                return self.default_section_teaser
            case Granularity.BLOCK:
                return self.default_block_teaser
        raise ValueError(f"Nieznana granulacja: {granularity!r}")


# ---------------------------------------------------------------------------
# Parsowanie wartości
# ---------------------------------------------------------------------------

def _split_list(raw: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in raw.split(",") if item.strip())


def _parse_enum(enum_cls: type[StrEnum], raw: str, var: str) -> StrEnum:
    try:
        return enum_cls(raw.strip().lower())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ConfigError(f"{var}={raw!r} — dozwolone wartości: {allowed}") from None


def _parse_timeout(raw: str, var: str) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{var}={raw!r} — oczekiwano liczby sekund") from None
    if value <= 0:
        raise ConfigError(f"{var}={raw!r} — timeout musi być dodatni")
    return value


def _parse_origin(raw: str, var: str) -> str:
    origin = raw.strip().rstrip("/")
    if not origin.startswith(("http://", "https://")):
        raise ConfigError(f"{var}={raw!r} — oczekiwano adresu http(s)://")
    return origin


# ---------------------------------------------------------------------------
# Ładowanie
# ---------------------------------------------------------------------------

def load_config(env: Mapping[str, str] | None = None, **overrides: object) -> GatingConfig:
    """
    Buduje GatingConfig ze zmiennych środowiskowych.

    Args:
        env:       źródło zmiennych; None → os.environ po wczytaniu pliku .env
        overrides: pola nadpisujące wartości ze środowiska (np. z flag CLI);
                   wartości None są ignorowane

    Raises:
        ConfigError: niepoprawna wartość którejkolwiek zmiennej.
    """
    if env is None:
        load_dotenv(_ENV_FILE, override=False)
        env = os.environ

    values: dict[str, object] = {}
    if raw := env.get("GATEKEEP_ORIGIN"):
        values["origin_base_url"] = _parse_origin(raw, "GATEKEEP_ORIGIN")
    if raw := env.get("GATEKEEP_PAGE_TEASER"):
        values["default_page_teaser"] = raw.strip()
    if raw := env.get("GATEKEEP_SECTION_TEASER"):
        values["default_section_teaser"] = raw.strip()
    if raw := env.get("GATEKEEP_BLOCK_TEASER"):
        values["default_block_teaser"] = raw.strip()
    if raw := env.get("GATEKEEP_BYPASS_PATHS"):
        values["bypass_path_prefixes"] = _split_list(raw)
    if raw := env.get("GATEKEEP_HTML_TYPES"):
        values["html_content_types"] = tuple(t.lower() for t in _split_list(raw))
    if raw := env.get("GATEKEEP_PAGE_POLICY"):
        values["page_gate_policy"] = _parse_enum(PageGatePolicy, raw, "GATEKEEP_PAGE_POLICY")
    if raw := env.get("GATEKEEP_SUBSTRATE"):
        values["substrate"] = _parse_enum(SubstrateKind, raw, "GATEKEEP_SUBSTRATE")
    if raw := env.get("GATEKEEP_FETCH_TIMEOUT"):
        values["fetch_timeout"] = _parse_timeout(raw, "GATEKEEP_FETCH_TIMEOUT")

    if raw := overrides.pop("page_gate_policy", None):
        values["page_gate_policy"] = _parse_enum(PageGatePolicy, str(raw), "--policy")
    if raw := overrides.pop("substrate", None):
        values["substrate"] = _parse_enum(SubstrateKind, str(raw), "--substrate")
    if raw := overrides.pop("origin_base_url", None):
        values["origin_base_url"] = _parse_origin(str(raw), "--origin")
    values.update({k: v for k, v in overrides.items() if v is not None})

    try:
        return GatingConfig(**values)  # type: ignore[arg-type]
    except TypeError as exc:
        raise ConfigError(f"Nieznane pole konfiguracji: {exc}") from None
