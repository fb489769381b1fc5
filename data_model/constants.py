"""
Stałe konwencji znaczników (nazwy meta, klucze metadanych sekcji, klasy CSS).

Znaczniki nie mają schematu — to konwencje zagnieżdżonego markupu:
  <meta name="visibility" content="protected">          strona
  <div class="section-metadata">                         sekcja
    <div><div>view</div><div>logged-in</div></div>
  </div>
  <div class="cards protected">                           blok teaser-pair
    <div><div>teaser</div><div>/fragments/teasers/x</div></div>
  </div>
"""

from __future__ import annotations

# Bramka decyzyjna: pary (name, content) meta, które oznaczają dokument bramkowany.
GATE_METAS: tuple[tuple[str, str], ...] = (
    ("gated",      "true"),
    ("protected",  "true"),
    ("visibility", "protected"),
)

# Strona
PAGE_VISIBILITY_META = "visibility"
PAGE_TEASER_META     = "teaser"
GATED_SENTINEL       = "protected"

# Sekcja
SECTION_METADATA_CLASS = "section-metadata"
KEY_VISIBILITY = "visibility"
KEY_PROTECTED  = "protected"
KEY_VIEW       = "view"
KEY_TEASER     = "teaser"

VIEW_LOGGED_IN  = "logged-in"
VIEW_LOGGED_OUT = "logged-out"

# Blok
PROTECTED_CLASS = "protected"
ID_CLASS_PREFIX = "id-"

# Fragmenty ścieżek, po których rozpoznajemy wartość będącą ścieżką teasera
TEASER_PATH_FRAGMENTS: tuple[str, ...] = ("/fragments/", "/teasers/")
NOT_A_PATH: frozenset[str] = frozenset({"true", "false"})
