"""Content Migration — versioned content blocks and the legacy-info upgrade.

Invariants:
    - Stored content is either LegacyContent (free text) or StructuredContent (fields)
    - Only STRUCTURED_SECTIONS are ever upgraded; other sections stay plain text
    - migrate_legacy_info is pure and total: missing headings yield empty strings
    - Upgrading already-structured content is a no-op (idempotent)

Design Decisions:
    - Tagged variants as frozen dataclasses: the service decides when to persist,
      this module only decides what the new value is
    - Heading match tries the emoji-prefixed label first, then the bare title,
      so text edited by hand without emojis still migrates
"""

import json
import re
from dataclasses import dataclass, field

INFO_SECTION = "informacoes"
STRUCTURED_SECTIONS = frozenset({INFO_SECTION})

# (field name, emoji heading, plain heading)
INFO_FIELDS: tuple[tuple[str, str, str], ...] = (
    ("cerimonia", "📍 Cerimônia", "Cerimônia"),
    ("recepcao", "📍 Recepção", "Recepção"),
    ("dressCode", "👗 Dress Code", "Dress Code"),
    ("hospedagem", "🏨 Hospedagem", "Hospedagem"),
    ("transporte", "🚖 Transporte", "Transporte"),
)


@dataclass(frozen=True)
class LegacyContent:
    """Free-text content as written by the first version of the site."""
    text: str


@dataclass(frozen=True)
class StructuredContent:
    """Field-per-heading content, serialized as a JSON object."""
    fields: dict[str, str] = field(default_factory=dict)

    def serialize(self) -> str:
        return json.dumps(self.fields, ensure_ascii=False)


StoredContent = LegacyContent | StructuredContent


def parse_stored_content(raw: str) -> StoredContent:
    """Classify a stored string. Only JSON objects count as structured."""
    try:
        decoded = json.loads(raw)
    except (json.JSONDecodeError, TypeError):
        return LegacyContent(raw or "")
    if isinstance(decoded, dict):
        return StructuredContent({str(k): str(v) for k, v in decoded.items()})
    return LegacyContent(raw)


def _extract_block(text: str, heading: str) -> str | None:
    pattern = re.compile(
        rf"{re.escape(heading)}[^\n]*\n([\s\S]*?)(?=\n\n|$)", re.IGNORECASE,
    )
    match = pattern.search(text)
    return match.group(1).strip() if match else None


def migrate_legacy_info(content: StoredContent) -> StructuredContent:
    """Upgrade legacy info text to the structured field layout."""
    if isinstance(content, StructuredContent):
        return content
    fields: dict[str, str] = {}
    for name, emoji_heading, title in INFO_FIELDS:
        block = _extract_block(content.text, emoji_heading)
        if block is None:
            block = _extract_block(content.text, title)
        fields[name] = block or ""
    return StructuredContent(fields)


def needs_migration(section: str, raw: str) -> bool:
    return section in STRUCTURED_SECTIONS and isinstance(
        parse_stored_content(raw), LegacyContent,
    )


# ─── Defaults ────────────────────────────────────────────────────

DEFAULT_INFO = StructuredContent({
    "cerimonia": "Local e horário da cerimônia a confirmar",
    "recepcao": "Local da recepção a confirmar",
    "dressCode": "Formal",
    "hospedagem": "",
    "transporte": "",
})

DEFAULT_TEXT: dict[str, str] = {
    "home": "Estamos muito felizes em ter você aqui!",
    "historia": "Era uma vez… uma amizade que virou encontro, um encontro que virou história.",
}


def default_content(section: str) -> str:
    """Initial value for a section read before anyone edited it."""
    if section == INFO_SECTION:
        return DEFAULT_INFO.serialize()
    return DEFAULT_TEXT.get(section, "")
