"""Content Migration — legacy info text to structured fields.

Tests:
    - Emoji-headed legacy text is split into the five fields
    - Plain-title headings (no emoji) also migrate
    - Missing headings become empty strings
    - Migrating structured content is a no-op (idempotent)
    - Only JSON objects are classified as structured
"""

import json

from event_site.core.content_migration import (
    DEFAULT_INFO, INFO_SECTION, LegacyContent, StructuredContent,
    default_content, migrate_legacy_info, needs_migration, parse_stored_content,
)

LEGACY_INFO = (
    "📍 Cerimônia:\n"
    "Concatedral de São Pedro dos Clérigos – às 19h\n"
    "Av. Dantas Barreto, 677 – São José\n"
    "\n"
    "📍 Recepção:\n"
    "Espaço Dom – R. das Oficinas, 15 – Pina\n"
    "\n"
    "👗 Dress Code:\n"
    "Formal\n"
    "\n"
    "🏨 Hospedagem Sugerida:\n"
    "Hotel Luzeiros Recife\n"
    "Ibis Boa Viagem\n"
    "\n"
    "🚖 Transporte:\n"
    "Parceria com TeleTáxi na saída da igreja!"
)


def test_emoji_headed_text_migrates_every_field():
    result = migrate_legacy_info(LegacyContent(LEGACY_INFO))
    assert result.fields == {
        "cerimonia": (
            "Concatedral de São Pedro dos Clérigos – às 19h\n"
            "Av. Dantas Barreto, 677 – São José"
        ),
        "recepcao": "Espaço Dom – R. das Oficinas, 15 – Pina",
        "dressCode": "Formal",
        "hospedagem": "Hotel Luzeiros Recife\nIbis Boa Viagem",
        "transporte": "Parceria com TeleTáxi na saída da igreja!",
    }


def test_plain_titles_migrate_without_emoji():
    text = "Cerimônia:\nIgreja Matriz\n\nDress Code:\nEsporte fino"
    result = migrate_legacy_info(LegacyContent(text))
    assert result.fields["cerimonia"] == "Igreja Matriz"
    assert result.fields["dressCode"] == "Esporte fino"


def test_missing_headings_become_empty():
    result = migrate_legacy_info(LegacyContent("Nada estruturado aqui"))
    assert set(result.fields) == {
        "cerimonia", "recepcao", "dressCode", "hospedagem", "transporte",
    }
    assert all(value == "" for value in result.fields.values())


def test_migration_is_idempotent():
    once = migrate_legacy_info(LegacyContent(LEGACY_INFO))
    twice = migrate_legacy_info(parse_stored_content(once.serialize()))
    assert twice == once


def test_only_json_objects_are_structured():
    assert isinstance(parse_stored_content('{"cerimonia": "x"}'), StructuredContent)
    assert isinstance(parse_stored_content('["a", "b"]'), LegacyContent)
    assert isinstance(parse_stored_content('"texto"'), LegacyContent)
    assert isinstance(parse_stored_content("texto livre"), LegacyContent)


def test_needs_migration_only_for_structured_sections():
    assert needs_migration(INFO_SECTION, LEGACY_INFO)
    assert not needs_migration(INFO_SECTION, DEFAULT_INFO.serialize())
    assert not needs_migration("home", "texto livre")


def test_serialize_keeps_accents_readable():
    assert "horário" in DEFAULT_INFO.serialize()


def test_default_content_per_section():
    assert json.loads(default_content(INFO_SECTION))["dressCode"] == "Formal"
    assert default_content("home") == "Estamos muito felizes em ter você aqui!"
    assert default_content("unknown-section") == ""
