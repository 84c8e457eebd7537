"""
Segmentation Tests
====================

Tests for the leaf text utilities every chunking decision depends on:
    - Unit estimation (fixed 3.5 chars/unit ratio)
    - Sentence splitting with abbreviation/initial suppression
    - Paragraph splitting on blank lines
    - Line structure classification
"""

from __future__ import annotations

import pytest

from evirank.ingest.segmenter import (
    paragraph_spans,
    sentence_spans,
    split_paragraphs,
    split_sentences,
)
from evirank.ingest.structure import detect_structure, is_section_heading
from evirank.ingest.tokens import estimate_units
from evirank.schemas.chunk import StructureKind


class TestEstimateUnits:
    """Unit estimation is ceil(len / 3.5)."""

    def test_empty_is_zero(self):
        assert estimate_units("") == 0

    def test_rounds_up(self):
        assert estimate_units("a") == 1
        assert estimate_units("abcdefg") == 2
        assert estimate_units("abcdefgh") == 3

    def test_two_thousand_chars(self):
        assert estimate_units("x" * 2000) == 572


class TestSplitSentences:
    """Sentence boundaries: [.!?] + whitespace + capital letter."""

    def test_no_boundary_returns_trimmed_text(self):
        """Text without sentence punctuation → one trimmed element."""
        text = "  " + "a" * 20 + " sem pontuacao nenhuma aqui xx " + "  "
        assert split_sentences(text) == [text.strip()]

    def test_basic_split_keeps_punctuation(self):
        assert split_sentences("Primeira frase. Segunda frase! Terceira?") == [
            "Primeira frase.",
            "Segunda frase!",
            "Terceira?",
        ]

    def test_accented_capital_starts_sentence(self):
        assert split_sentences("Fim da ideia. Água é vida.") == [
            "Fim da ideia.",
            "Água é vida.",
        ]

    def test_lowercase_continuation_not_split(self):
        assert split_sentences("Valor de 3.5 unidades. e depois") == [
            "Valor de 3.5 unidades. e depois",
        ]

    @pytest.mark.parametrize("abbr", ["Dr", "Sr", "Prof", "Fig", "Eq", "etc", "vs"])
    def test_abbreviations_suppress_split(self, abbr):
        text = f"Veja o {abbr}. Silva no texto. Depois continue."
        assert split_sentences(text) == [
            f"Veja o {abbr}. Silva no texto.",
            "Depois continue.",
        ]

    def test_dotted_abbreviation(self):
        assert split_sentences("Use p.ex. Cálculo hoje. Fim.") == [
            "Use p.ex. Cálculo hoje.",
            "Fim.",
        ]

    def test_long_run_of_abbreviations(self):
        text = "Veja " + "Dr. " * 5000 + "Silva. Fim."
        assert split_sentences(text) == [text[:-len(" Fim.")], "Fim."]

    def test_initial_suppresses_split(self):
        assert split_sentences("Escrito por J. Silva em casa. Fim.") == [
            "Escrito por J. Silva em casa.",
            "Fim.",
        ]

    def test_multiple_punctuation(self):
        assert split_sentences("Sério?! Sim.") == ["Sério?!", "Sim."]

    def test_empty_input(self):
        assert split_sentences("") == []
        assert split_sentences("   \n ") == []

    def test_spans_index_source(self):
        text = "  Um. Dois.  "
        spans = sentence_spans(text)
        assert [text[s:e] for s, e in spans] == ["Um.", "Dois."]


class TestSplitParagraphs:
    """Paragraphs are separated by blank lines (whitespace allowed)."""

    def test_blank_line_split(self):
        text = "Primeiro parágrafo.\n\nSegundo parágrafo.\n  \n\nTerceiro."
        assert split_paragraphs(text) == [
            "Primeiro parágrafo.",
            "Segundo parágrafo.",
            "Terceiro.",
        ]

    def test_single_newline_does_not_split(self):
        assert split_paragraphs("linha um\nlinha dois") == ["linha um\nlinha dois"]

    def test_empty_paragraphs_filtered(self):
        assert split_paragraphs("\n\n\n\nA\n\n\n\n") == ["A"]

    def test_spans_are_trimmed_offsets(self):
        text = " A \n\n B "
        assert paragraph_spans(text) == [(1, 2), (6, 7)]


class TestDetectStructure:
    """Line classification rules in priority order."""

    def test_markdown_levels(self):
        elements = detect_structure("# Um\n## Dois\n### Três\n###### Seis")
        assert [(e.kind, e.level) for e in elements] == [
            (StructureKind.SECTION, 1),
            (StructureKind.SECTION, 2),
            (StructureKind.SUBSECTION, 3),
            (StructureKind.SUBSECTION, 6),
        ]
        assert elements[0].content == "Um"

    def test_all_caps_title(self):
        (element,) = detect_structure("INTRODUÇÃO AO CÁLCULO")
        assert element.kind == StructureKind.TITLE
        assert element.level == 1

    def test_long_caps_line_is_paragraph(self):
        (element,) = detect_structure("A" * 100)
        assert element.kind == StructureKind.PARAGRAPH

    def test_digits_only_is_paragraph(self):
        (element,) = detect_structure("2024")
        assert element.kind == StructureKind.PARAGRAPH

    def test_numbered_section(self):
        (element,) = detect_structure("2. Limites e continuidade")
        assert (element.kind, element.level) == (StructureKind.SECTION, 2)

    def test_numbered_subsection(self):
        (element,) = detect_structure("2.1 definição formal")
        assert (element.kind, element.level) == (StructureKind.SUBSECTION, 3)

    def test_plain_paragraph(self):
        (element,) = detect_structure("texto corrido sem marcação.")
        assert (element.kind, element.level) == (StructureKind.PARAGRAPH, 0)

    def test_blank_lines_skipped(self):
        assert len(detect_structure("\n\n  \nabc\n\n")) == 1

    def test_is_section_heading(self):
        assert is_section_heading("CAPÍTULO UM")
        assert is_section_heading("3 Derivadas")
        assert not is_section_heading("texto normal")
        assert not is_section_heading("3.1 derivadas parciais")
        assert not is_section_heading("")
