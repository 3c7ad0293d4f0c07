"""Tests for section splitting, linking, existence checks and link removal."""
from __future__ import annotations

from pathlib import Path

import pytest

from auto_linker import (
    FileVault,
    FilterRules,
    canonical_note_path,
    document_exists,
    is_excluded_heading,
    join_sections,
    link_words,
    remove_links,
    split_sections,
)

from conftest import write_note

NO_RULES = FilterRules()


class TestSections:
    @pytest.mark.parametrize(
        "text",
        [
            "",
            "no headings at all",
            "# Title\nbody\n## Sub\nmore\n",
            "#tag at start\n\n# \n#",
            "intro\r\n# Heading\r\nbody\r\n",
            "a # not a heading\n    # indented\n",
        ],
    )
    def test_partition_law(self, text: str) -> None:
        assert join_sections(split_sections(text)) == text

    def test_headings_alternate_with_bodies(self) -> None:
        sections = split_sections("intro\n# One\nbody\n## Two\n")
        assert [(s.text, s.is_heading) for s in sections] == [
            ("intro\n", False),
            ("# One", True),
            ("\nbody\n", False),
            ("## Two", True),
            ("\n", False),
        ]

    def test_heading_mid_line_is_body(self) -> None:
        sections = split_sections("a # b")
        assert [s.is_heading for s in sections] == [False]

    def test_excluded_heading_substring(self) -> None:
        assert is_excluded_heading("## My Tasks for today", {"tasks"})
        assert not is_excluded_heading("## Notes", {"tasks"})
        assert not is_excluded_heading("## Notes", set())


class TestLinkWords:
    def test_example_trip(self) -> None:
        text = "I visited Paris and Rome."
        assert link_words(text, ["Paris"], NO_RULES) == "I visited [[Paris]] and Rome."

    def test_empty_word_list(self) -> None:
        text = "I visited Paris."
        assert link_words(text, [], NO_RULES) == text

    def test_case_insensitive_match_preserves_casing(self) -> None:
        text = "paris, PARIS and Paris"
        assert link_words(text, ["Paris"], NO_RULES) == "[[paris]], [[PARIS]] and [[Paris]]"

    def test_word_boundaries(self) -> None:
        text = "A cat in the category, concatenate."
        assert link_words(text, ["cat"], NO_RULES) == "A [[cat]] in the category, concatenate."

    def test_already_linked_not_rewrapped(self) -> None:
        text = "[[Cat]] and [[Cat|kitty]] and Cat"
        assert link_words(text, ["Cat"], NO_RULES) == "[[Cat]] and [[Cat|kitty]] and [[Cat]]"

    def test_idempotent(self) -> None:
        words = ["New York", "York", "New", "Paris"]
        once = link_words("New York, York and Paris. New plans.", words, NO_RULES)
        assert once == "[[New York]], [[York]] and [[Paris]]. [[New]] plans."
        assert link_words(once, words, NO_RULES) == once

    def test_earlier_terms_take_priority(self) -> None:
        text = "Big New York City"
        assert link_words(text, ["New York", "York City"], NO_RULES) == "Big [[New York]] City"
        assert link_words(text, ["York City", "New York"], NO_RULES) == "Big New [[York City]]"

    def test_never_nests_inside_existing_link(self) -> None:
        text = "[[Big New York]] is big"
        assert link_words(text, ["New"], NO_RULES) == text

    def test_regex_characters_escaped(self) -> None:
        text = "Use a.b but not axb"
        assert link_words(text, ["a.b"], NO_RULES) == "Use [[a.b]] but not axb"

    def test_headings_are_never_linked(self) -> None:
        text = "# Paris\nParis is nice\n"
        assert link_words(text, ["Paris"], NO_RULES) == "# Paris\n[[Paris]] is nice\n"

    def test_excluded_section(self) -> None:
        rules = FilterRules(excluded_blocks=frozenset({"tasks"}))
        text = "Paris\n# Tasks\n- go to Paris\n## More tasks\nParis\n# Notes\nParis\n"
        assert link_words(text, ["Paris"], rules) == (
            "[[Paris]]\n# Tasks\n- go to Paris\n## More tasks\nParis\n# Notes\n[[Paris]]\n"
        )

    def test_blacklist_applies_per_occurrence(self) -> None:
        rules = FilterRules(blacklist=frozenset({"rome"}))
        text = "Paris and Rome"
        assert link_words(text, ["Paris", "Rome"], rules) == "[[Paris]] and Rome"

    def test_whitelist_checked_again(self) -> None:
        rules = FilterRules(whitelist=frozenset({"alpha"}))
        text = "Alpha and Beta"
        assert link_words(text, ["Alpha", "Beta"], rules) == "[[Alpha]] and Beta"

    def test_exists_gate(self) -> None:
        seen: list[str] = []

        def exists(name: str) -> bool:
            seen.append(name)
            return name == "Paris"

        text = "Paris, paris and Ghost"
        result = link_words(text, ["Paris", "Ghost"], NO_RULES, exists)
        assert result == "[[Paris]], paris and Ghost"
        assert seen == ["Paris", "paris", "Ghost"]

    def test_crlf_preserved(self) -> None:
        text = "# Title\r\nParis\r\n"
        assert link_words(text, ["Paris"], NO_RULES) == "# Title\r\n[[Paris]]\r\n"


class TestExistingTargets:
    def test_canonical_note_path(self) -> None:
        assert canonical_note_path("Paris") == "Paris.md"
        assert canonical_note_path("Paris.md") == "Paris.md"

    def test_document_exists(self, tmp_path: Path) -> None:
        write_note(tmp_path, "Paris.md", "")
        write_note(tmp_path, "Places/Rome.md", "")
        (tmp_path / "Folder.md").mkdir()
        store = FileVault(tmp_path)
        assert document_exists(store, "Paris")
        assert document_exists(store, "Paris.md")
        assert document_exists(store, "Places/Rome")
        assert not document_exists(store, "Rome")
        assert not document_exists(store, "Ghost")
        assert not document_exists(store, "Folder")


class TestRemoveLinks:
    def test_example(self) -> None:
        text = "I visited [[Paris]] and Rome."
        assert remove_links(text, ["Paris"]) == "I visited Paris and Rome."

    def test_case_insensitive_keeps_document_text(self) -> None:
        assert remove_links("[[paris]] and [[PARIS]]", ["Paris"]) == "paris and PARIS"

    def test_aliased_links_unwrap_to_alias(self) -> None:
        text = "[[Paris|the capital]] and [[Paris|]]"
        assert remove_links(text, ["Paris"]) == "the capital and Paris"

    def test_other_links_untouched(self) -> None:
        text = "[[Paris]] [[Paris Hilton]] [[Rome]]"
        assert remove_links(text, ["Paris"]) == "Paris [[Paris Hilton]] [[Rome]]"

    def test_no_match_unchanged(self) -> None:
        text = "Nothing linked here, Paris."
        assert remove_links(text, ["Paris"]) == text
        assert remove_links(text, []) == text

    def test_round_trip_with_linker(self) -> None:
        text = "I visited Paris and Rome."
        linked = link_words(text, ["Paris", "Rome"], NO_RULES)
        assert remove_links(linked, ["Paris", "Rome"]) == text
