"""Tests for the per-kind declaration handlers."""

import logging

import pytest

from lucore.core import ir
from lucore.core.content import ParsedContent
from lucore.core.errors import ErrorCode, ErrorContext, ValidationError
from lucore.core.handlers import (
    DeclarationHandler,
    HandlerProtocol,
    get_roles_and_type,
    split_children,
    split_interchangeable,
)
from lucore.core.manifest import ParseOptions

CTX = ErrorContext(line=1, text="@ test")


def test_handler_satisfies_protocol(handler: DeclarationHandler) -> None:
    assert isinstance(handler, HandlerProtocol)


class TestHelpers:
    def test_split_children(self) -> None:
        assert split_children("[a, b; c]") == ["a", "b", "c"]
        assert split_children("[]") == []
        assert split_children(None) == []

    def test_split_interchangeable(self) -> None:
        assert split_interchangeable("cities(interchangeable)") == ("cities", True)
        assert split_interchangeable("cities") == ("cities", False)

    def test_get_roles_and_type(self) -> None:
        assert get_roles_and_type("simple hasRoles a, b") == ("simple", ["a", "b"])
        assert get_roles_and_type("Seattle roles=a,b =") == ("Seattle=", ["a", "b"])
        assert get_roles_and_type("Seattle =") == ("Seattle =", [])
        assert get_roles_and_type("/roles=x/") == ("/roles=x/", [])


class TestSimpleAbsorption:
    def test_list_absorbs_simple_roles(self, handler: DeclarationHandler) -> None:
        handler.handle_simple("city", ["from"], CTX)
        handler.handle_list("city", ["Seattle:", "SEA"], ["to"], CTX)
        assert "city" not in handler.registry.simple
        assert handler.registry.lists["city"].roles == ["to", "from"]

    def test_phrase_list_keeps_simple(self, handler: DeclarationHandler) -> None:
        handler.handle_simple("city", [], CTX)
        handler.handle_phrase_list("city", False, [], ["seattle"], CTX)
        assert "city" in handler.registry.simple
        assert "city" in handler.registry.phrase_lists

    def test_labelled_without_role_is_fatal(
        self, handler: DeclarationHandler, content: ParsedContent
    ) -> None:
        utterance = content.luis.get_or_add_utterance("go to Seattle", "Travel")
        utterance.add_label(ir.UtteranceEntityLabel(entity="city", start_pos=6, end_pos=12))
        with pytest.raises(ValidationError) as exc_info:
            handler.handle_regex("city", "/[a-z]+/", [], CTX)
        assert exc_info.value.code is ErrorCode.INVALID_INPUT

    def test_labelled_roles_are_imported(
        self, handler: DeclarationHandler, content: ParsedContent
    ) -> None:
        utterance = content.luis.get_or_add_utterance("go to Seattle", "Travel")
        utterance.add_label(
            ir.UtteranceEntityLabel(entity="city", start_pos=6, end_pos=12, role="to")
        )
        entity = handler.handle_list("city", ["Seattle:"], [], CTX)
        assert entity.roles == ["to"]


class TestListEntity:
    def test_sub_lists(self, handler: DeclarationHandler) -> None:
        entity = handler.handle_list(
            "l1", ["one:", "two", "three", "four:", "five", "six"], ["lr1", "lr2"], CTX
        )
        assert [(s.canonical_form, s.synonyms) for s in entity.sub_lists] == [
            ("one", ["two", "three"]),
            ("four", ["five", "six"]),
        ]
        assert entity.roles == ["lr1", "lr2"]

    def test_redeclaration_merges(self, handler: DeclarationHandler) -> None:
        handler.handle_list("city", ["Seattle:", "SEA"], [], CTX)
        lines = ["Seattle:", "SEA", "Emerald City", "Portland:"]
        entity = handler.handle_list("city", lines, [], CTX)
        assert [(s.canonical_form, s.synonyms) for s in entity.sub_lists] == [
            ("Seattle", ["SEA", "Emerald City"]),
            ("Portland", []),
        ]

    def test_synonym_before_value(self, handler: DeclarationHandler) -> None:
        with pytest.raises(ValidationError) as exc_info:
            handler.handle_list("city", ["SEA", "Seattle:"], [], CTX)
        assert exc_info.value.code is ErrorCode.SYNONYMS_NOT_A_LIST

    def test_legacy_synonyms(self, handler: DeclarationHandler) -> None:
        handler.handle_list_synonyms("city", "Seattle", ["SEA"], [], CTX)
        entity = handler.handle_list_synonyms("city", "Seattle", ["SEA", " Rain City "], [], CTX)
        assert entity.sub_lists[0].synonyms == ["SEA", "Rain City"]


class TestCompositeEntity:
    def test_same_children_reordered(self, handler: DeclarationHandler) -> None:
        handler.handle_composite("address", ["street", "city"], ["home"], CTX)
        entity = handler.handle_composite("address", ["city", "street"], ["work"], CTX)
        assert entity.children == ["street", "city"]
        assert entity.roles == ["home", "work"]

    def test_different_children(self, handler: DeclarationHandler) -> None:
        handler.handle_composite("address", ["street", "city"], [], CTX)
        with pytest.raises(ValidationError) as exc_info:
            handler.handle_composite("address", ["zip"], [], CTX)
        assert exc_info.value.code is ErrorCode.INVALID_COMPOSITE_ENTITY

    def test_children_added_to_empty_composite(self, handler: DeclarationHandler) -> None:
        handler.handle_composite("address", [], ["home"], CTX)
        entity = handler.handle_composite("address", ["street"], [], CTX)
        assert entity.children == ["street"]

    def test_inline_children_required(self, handler: DeclarationHandler) -> None:
        with pytest.raises(ValidationError) as exc_info:
            handler.handle_composite("address", [], [], CTX, inline_child_required=True)
        assert exc_info.value.code is ErrorCode.INVALID_COMPOSITE_ENTITY

    def test_absorbs_simple(self, handler: DeclarationHandler) -> None:
        handler.handle_simple("address", ["home"], CTX)
        entity = handler.handle_composite("address", ["street"], [], CTX)
        assert entity.roles == ["home"]
        assert "address" not in handler.registry.simple


class TestRegexEntity:
    def test_pattern_is_unwrapped(self, handler: DeclarationHandler) -> None:
        entity = handler.handle_regex("zip", "/[0-9]{5}/", [], CTX)
        assert entity.regex_pattern == "[0-9]{5}"

    def test_empty_pattern(self, handler: DeclarationHandler) -> None:
        with pytest.raises(ValidationError) as exc_info:
            handler.handle_regex("zip", "//", [], CTX)
        assert exc_info.value.code is ErrorCode.INVALID_REGEX_ENTITY

    def test_conflicting_patterns(self, handler: DeclarationHandler) -> None:
        handler.handle_regex("zip", "/[0-9]{5}/", [], CTX)
        with pytest.raises(ValidationError) as exc_info:
            handler.handle_regex("zip", "/[0-9]{4}/", [], CTX)
        assert exc_info.value.code is ErrorCode.INVALID_REGEX_ENTITY

    def test_first_pattern_wins(self, handler: DeclarationHandler) -> None:
        handler.handle_regex("zip", None, ["home"], CTX)
        handler.handle_regex("zip", "/[0-9]{5}/", [], CTX)
        entity = handler.handle_regex("zip", None, ["work"], CTX)
        assert entity.regex_pattern == "[0-9]{5}"
        assert entity.roles == ["home", "work"]


class TestPrebuiltEntity:
    def test_known_type(self, handler: DeclarationHandler) -> None:
        entity = handler.handle_prebuilt("number", ["count"], CTX)
        assert entity.name == "number"
        assert handler.registry.prebuilts["number"].roles == ["count"]

    def test_simple_left_in_place(self, handler: DeclarationHandler) -> None:
        handler.handle_simple("number", ["count"], CTX)
        entity = handler.handle_prebuilt("number", [], CTX)
        assert entity.roles == []
        assert "number" in handler.registry.simple

    def test_unknown_type(self, handler: DeclarationHandler) -> None:
        with pytest.raises(ValidationError, match="Available pre-built types are") as exc_info:
            handler.handle_prebuilt("numbr", [], CTX)
        assert exc_info.value.code is ErrorCode.INVALID_INPUT
        assert "datetimeV2" in str(exc_info.value)

    def test_unavailable_in_locale(self, content: ParsedContent) -> None:
        handler = DeclarationHandler(content, ParseOptions(locale="fr-fr"))
        with pytest.raises(ValidationError, match="not available"):
            handler.handle_prebuilt("personName", [], CTX)

    def test_unavailable_in_locale_verbose_skips(
        self, content: ParsedContent, caplog: pytest.LogCaptureFixture
    ) -> None:
        handler = DeclarationHandler(content, ParseOptions(locale="fr-fr", verbose=True))
        with caplog.at_level(logging.WARNING):
            assert handler.handle_prebuilt("personName", [], CTX) is None
        assert content.registry.prebuilts == {}
        assert "Skipping" in caplog.text

    def test_locale_substitute(self, content: ParsedContent) -> None:
        handler = DeclarationHandler(content, ParseOptions(locale="ko-kr"))
        entity = handler.handle_prebuilt("datetimeV2", [], CTX)
        assert entity.name == "datetime"

    def test_unknown_locale(self, content: ParsedContent) -> None:
        handler = DeclarationHandler(content, ParseOptions(locale="xx-xx"))
        with pytest.raises(ValidationError, match="not supported"):
            handler.handle_prebuilt("number", [], CTX)


class TestPatternAny:
    def test_prior_roles_kept(self, handler: DeclarationHandler) -> None:
        handler.registry.upsert(ir.EntityKind.PATTERN_ANY, "title", ["book"])
        entity = handler.handle_pattern_any("title", ["movie"], CTX)
        assert entity.roles == ["book", "movie"]

    def test_simple_left_in_place(self, handler: DeclarationHandler) -> None:
        handler.handle_simple("title", ["book"], CTX)
        entity = handler.handle_pattern_any("title", [], CTX)
        assert entity.roles == []
        assert "title" in handler.registry.simple

    def test_promotion_returns_roles(self, handler: DeclarationHandler) -> None:
        handler.registry.upsert(ir.EntityKind.PATTERN_ANY, "title", ["book"])
        assert handler.promote_pattern_any("title", "simple", CTX) == ["book"]
        assert "title" not in handler.registry.pattern_any

    def test_promotion_to_phrase_list(self, handler: DeclarationHandler) -> None:
        handler.registry.upsert(ir.EntityKind.PATTERN_ANY, "title", [])
        with pytest.raises(ValidationError, match="Phrase lists cannot be used"):
            handler.promote_pattern_any("title", "phraselist", CTX)


class TestPhraseList:
    def test_values(self, handler: DeclarationHandler) -> None:
        lines = ["seattle, portland", "boston;austin"]
        entity = handler.handle_phrase_list("cities", True, [], lines, CTX)
        assert entity.values == ["seattle", "portland", "boston", "austin"]
        assert entity.mode is True

    def test_redeclaration_appends(self, handler: DeclarationHandler) -> None:
        handler.handle_phrase_list("cities", False, [], ["seattle"], CTX)
        entity = handler.handle_phrase_list("cities", False, [], ["seattle, boston"], CTX)
        assert entity.words == "seattle,boston"

    def test_roles_rejected(self, handler: DeclarationHandler) -> None:
        with pytest.raises(ValidationError) as exc_info:
            handler.handle_phrase_list("cities", False, ["from"], [], CTX)
        assert exc_info.value.code is ErrorCode.INVALID_INPUT

    def test_conflicting_mode(self, handler: DeclarationHandler) -> None:
        handler.handle_phrase_list("cities", True, [], ["seattle"], CTX)
        with pytest.raises(ValidationError, match="conflicting definitions"):
            handler.handle_phrase_list("cities", False, [], ["boston"], CTX)


class TestAlterations:
    def test_group_recorded(self, handler: DeclarationHandler, content: ParsedContent) -> None:
        handler.handle_alterations("botframework", ["bot framework", "BF"], CTX)
        assert content.alterations.word_alterations[0].alterations == [
            "botframework",
            "bot framework",
            "BF",
        ]

    def test_empty_group(self, handler: DeclarationHandler) -> None:
        with pytest.raises(ValidationError) as exc_info:
            handler.handle_alterations("botframework", [], CTX)
        assert exc_info.value.code is ErrorCode.SYNONYMS_NOT_A_LIST
