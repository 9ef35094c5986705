"""Tests for model info directives."""

import logging

import pytest

from lucore.core.model_info import parse_inherits


class TestParseInherits:
    def test_six_parts(self) -> None:
        assert parse_inherits("name:Greeting;domain:Web;model:Hello") == (
            "Greeting",
            {"domain": "Web", "model": "Hello"},
        )

    def test_wrong_part_count(self) -> None:
        assert parse_inherits("name:Greeting") is None
        assert parse_inherits("name:Greeting;domain:Web") is None


class TestDirectives:
    def test_app_and_kb_settings(self, parse_lu) -> None:
        content = parse_lu("> !# @app.culture = en-us\n> !# @kb.name = Faq\n")
        assert content.luis.settings == {"culture": "en-us"}
        assert content.qna.settings == {"name": "Faq"}

    def test_intent_inherits(self, parse_lu) -> None:
        content = parse_lu(
            "# Greeting\n- hi\n> !# @intent.inherits = name:Greeting;domain:Web;model:Hello\n"
        )
        assert content.luis.intents["Greeting"].inherits == {"domain": "Web", "model": "Hello"}

    def test_intent_inherits_creates_intent(self, parse_lu) -> None:
        content = parse_lu("> !# @intent.inherits = name:Farewell;domain:Web;model:Bye\n")
        assert "Farewell" in content.luis.intents

    def test_entity_inherits(self, parse_lu) -> None:
        content = parse_lu(
            "@ simple userName\n> !# @entity.inherits = name:userName;domain:Web;model:Name\n"
        )
        assert content.registry.simple["userName"].inherits == {"domain": "Web", "model": "Name"}

    def test_entity_inherits_merges(self, parse_lu) -> None:
        content = parse_lu(
            "> !# @entity.inherits = name:userName;domain:Web;model:Name\n"
            "> !# @entity.inherits = name:userName;domain:Mobile;tier:Gold\n"
        )
        assert content.registry.simple["userName"].inherits == {
            "domain": "Mobile",
            "model": "Name",
            "tier": "Gold",
        }

    def test_malformed_skipped_quietly(
        self, parse_lu, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            content = parse_lu("> !# @intent.inherits = name:Greeting\n")
        assert content.luis.intents == {}
        assert caplog.records == []

    def test_malformed_logged_when_verbose(
        self, parse_lu, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            content = parse_lu("> !# @intent.color = blue\n", verbose=True)
        assert content.luis.intents == {}
        assert "Skipping" in caplog.text
