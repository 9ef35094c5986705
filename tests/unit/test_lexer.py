"""Tests for the LU front end."""

from pathlib import Path

from lucore.core.errors import Severity
from lucore.core.lexer import sanitize_newlines, tokenize


def errors_of(resource):
    return [d for d in resource.errors if d.severity is Severity.ERROR]


class TestIntents:
    def test_intent_with_utterances(self) -> None:
        resource = tokenize("# Greeting\n- hi\n- hello {userName=bob}\n")
        [intent] = resource.intents
        assert intent.name == "Greeting"
        assert [u.text for u in intent.utterances] == ["hi", "hello {userName=bob}"]
        assert resource.errors == []

    def test_list_decorations(self) -> None:
        resource = tokenize("# Greeting\n* hi\n+ hello\n")
        assert len(resource.intents[0].utterances) == 2

    def test_empty_intent_is_warning(self) -> None:
        resource = tokenize("# Empty\n# Greeting\n- hi\n")
        [diagnostic] = resource.errors
        assert diagnostic.severity is Severity.WARN
        assert "Empty" in diagnostic.message

    def test_utterance_outside_intent(self) -> None:
        resource = tokenize("- hi\n")
        [error] = errors_of(resource)
        assert "outside of an intent" in error.message
        assert error.context.line == 1

    def test_malformed_label_reports_line(self) -> None:
        resource = tokenize("# Greeting\n- hi {userName=foo\n", Path("greet.lu"))
        [error] = errors_of(resource)
        assert error.context.line == 2
        assert error.context.file == Path("greet.lu")

    def test_invalid_line(self) -> None:
        resource = tokenize("this is not lu\n")
        [error] = errors_of(resource)
        assert "Invalid input line" in error.message

    def test_comments_are_ignored(self) -> None:
        resource = tokenize("> a comment\n# Greeting\n- hi\n")
        assert resource.errors == []

    def test_crlf_line_endings(self) -> None:
        resource = tokenize("# Greeting\r\n- hi\r\n")
        assert resource.intents[0].utterances[0].text == "hi"
        assert sanitize_newlines("a\r\nb\rc") == "a\nb\nc"


class TestNewEntities:
    def test_list_body(self) -> None:
        text = """@ list city hasRoles from, to =
    - Seattle:
        - SEA
    - Portland:
        - PDX
"""
        [section] = tokenize(text).new_entities
        assert section.type == "list"
        assert section.name == "city"
        assert section.roles == "from, to"
        assert section.list_body == ["Seattle:", "SEA", "Portland:", "PDX"]

    def test_roles_without_keyword(self) -> None:
        [section] = tokenize("@ simple s1 sr1\n").new_entities
        assert (section.type, section.name, section.roles) == ("simple", "s1", "sr1")

    def test_missing_type(self) -> None:
        [section] = tokenize("@ userName hasRoles first\n").new_entities
        assert section.type is None
        assert section.name == "userName"

    def test_quoted_name(self) -> None:
        [section] = tokenize("@ ml 'user name'\n").new_entities
        assert section.name == "user name"

    def test_composite_definition(self) -> None:
        [section] = tokenize("@ composite address = [street, city]\n").new_entities
        assert section.composite_definition == "[street, city]"

    def test_regex_definition(self) -> None:
        [section] = tokenize("@ regex zip = /[0-9]{5}/\n").new_entities
        assert section.regex_definition == "/[0-9]{5}/"

    def test_unexpected_inline_value(self) -> None:
        resource = tokenize("@ simple name = oops\n")
        assert resource.new_entities == []
        assert len(errors_of(resource)) == 1

    def test_body_closed_by_next_section(self) -> None:
        text = "@ phraselist cities =\n- seattle, portland\n# Greeting\n- hi\n"
        resource = tokenize(text)
        assert resource.new_entities[0].list_body == ["seattle, portland"]
        assert resource.intents[0].utterances[0].text == "hi"


class TestLegacyEntities:
    def test_list_synonyms(self) -> None:
        [section] = tokenize("$city : Seattle =\n- SEA\n- Emerald City\n").entities
        assert section.name == "city"
        assert section.type == "Seattle ="
        assert section.synonyms_or_phrase_list == ["SEA", "Emerald City"]

    def test_simple(self) -> None:
        [section] = tokenize("$userName : simple\n").entities
        assert section.type == "simple"

    def test_missing_type(self) -> None:
        resource = tokenize("$userName :\n")
        assert resource.entities == []
        assert len(errors_of(resource)) == 1


class TestQna:
    def test_question_and_answer(self) -> None:
        text = """# ? What is your name?
- Who are you?
```
I am a bot.
```
"""
        [qna] = tokenize(text).qnas
        assert qna.questions == ["What is your name?", "Who are you?"]
        assert qna.answer == "I am a bot."

    def test_filters(self) -> None:
        text = """# ? hours
**Filters:**
- store = downtown
```
9 to 5
```
"""
        [qna] = tokenize(text).qnas
        assert [(p.key, p.value) for p in qna.filter_pairs] == [("store", "downtown")]

    def test_missing_answer(self) -> None:
        resource = tokenize("# ? hours\n- opening times\n")
        assert resource.qnas == []
        assert "No answer found" in errors_of(resource)[0].message

    def test_unterminated_answer(self) -> None:
        resource = tokenize("# ? hours\n```\n9 to 5\n")
        assert "Unterminated" in errors_of(resource)[0].message


class TestOtherSections:
    def test_import(self) -> None:
        [section] = tokenize("[shared](./shared.lu)\n").imports
        assert (section.description, section.path) == ("shared", "./shared.lu")

    def test_model_info(self) -> None:
        [section] = tokenize("> !# @app.name = MyBot\n").model_infos
        assert section.model_info == "@app.name = MyBot"
