"""
Mutable parse state for one LU document.

``LuisContent`` owns the entity registry together with intents, utterances
and patterns; ``ParsedContent`` adds the knowledge-base partition and the list
of further files the document references. Both are owned by a single parse
pass and handed to consumers once it completes.
"""

from dataclasses import dataclass, field

from . import ir
from .registry import EntityRegistry


@dataclass
class LuisContent:
    """Intent-recognition partition under construction."""

    registry: EntityRegistry = field(default_factory=EntityRegistry)
    intents: dict[str, ir.Intent] = field(default_factory=dict)
    utterances: dict[tuple[str, str], ir.Utterance] = field(default_factory=dict)
    patterns: dict[ir.Pattern, None] = field(default_factory=dict)
    settings: dict[str, str] = field(default_factory=dict)

    def get_or_add_intent(self, name: str) -> ir.Intent:
        intent = self.intents.get(name)
        if intent is None:
            intent = ir.Intent(name=name)
            self.intents[name] = intent
        return intent

    def get_or_add_utterance(self, text: str, intent: str) -> ir.Utterance:
        """Return the utterance for ``(text, intent)``, creating it on first use."""
        key = (text, intent)
        utterance = self.utterances.get(key)
        if utterance is None:
            utterance = ir.Utterance(text=text, intent=intent)
            self.utterances[key] = utterance
        return utterance

    def add_pattern(self, pattern: str, intent: str) -> ir.Pattern:
        item = ir.Pattern(pattern=pattern, intent=intent)
        self.patterns.setdefault(item, None)
        return item

    def find_labelled_utterances(
        self, entity: str
    ) -> list[tuple[ir.Utterance, ir.UtteranceEntityLabel]]:
        """Every utterance label referring to ``entity``, in insertion order."""
        matches = []
        for utterance in self.utterances.values():
            for label in utterance.entities:
                if label.entity == entity:
                    matches.append((utterance, label))
        return matches

    def to_luis_app(self) -> ir.LuisApp:
        """Snapshot the partition as the read-only service model."""
        registry = self.registry
        return ir.LuisApp(
            intents=list(self.intents.values()),
            entities=list(registry.simple.values()),
            composites=list(registry.composites.values()),
            closed_lists=list(registry.lists.values()),
            regex_entities=list(registry.regexes.values()),
            model_features=list(registry.phrase_lists.values()),
            pattern_any_entities=list(registry.pattern_any.values()),
            prebuilt_entities=list(registry.prebuilts.values()),
            utterances=list(self.utterances.values()),
            patterns=list(self.patterns),
            settings=dict(self.settings),
        )


@dataclass
class ParsedContent:
    """
    Result of parsing one LU document.

    Attributes:
        luis: Intent-recognition partition
        qna: Knowledge-base partition
        alterations: Word alteration groups for the knowledge base
        additional_files_to_parse: Local files referenced by this document
    """

    luis: LuisContent = field(default_factory=LuisContent)
    qna: ir.KnowledgeBase = field(default_factory=ir.KnowledgeBase)
    alterations: ir.WordAlterations = field(default_factory=ir.WordAlterations)
    additional_files_to_parse: list[ir.FileToParse] = field(default_factory=list)

    @property
    def registry(self) -> EntityRegistry:
        return self.luis.registry

    def to_dict(self) -> dict:
        """JSON-ready view of all partitions."""
        return {
            "luis": self.luis.to_luis_app().to_dict(),
            "qna": self.qna.to_dict(),
            "alterations": self.alterations.model_dump(by_alias=True),
            "additionalFilesToParse": [
                f.model_dump(by_alias=True) for f in self.additional_files_to_parse
            ],
        }
