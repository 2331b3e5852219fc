"""
English pluralization for default collection names.

A document class without an explicit collection name is stored in the
camelized plural of its class name (``TestDocument`` -> ``testDocuments``).
Rules are regular expressions applied case-insensitively; the most recently
added matching rule wins.
"""

import re
from dataclasses import dataclass, field


@dataclass
class _Rule:
    pattern: re.Pattern
    replacement: str

    def apply(self, word: str) -> str | None:
        if not self.pattern.search(word):
            return None
        return self.pattern.sub(self.replacement, word)


@dataclass
class Vocabulary:
    """Plural/singular rules, irregular words and uncountable words."""

    plurals: list[_Rule] = field(default_factory=list)
    singulars: list[_Rule] = field(default_factory=list)
    uncountables: set[str] = field(default_factory=set)

    def add_plural(self, rule: str, replacement: str) -> None:
        self.plurals.append(_Rule(re.compile(rule, re.IGNORECASE), replacement))

    def add_singular(self, rule: str, replacement: str) -> None:
        self.singulars.append(_Rule(re.compile(rule, re.IGNORECASE), replacement))

    def add_irregular(self, singular: str, plural: str, match_ending: bool = True) -> None:
        if match_ending:
            self.add_plural(f"({singular[0]}){singular[1:]}$", rf"\g<1>{plural[1:]}")
            self.add_singular(f"({plural[0]}){plural[1:]}$", rf"\g<1>{singular[1:]}")
        else:
            self.add_plural(f"^{singular}$", plural)
            self.add_singular(f"^{plural}$", singular)

    def add_uncountable(self, word: str) -> None:
        self.uncountables.add(word.lower())

    def pluralize(self, word: str) -> str:
        return self._apply_rules(self.plurals, word)

    def singularize(self, word: str) -> str:
        return self._apply_rules(self.singulars, word)

    def _apply_rules(self, rules: list[_Rule], word: str) -> str:
        if word.lower() in self.uncountables:
            return word
        for rule in reversed(rules):
            result = rule.apply(word)
            if result is not None:
                return result
        return word


def _build_default_vocabulary() -> Vocabulary:
    vocabulary = Vocabulary()

    for rule, replacement in (
        (r"$", "s"),
        (r"s$", "s"),
        (r"(ax|test)is$", r"\1es"),
        (r"(octop|vir|alumn|fung|cact|foc|hippopotam|radi|stimul|syllab|nucle)us$", r"\1i"),
        (r"(alias|bias|iris|status|campus|apparatus|virus|walrus|trellis)$", r"\1es"),
        (r"(buffal|tomat|volcan|ech|embarg|her|mosquit|potat|torped|vet)o$", r"\1oes"),
        (r"([dti])um$", r"\1a"),
        (r"sis$", "ses"),
        (r"(?:([^f])fe|([lr])f)$", r"\1\2ves"),
        (r"(hive)$", r"\1s"),
        (r"([^aeiouy]|qu)y$", r"\1ies"),
        (r"(x|ch|ss|sh)$", r"\1es"),
        (r"(matr|vert|ind|d)ix|ex$", r"\1ices"),
        (r"([m|l])ouse$", r"\1ice"),
        (r"^(ox)$", r"\1en"),
        (r"(quiz)$", r"\1zes"),
        (r"(buz|blit|walt)z$", r"\1zes"),
        (r"(hoo|lea|loa|thie)f$", r"\1ves"),
        (r"(alumn|alg|larv|vertebr)a$", r"\1ae"),
        (r"(criteri|phenomen)on$", r"\1a"),
    ):
        vocabulary.add_plural(rule, replacement)

    for rule, replacement in (
        (r"s$", ""),
        (r"(n)ews$", r"\1ews"),
        (r"([dti])a$", r"\1um"),
        (
            r"(analy|ba|diagno|parenthe|progno|synop|the|ellip|empha|neuro|oa|paraly)ses$",
            r"\1sis",
        ),
        (r"([^f])ves$", r"\1fe"),
        (r"(hive)s$", r"\1"),
        (r"(tive)s$", r"\1"),
        (r"([lr]|hoo|lea|loa|thie)ves$", r"\1f"),
        (r"(^zomb)?([^aeiouy]|qu)ies$", r"\2y"),
        (r"(s)eries$", r"\1eries"),
        (r"(m)ovies$", r"\1ovie"),
        (r"(x|ch|ss|sh)es$", r"\1"),
        (r"([m|l])ice$", r"\1ouse"),
        (r"(o)es$", r"\1"),
        (r"(shoe)s$", r"\1"),
        (r"(cris|ax|test)es$", r"\1is"),
        (r"(octop|vir|alumn|fung|cact|foc|hippopotam|radi|stimul|syllab|nucle)i$", r"\1us"),
        (r"(alias|bias|iris|status|campus|apparatus|virus|walrus|trellis)es$", r"\1"),
        (r"^(ox)en", r"\1"),
        (r"(matr|d)ices$", r"\1ix"),
        (r"(vert|ind)ices$", r"\1ex"),
        (r"(quiz)zes$", r"\1"),
        (r"(buz|blit|walt)zes$", r"\1z"),
        (r"(alumn|alg|larv|vertebr)ae$", r"\1a"),
        (r"(criteri|phenomen)a$", r"\1on"),
    ):
        vocabulary.add_singular(rule, replacement)

    for singular, plural in (
        ("person", "people"),
        ("man", "men"),
        ("child", "children"),
        ("sex", "sexes"),
        ("move", "moves"),
        ("goose", "geese"),
        ("wave", "waves"),
        ("die", "dice"),
        ("foot", "feet"),
        ("tooth", "teeth"),
        ("curriculum", "curricula"),
        ("database", "databases"),
        ("zombie", "zombies"),
    ):
        vocabulary.add_irregular(singular, plural)

    for singular, plural in (("is", "are"), ("that", "those"), ("this", "these"), ("bus", "buses")):
        vocabulary.add_irregular(singular, plural, match_ending=False)

    for word in (
        "equipment", "information", "rice", "money", "species", "series", "fish",
        "sheep", "deer", "aircraft", "oz", "tsp", "tbsp", "ml", "l", "water",
        "waters", "semen", "sperm", "bison", "grass", "hair", "mud", "elk",
        "luggage", "moose", "offspring", "salmon", "shrimp", "someone", "swine",
        "trout", "tuna", "corps", "scissors", "means",
    ):  # fmt: skip
        vocabulary.add_uncountable(word)

    return vocabulary


DEFAULT_VOCABULARY = _build_default_vocabulary()


def pluralize(word: str) -> str:
    """Pluralize a singular English word."""
    return DEFAULT_VOCABULARY.pluralize(word)


def singularize(word: str) -> str:
    """Singularize a plural English word."""
    return DEFAULT_VOCABULARY.singularize(word)


def pascalize(text: str) -> str:
    """``snake_case`` or ``word`` -> ``PascalCase``."""
    return re.sub(r"(?:^|_)(.)", lambda m: m.group(1).upper(), text)


def camelize(text: str) -> str:
    """``PascalCase`` or ``snake_case`` -> ``camelCase``."""
    word = pascalize(text)
    return word[:1].lower() + word[1:]


def default_collection_name(type_name: str) -> str:
    """Collection name derived from a document class name."""
    return camelize(pluralize(type_name))
