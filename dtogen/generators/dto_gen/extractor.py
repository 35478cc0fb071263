"""
Field extraction from TypeORM entity declarations.
Uses a per-line regex classifier (no full AST parsing); unrecognized lines are skipped.
"""
import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional

from dtogen.generators.dto_gen.types import (
    DEFAULT_POLICY,
    DuplicatePolicy,
    GenerationPolicy,
    RawField,
)
from dtogen.generators.dto_gen.utils import is_array_type, lower_first

log = logging.getLogger(__name__)

RELATION_PATTERN = re.compile(
    r'@(ManyToOne|OneToOne|OneToMany|ManyToMany)\s*(\()\s*\(\s*\)\s*=>\s*([A-Za-z0-9_$]+)\s*[,)]'
)
TO_ONE_KINDS = {"ManyToOne", "OneToOne"}

DECORATOR_NAME_PATTERN = re.compile(r'@[A-Za-z_$][A-Za-z0-9_$.]*\s*')

COMMENT_PREFIXES = ("//", "/*", "*")

_MODIFIERS = r'(?:(?:public|protected|private|readonly)\s+)*'
_IDENTIFIER = r'([A-Za-z_$][A-Za-z0-9_$]*)'

# name[?|!]: type [= initializer];
PROPERTY_PATTERN = re.compile(
    '^' + _MODIFIERS + _IDENTIFIER + r'(\?)?!?\s*:\s*([^;=]+?)\s*(?:=[^;]*)?;'
)

# name[?|!]: <type that continues on the next lines>
PROPERTY_START_PATTERN = re.compile(
    '^' + _MODIFIERS + _IDENTIFIER + r'\??!?\s*:\s*([^;]*)$'
)


class LineState(str, Enum):
    NEUTRAL = "NEUTRAL"
    AFTER_RELATION = "AFTER_RELATION"
    INSIDE_MULTILINE_TYPE = "INSIDE_MULTILINE_TYPE"


@dataclass(frozen=True)
class RelationMatch:
    """A relation annotation found on a line, plus whatever follows its closing paren."""
    field: RawField
    target: str
    rest: str


def bracket_depth(text: str) -> int:
    """Net count of opened `{`, `<` and `(` in a type fragment."""
    text = text.replace("=>", "")
    opened = sum(text.count(c) for c in "{<(")
    closed = sum(text.count(c) for c in "}>)")
    return opened - closed


def closing_paren(text: str, open_index: int) -> int:
    """Index just past the paren that balances text[open_index], or -1 if it never closes."""
    depth = 0
    for i in range(open_index, len(text)):
        if text[i] == "(":
            depth += 1
        elif text[i] == ")":
            depth -= 1
            if depth == 0:
                return i + 1
    return -1


def strip_decorators(line: str) -> str:
    """Drop leading `@Decorator(...)` calls; an unclosed decorator leaves nothing."""
    rest = line
    while rest.startswith("@"):
        match = DECORATOR_NAME_PATTERN.match(rest)
        if not match:
            return rest
        rest = rest[match.end():]
        if rest.startswith("("):
            end = closing_paren(rest, 0)
            if end < 0:
                return ""
            rest = rest[end:]
        rest = rest.lstrip()
    return rest


def is_comment(line: str) -> bool:
    return line.startswith(COMMENT_PREFIXES)


def match_relation(line: str) -> Optional[RelationMatch]:
    match = RELATION_PATTERN.search(line)
    if not match:
        return None
    kind, target = match.group(1), match.group(3)
    base = lower_first(target)
    if kind in TO_ONE_KINDS:
        raw = RawField(name=f"{base}Id", is_relation=True, is_array=False)
    else:
        raw = RawField(name=f"{base}Ids", is_relation=True, is_array=True)

    end = closing_paren(line, match.start(2))
    rest = strip_decorators(line[end:].strip()) if end >= 0 else ""
    return RelationMatch(field=raw, target=target, rest=rest)


def parse_relation_line(line: str) -> Optional[RawField]:
    """Return the foreign-key field for a relation annotation, or None."""
    relation = match_relation(line)
    return relation.field if relation else None


def parse_property_line(line: str) -> Optional[RawField]:
    """Return the field for a single-line property declaration, or None.

    Decorators in front of the property (`@Column() name: string;`) are ignored.
    """
    match = PROPERTY_PATTERN.match(strip_decorators(line))
    if not match:
        return None
    name, optional_marker, declared_type = match.groups()
    declared_type = declared_type.strip()
    return RawField(
        name=name,
        declared_type=declared_type,
        is_relation=False,
        is_array=is_array_type(declared_type),
        source_optional=optional_marker == "?",
    )


def refers_to(declared_type: str, target: str) -> bool:
    """True when the type mentions the relation target (Client, Client[], Promise<Client>)."""
    return re.search(r'(?<![A-Za-z0-9_$])' + re.escape(target) + r'(?![A-Za-z0-9_$])', declared_type) is not None


class LineClassifier:
    """
    Feeds trimmed lines one at a time and returns the fields each line produces.

    States:
    - NEUTRAL: test relation first, then property.
    - AFTER_RELATION: a relation annotation was seen without its property; the next
      property line typed with the relation target is the backing property and is
      dropped when the policy asks for it. Any other property resets to NEUTRAL.
    - INSIDE_MULTILINE_TYPE: consuming an unsupported multi-line type until its
      brackets balance again.
    """

    def __init__(self, policy: GenerationPolicy = DEFAULT_POLICY):
        self.policy = policy
        self.state = LineState.NEUTRAL
        self._depth = 0
        self._target: Optional[str] = None

    def _reset(self) -> None:
        self.state = LineState.NEUTRAL
        self._depth = 0
        self._target = None

    def _backing_or_field(self, prop: RawField, target: str) -> List[RawField]:
        if self.policy.skip_relation_backing_property and refers_to(prop.declared_type, target):
            log.debug("Dropping relation backing property '%s'", prop.name)
            return []
        return [prop]

    def feed(self, line: str) -> List[RawField]:
        if self.state == LineState.INSIDE_MULTILINE_TYPE:
            self._depth += bracket_depth(line)
            if self._depth <= 0:
                self._reset()
            return []

        if is_comment(line):
            return []

        relation = match_relation(line)
        if relation:
            self._reset()
            fields = [relation.field]
            prop = parse_property_line(relation.rest) if relation.rest else None
            if prop:
                fields.extend(self._backing_or_field(prop, relation.target))
            else:
                self.state = LineState.AFTER_RELATION
                self._target = relation.target
            return fields

        prop = parse_property_line(line)
        if prop:
            target = self._target
            in_relation = self.state == LineState.AFTER_RELATION
            self._reset()
            if in_relation:
                return self._backing_or_field(prop, target)
            return [prop]

        start = PROPERTY_START_PATTERN.match(strip_decorators(line))
        if start:
            depth = bracket_depth(start.group(2))
            if depth > 0:
                log.debug("Skipping multi-line declaration of '%s'", start.group(1))
                self._reset()
                self.state = LineState.INSIDE_MULTILINE_TYPE
                self._depth = depth
        return []


def apply_duplicate_policy(fields: Iterable[RawField], policy: DuplicatePolicy) -> List[RawField]:
    """Resolve repeated names; the surviving record keeps the first-appearance slot."""
    fields = list(fields)
    if policy == DuplicatePolicy.KEEP_ALL:
        return fields

    positions: Dict[str, int] = {}
    result: List[RawField] = []
    for raw in fields:
        if raw.name not in positions:
            positions[raw.name] = len(result)
            result.append(raw)
        elif policy == DuplicatePolicy.LAST_WINS:
            result[positions[raw.name]] = raw
    return result


def extract_fields(source: str, policy: GenerationPolicy = DEFAULT_POLICY) -> List[RawField]:
    """
    Extract the ordered field list from the full text of one entity declaration.

    Returns an empty list when nothing is recognizable; never raises on malformed lines.
    """
    classifier = LineClassifier(policy)
    fields: List[RawField] = []
    for raw_line in source.splitlines():
        line = raw_line.strip()
        if not line:
            continue
        fields.extend(classifier.feed(line))
    return apply_duplicate_policy(fields, policy.duplicate_policy)
