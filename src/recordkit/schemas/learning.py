"""Learning contracts — topics, notes, flashcards, study plans.

Cheatsheet sections carry a tagged union keyed on ``type``: ``text``,
``list``, ``formula`` or ``table``.  Only the branch named by ``type`` is
validated, so a violation points at the fields of that branch.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import Field

from recordkit.domain.record import (
    RECORD,
    SchemaModel,
    defaulted,
    extend,
    optional,
    required,
)
from recordkit.domain.registry import contract_key, register_contract
from recordkit.domain.types import Timestamp, UuidStr, at_least, non_empty, text, url

DOMAIN = "learning"

Difficulty = Literal["easy", "medium", "hard"]

Term = text("Term is required.")
Definition = text("Definition is required.")
TextValue = text("Text content is required.")
ListItem = text("List item cannot be empty.")
FormulaExpression = text("Formula expression is required.")
TableHeader = text("Table header is required.")
TableRow = non_empty(text())
SectionTitle = text("Section title is required.")
NodeContent = text("Content is required.")


class DefinitionEntry(SchemaModel):
    """A term and its definition."""

    term: Term
    definition: Definition


class TextContent(SchemaModel):
    type: Literal["text"]
    value: TextValue


class ListContent(SchemaModel):
    type: Literal["list"]
    items: list[ListItem]


class FormulaContent(SchemaModel):
    type: Literal["formula"]
    expression: FormulaExpression


class TableContent(SchemaModel):
    type: Literal["table"]
    headers: list[TableHeader]
    rows: list[TableRow]


SectionContent = Annotated[
    TextContent | ListContent | FormulaContent | TableContent,
    Field(discriminator="type"),
]


class CheatsheetSection(SchemaModel):
    """A titled block of structured cheatsheet content."""

    title: SectionTitle
    content: SectionContent


class MindmapNode(SchemaModel):
    id: UuidStr
    content: NodeContent
    parent_id: UuidStr | None = None
    children: list[UuidStr] | None = None


class DiagramElement(SchemaModel):
    id: UuidStr
    type: Literal["shape", "line", "text"]
    content: str | None = None
    coordinates: tuple[float, float]
    size: float | None = None


FLASH_CARD = extend(
    RECORD,
    "FlashCard",
    {
        "topic_id": required(UuidStr, "The UUID of the topic this flashcard belongs to."),
        "front_content": required(
            text("Front content cannot be empty."), "The question, term or prompt."
        ),
        "back_content": required(
            text("Back content cannot be empty."), "The answer or explanation."
        ),
        "difficulty": defaulted(Difficulty, "medium", "How hard the card is."),
        "tags": optional(list[str], "Tags for organizing or filtering flashcards."),
    },
    doc="A two-sided study card.",
)

TOPIC = extend(
    RECORD,
    "Topic",
    {
        "title": required(text("Title is required."), "The subject of the content."),
        "description": optional(str, "A detailed description of the topic."),
    },
    doc="A subject that organizes learning material.",
)

NOTE = extend(
    RECORD,
    "Note",
    {
        "topic_id": required(UuidStr, "The UUID of the topic this note relates to."),
        "content": required(text("Content cannot be empty."), "The body of the note."),
        "tags": optional(list[str], "Tags for organizing the note."),
    },
    doc="Text a user writes while studying a topic.",
)

DEFINITION_LIST = extend(
    RECORD,
    "DefinitionList",
    {
        "topic_id": required(UuidStr, "The UUID of the topic this list relates to."),
        "definitions": required(
            non_empty(DefinitionEntry, "At least one definition is required."),
            "Term-definition pairs.",
        ),
    },
    doc="A collection of terms and their definitions.",
)

CHEATSHEET = extend(
    RECORD,
    "Cheatsheet",
    {
        "topic_id": required(UuidStr, "The UUID of the topic this cheatsheet belongs to."),
        "title": required(text("Title is required."), "The title of the cheatsheet."),
        "sections": required(
            non_empty(CheatsheetSection, "At least one section is required."),
            "Sections of structured content.",
        ),
        "tags": optional(list[str], "Tags for organizing cheatsheets."),
    },
    doc="A condensed reference sheet for a topic.",
)

MINDMAP = extend(
    RECORD,
    "Mindmap",
    {
        "topic_id": required(UuidStr, "The UUID of the topic this mindmap belongs to."),
        "title": required(text("Title is required."), "The title of the mindmap."),
        "nodes": required(
            non_empty(MindmapNode, "At least one node is required."),
            "Nodes making up the mindmap.",
        ),
    },
    doc="Ideas connected by nodes and branches.",
)

DIAGRAM = extend(
    RECORD,
    "Diagram",
    {
        "topic_id": required(UuidStr, "The UUID of the topic this diagram belongs to."),
        "title": required(text("Title is required."), "The title of the diagram."),
        "description": optional(str, "A description of the diagram."),
        "elements": required(
            non_empty(DiagramElement, "At least one element is required."),
            "Shapes, lines and text making up the diagram.",
        ),
    },
    doc="A graphical representation of concepts.",
)

BOOKMARK = extend(
    RECORD,
    "Bookmark",
    {
        "title": required(text("Title is required."), "The title of the bookmark."),
        "url": optional(url("Must be a valid URL."), "URL of the bookmarked web resource."),
        "page": optional(float, "Page number within a document."),
        "notes": optional(str, "Notes about the bookmark."),
        "topic_id": optional(UuidStr, "The UUID of the associated topic."),
    },
    doc="A saved reference to a URL or document location.",
)

STUDY_PLAN = extend(
    RECORD,
    "StudyPlan",
    {
        "title": required(text("Title is required."), "The title of the study plan."),
        "goals": required(non_empty(text("Goal cannot be empty.")), "Study goals."),
        "topics": optional(list[UuidStr], "Topic UUIDs covered by the plan."),
        "start_date": optional(Timestamp, "When the plan starts."),
        "end_date": optional(Timestamp, "When the plan ends."),
        "is_completed": defaulted(bool, False, "Whether the plan has been completed."),
    },
    doc="Goals and topics organized for learning.",
)

STUDY_SESSION = extend(
    RECORD,
    "StudySession",
    {
        "study_plan_id": optional(UuidStr, "The UUID of the associated study plan."),
        "topic_id": required(UuidStr, "The UUID of the topic studied."),
        "duration": required(
            at_least(1, "Duration must be at least 1 minute."), "Session length in minutes."
        ),
        "date": required(Timestamp, "When the session took place."),
        "notes": optional(str, "Notes taken during the session."),
    },
    doc="Time spent learning or practicing a topic.",
)

CONTRACTS = (
    FLASH_CARD,
    TOPIC,
    NOTE,
    DEFINITION_LIST,
    CHEATSHEET,
    MINDMAP,
    DIAGRAM,
    BOOKMARK,
    STUDY_PLAN,
    STUDY_SESSION,
)

for _contract in CONTRACTS:
    register_contract(contract_key(DOMAIN, _contract), _contract)
