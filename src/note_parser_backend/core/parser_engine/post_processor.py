"""
Post-Processor

Deterministic cross-field rules applied after every parser has run, and
the one-line human-readable summary of a document result.
"""

import logging
from dataclasses import replace
from typing import Any, List, Optional

from .types import DocumentResult, FieldResult

logger = logging.getLogger(__name__)

SUMMARY_SEPARATOR = " | "


class PostProcessor:
    """Applies derivation rules and builds the summary line.

    ``process`` never mutates its input; it returns a new DocumentResult.
    """

    def __init__(self, derive_deadline: bool = True, build_summary: bool = True):
        self.derive_deadline = derive_deadline
        self.build_summary = build_summary

    def process(self, document: DocumentResult) -> DocumentResult:
        fields = dict(document.fields)

        if self.derive_deadline:
            fields = self._derive_subject_deadline(fields)

        processed = replace(document, fields=fields, errors=list(document.errors))
        if self.build_summary:
            processed.summary = self.summarize(processed)
        return processed

    def _derive_subject_deadline(self, fields: dict) -> dict:
        subject = fields.get("subject")
        date = fields.get("date")
        if subject is None or date is None:
            return fields

        if isinstance(subject.value, dict):
            value = {**subject.value, "deadline": date.value}
        else:
            value = {"text": subject.value, "deadline": date.value}

        fields["subject"] = replace(subject, value=value)
        logger.debug("Derived subject deadline %s", date.value)
        return fields

    def summarize(self, document: DocumentResult) -> str:
        """Concatenate present fields in priority order.

        Order: subject (or action), when, priority, location, participants, tags.
        A field whose value has an unexpected shape contributes nothing.
        """
        parts: List[str] = []
        fields = document.fields

        task = self._task_text(fields.get("subject"), fields.get("action"))
        if task:
            parts.append(f"Task: {task}")

        when = self._when_text(fields.get("date"), fields.get("time"))
        if when:
            parts.append(f"When: {when}")

        priority = fields.get("priority")
        if priority is not None:
            level = _lookup(priority.value, "level")
            if level:
                parts.append(f"Priority: {level}")

        location = fields.get("location")
        if location is not None:
            name = _lookup(location.value, "name")
            if name:
                parts.append(f"Location: {name}")

        participants = fields.get("participants")
        if participants is not None:
            names = _participant_names(participants.value)
            if names:
                parts.append(f"With: {', '.join(names)}")

        tags = fields.get("tags")
        if tags is not None:
            tag_list = _tag_list(tags.value)
            if tag_list:
                parts.append("Tags: " + " ".join(f"#{tag}" for tag in tag_list))

        return SUMMARY_SEPARATOR.join(parts)

    def _task_text(self, subject: Optional[FieldResult], action: Optional[FieldResult]) -> str:
        if subject is not None:
            text = _lookup(subject.value, "text")
            if text:
                return str(text)
        if action is not None and isinstance(action.value, dict):
            return " ".join(
                str(part) for part in (action.value.get("verb"), action.value.get("object")) if part
            )
        return ""

    def _when_text(self, date: Optional[FieldResult], time: Optional[FieldResult]) -> str:
        if date is not None and time is not None:
            return f"{date.value} at {time.value}"
        if date is not None:
            return str(date.value)
        if time is not None:
            return str(time.value)
        return ""


def _lookup(value: Any, key: str) -> Any:
    if isinstance(value, dict):
        return value.get(key, "")
    return value


def _tag_list(value: Any) -> List[str]:
    if isinstance(value, str):
        return [value] if value else []
    if isinstance(value, (list, tuple)):
        return [str(tag) for tag in value if tag]
    return []


def _participant_names(value: Any) -> List[str]:
    people = value.get("participants") if isinstance(value, dict) else value
    if not isinstance(people, (list, tuple)):
        return []

    names = []
    for person in people:
        if isinstance(person, dict):
            names.append(str(person.get("name", "")))
        else:
            names.append(str(person))
    return [name for name in names if name]
