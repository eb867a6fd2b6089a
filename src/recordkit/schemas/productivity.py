"""Productivity contracts — tasks, projects, milestones, time tracking."""

from __future__ import annotations

from typing import Literal

from recordkit.domain.record import (
    RECORD,
    SchemaModel,
    defaulted,
    extend,
    optional,
    required,
)
from recordkit.domain.registry import contract_key, register_contract
from recordkit.domain.types import Timestamp, UrlStr, UuidStr, at_least, text

DOMAIN = "productivity"

TaskStatus = Literal["to-do", "in-progress", "completed"]
ProjectStatus = Literal["not-started", "in-progress", "completed"]
Priority = Literal["low", "medium", "high"]


class Reminder(SchemaModel):
    """A scheduled alert attached to a task or project (not a record)."""

    reminder_date: Timestamp
    message: str | None = None


TASK_LIST = extend(
    RECORD,
    "TaskList",
    {
        "title": required(text("Task list title is required."), "The title of the task list."),
        "description": optional(str, "A detailed description of the task list."),
        "tasks": optional(list[UuidStr], "Task UUIDs that belong to this task list."),
        "project_id": optional(UuidStr, "The UUID of the project this task list belongs to."),
    },
    doc="An ordered or categorized list of tasks.",
)

MILESTONE = extend(
    RECORD,
    "Milestone",
    {
        "title": required(text("Milestone title is required."), "The title of the milestone."),
        "description": optional(str, "What the milestone signifies."),
        "due_date": required(Timestamp, "When the milestone is expected to be reached."),
        "status": required(ProjectStatus, "The current status of the milestone."),
        "project_id": optional(UuidStr, "The UUID of the project this milestone belongs to."),
    },
    doc="A significant event or objective in a project.",
)

SUBTASK = extend(
    RECORD,
    "Subtask",
    {
        "title": required(text("Subtask title is required."), "A brief title for the subtask."),
        "description": optional(str, "The purpose and requirements of the subtask."),
        "status": required(TaskStatus, "The current status of the subtask."),
        "due_date": optional(Timestamp, "The due date for the subtask."),
        "task_id": required(UuidStr, "The UUID of the parent task."),
        "priority": defaulted(Priority, "medium", "The priority level of the subtask."),
    },
    doc="A smaller task within a larger parent task.",
)

COMMENT = extend(
    RECORD,
    "Comment",
    {
        "content": required(text("Comment content is required."), "The text of the comment."),
        "author": required(text("Author is required."), "Who made the comment."),
        "task_id": optional(UuidStr, "The UUID of the task this comment relates to."),
        "project_id": optional(UuidStr, "The UUID of the project this comment relates to."),
    },
    doc="Feedback or discussion on a task or project.",
)

ATTACHMENT = extend(
    RECORD,
    "Attachment",
    {
        "file_name": required(text("File name is required."), "The name of the attachment."),
        "file_type": required(text("File type is required."), "The format of the file."),
        "url": required(UrlStr, "Where the attachment is located."),
        "task_id": optional(UuidStr, "The UUID of the task this attachment belongs to."),
        "project_id": optional(UuidStr, "The UUID of the project this attachment belongs to."),
    },
    doc="A file or link associated with a task or project.",
)

TIME_LOG = extend(
    RECORD,
    "TimeLog",
    {
        "task_id": required(UuidStr, "The UUID of the task the time was spent on."),
        "project_id": optional(UuidStr, "The UUID of the project the time was spent on."),
        "duration": required(
            at_least(1, "Duration must be at least 1 minute."), "Time spent, in minutes."
        ),
        "description": optional(str, "What the time was spent on."),
        "log_date": required(Timestamp, "When the time was logged."),
    },
    doc="Time spent on a task or project.",
)

TAG = extend(
    RECORD,
    "Tag",
    {
        "name": required(text("Tag name is required."), "The label used for categorization."),
        "description": optional(str, "A short description of the tag."),
    },
    doc="A label used to categorize tasks and projects.",
)

EVENT = extend(
    RECORD,
    "Event",
    {
        "title": required(text("Event title is required."), "The title of the event."),
        "description": optional(str, "What the event is for."),
        "event_date": required(Timestamp, "When the event takes place."),
        "task_id": optional(UuidStr, "The UUID of the related task."),
        "project_id": optional(UuidStr, "The UUID of the related project."),
    },
    doc="A scheduled occurrence related to a task or project.",
)

TASK = extend(
    RECORD,
    "Task",
    {
        "title": required(text("Task title is required."), "The title of the task."),
        "description": optional(str, "A detailed description of the task."),
        "status": required(TaskStatus, "The current status of the task."),
        "due_date": optional(Timestamp, "The due date for the task."),
        "priority": defaulted(Priority, "medium", "The priority level of the task."),
        "tags": optional(list[UuidStr], "Tag UUIDs categorizing the task."),
        "project_id": optional(UuidStr, "The UUID of the project this task belongs to."),
        "reminders": optional(list[Reminder], "Reminders attached to the task."),
        "dependencies": optional(
            list[UuidStr], "UUIDs of tasks that must be completed before this one."
        ),
    },
    doc="A unit of work that needs to be completed.",
)

PROJECT = extend(
    RECORD,
    "Project",
    {
        "title": required(text("Project title is required."), "The title of the project."),
        "description": optional(str, "A detailed description of the project."),
        "status": required(ProjectStatus, "The current status of the project."),
        "start_date": optional(Timestamp, "The start date of the project."),
        "due_date": optional(Timestamp, "The due date for the project."),
        "tasks": optional(list[UuidStr], "Task UUIDs associated with this project."),
        "tags": optional(list[UuidStr], "Tag UUIDs categorizing the project."),
        "reminders": optional(list[Reminder], "Reminders attached to the project."),
    },
    doc="A collection of tasks and objectives.",
)

CONTRACTS = (
    TASK_LIST,
    MILESTONE,
    SUBTASK,
    COMMENT,
    ATTACHMENT,
    TIME_LOG,
    TAG,
    EVENT,
    TASK,
    PROJECT,
)

for _contract in CONTRACTS:
    register_contract(contract_key(DOMAIN, _contract), _contract)
