"""Formatters mapping model instances to the stable output schema.

Every function here is pure and total. Keys that do not apply are left out
of the dict instead of being set to null.
"""


def format_task(task):
    due = task.due
    out = {
        "id": task.id,
        "content": task.content,
    }
    if task.description:
        out["description"] = task.description
    out["priority"] = task.priority
    out["due"] = (due.date or due.datetime) if due else None
    out["dueString"] = due.string if due else None
    out["isRecurring"] = due.is_recurring if due else False
    out["deadline"] = task.deadline
    if task.labels:
        out["labels"] = list(task.labels)
    out["projectId"] = task.project_id
    if task.section_id:
        out["sectionId"] = task.section_id
    if task.parent_id:
        out["parentId"] = task.parent_id
    out["url"] = task.url
    return out


def task_stub(task):
    return {"id": task.id, "content": task.content}


def format_comment(comment):
    out = {
        "id": comment.id,
        "content": comment.content,
        "postedAt": comment.posted_at,
    }
    if comment.task_id:
        out["taskId"] = comment.task_id
    if comment.project_id:
        out["projectId"] = comment.project_id
    out["hasAttachment"] = comment.attachment is not None
    if comment.attachment is not None and comment.attachment.file_name:
        out["attachmentName"] = comment.attachment.file_name
    return out


def format_project(project):
    return {
        "id": project.id,
        "name": project.name,
        "color": project.color,
        "isInbox": project.is_inbox,
        "isFavorite": project.is_favorite,
        "url": project.url,
    }


def format_section(section):
    return {
        "id": section.id,
        "name": section.name,
        "projectId": section.project_id,
        "order": section.order,
    }


def format_label(label):
    return {
        "id": label.id,
        "name": label.name,
        "color": label.color,
        "isFavorite": label.is_favorite,
    }


def format_reminder(reminder):
    return {
        "id": reminder.id,
        "minuteOffset": reminder.minute_offset,
        "due": reminder.due,
    }


def format_activity_event(event):
    extra = event.extra_data or {}
    content = extra.get("content")
    if content is None:
        content = extra.get("name")
    if content is None:
        content = f"id:{event.object_id}"
    out = {
        "id": event.id,
        "eventType": event.event_type,
        "objectType": event.object_type,
        "objectId": event.object_id,
        "content": content,
        "date": event.event_date,
    }
    if event.parent_project_id:
        out["parentProjectId"] = event.parent_project_id
    return out


def format_completed_task(task):
    return {
        "id": task.id,
        "content": task.content,
        "completedAt": task.completed_at,
        "projectId": task.project_id,
    }
