"""Prompt builders for the schedule and study-tip model calls."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Sequence

from studyplanner.api.schemas.schedule import TaskPayload

logger = logging.getLogger(__name__)

SCHEDULE_SYSTEM_PROMPT = (
    "You are an expert AI that outputs structured JSON schedules with explicit times and dates for each activity."
)
TIPS_SYSTEM_PROMPT = "You generate concise but detailed study tips with emojis. One JSON object per task."

SCHEDULE_CONTRACT = """\
You are an AI schedule planner that creates realistic, multi-day study and event schedules using cognitive science principles (Pomodoro, interleaving, spaced repetition).

### RULES
- Output **ONLY valid JSON** (no markdown or commentary).
- The top-level structure MUST be:
{
  "days": [
    {
      "day": "Sunday",
      "date": "10/27",
      "schedule": [
        { "timeStart": "9:00 AM", "timeEnd": "10:00 AM", "task": "Math HW" },
        { "timeStart": "10:00 AM", "timeEnd": "11:00 AM", "break": "Short break" },
        { "timeStart": "11:00 AM", "timeEnd": "1:00 PM", "event": "Church" }
      ]
    }
  ]
}

### REQUIREMENTS
- Today is {today}. Start the first day on today.
- Always include "timeStart" and "timeEnd" (12-hour format).
- Each schedule entry must contain one of: "task", "event", or "break".
- No overlaps.
- Respect due dates.
- Schedule around fixed events.
- Include natural breaks and meals.

### INPUT DATA
**Tasks:**
{tasks}

**Events:**
{events}
"""

TIPS_CONTRACT = """\
Generate ONE detailed, helpful study or productivity tip for each of the following tasks.
Each tip should:
- Include 1-2 relevant emojis.
- Be around 2-3 sentences (40-60 words).
- Give practical, encouraging, and task-specific advice.

Respond ONLY with a valid JSON array:
[
  { "relatedTo": "task name", "title": "Short, catchy title", "content": "Detailed, actionable tip paragraph." }
]
Use the task name exactly as written below for "relatedTo".

Tasks:
{topics}
"""


def format_task(task: TaskPayload) -> str:
    lines = [f"Task: {task.text}"]
    if task.details:
        lines.append(f"Notes: {task.details}")
    if task.time:
        lines.append(f"Time Estimate: {task.time}")
    if task.due_date:
        lines.append(f"Due Date: {task.due_date.isoformat()}")
    if task.priority:
        lines.append(f"Priority: {task.priority.value}")
    if task.splittable:
        lines.append("This task can be split.")
    return "\n".join(lines)


def format_events(events: Sequence[str]) -> str:
    if not events:
        return "No events provided."
    return "\n".join(f"• {event}" for event in events)


def load_extra_prompt(path: str | None) -> str:
    """Operator-supplied preamble read from disk, or '' when the file is absent."""
    if not path:
        return ""
    prompt_file = Path(path)
    if not prompt_file.is_file():
        return ""
    try:
        return prompt_file.read_text(encoding="utf-8").strip()
    except OSError as exc:
        logger.warning("Could not read extra prompt %s: %s", prompt_file, exc)
        return ""


def build_schedule_prompt(
    tasks: Sequence[TaskPayload],
    events: Sequence[str],
    today_label: str,
    extra_prompt: str = "",
) -> str:
    formatted_tasks = "\n\n".join(format_task(task) for task in tasks) or "None provided."
    body = (
        SCHEDULE_CONTRACT.replace("{today}", today_label)
        .replace("{tasks}", formatted_tasks)
        .replace("{events}", format_events(events))
    )
    if extra_prompt:
        return f"{extra_prompt}\n\n{body}"
    return body


def build_tips_prompt(topics: List[str]) -> str:
    return TIPS_CONTRACT.replace("{topics}", "\n".join(topics))
