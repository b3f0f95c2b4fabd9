"""
Schedule conflict detection and improvement suggestions.

Two interchangeable backends implement ScheduleAdvisor:

- GeminiScheduleAdvisor asks a hosted model through string-templated prompts.
  Its answers are non-deterministic and the service may be unavailable; every
  failure surfaces as AdvisorError.
- RuleBasedScheduleAdvisor reads the published Markdown grid directly.

Both check the same three categories (faculty, room, section) and both skip
the faculty check for the "NF" (No Faculty) placeholder. Both also answer
room availability questions, and neither consults anything when no schedule
has been generated yet: every room is then reported Available.
"""

import logging
import re
from abc import ABC, abstractmethod
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Tuple

from google import genai
from google.genai import types
from pydantic import ValidationError

from models.schemas import (
    CheckConflictInput,
    CheckConflictOutput,
    CheckRoomAvailabilityInput,
    CheckRoomAvailabilityOutput,
    NewClass,
    RoomStatus,
    SuggestImprovementsInput,
    SuggestImprovementsOutput,
)

logger = logging.getLogger(__name__)

NO_FACULTY = "NF"
SCHEDULE_PLACEHOLDER = "Your generated schedule will appear here..."
WEEKDAYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


class AdvisorError(Exception):
    """The advisor could not produce an answer."""


class ScheduleAdvisor(ABC):
    @abstractmethod
    def check_conflict(self, request: CheckConflictInput) -> CheckConflictOutput:
        ...

    @abstractmethod
    def suggest_improvements(self, request: SuggestImprovementsInput) -> SuggestImprovementsOutput:
        ...

    @abstractmethod
    def check_room_availability(self, request: CheckRoomAvailabilityInput) -> CheckRoomAvailabilityOutput:
        ...


def _is_no_faculty(faculty: str) -> bool:
    return faculty.strip().upper() == NO_FACULTY


def no_schedule_availability(request: CheckRoomAvailabilityInput) -> Optional[CheckRoomAvailabilityOutput]:
    """Every room is free when there is no schedule yet; None when there is one to check."""
    schedule = request.schedule
    if schedule.strip() and SCHEDULE_PLACEHOLDER not in schedule:
        return None
    return CheckRoomAvailabilityOutput(
        availability=[
            RoomStatus(name=room, status="Available", reason="No schedule provided to check against.")
            for room in request.rooms_to_check
        ],
        summary=f"{len(request.rooms_to_check)} rooms are available as no schedule has been generated yet.",
    )


# ===========================
# Hosted model backend
# ===========================

CONFLICT_SYSTEM_INSTRUCTION = (
    "You are a schedule conflict detector for a school timetable. "
    "Answer with a single JSON object and nothing else."
)

CONFLICT_PROMPT_TEMPLATE = """Given a current schedule in Markdown format and a new class to add, determine if there is a conflict.

A conflict exists if:
1. **Faculty Conflict**: The faculty member ('{faculty}') is already assigned to another class in any section at the same time ('{time_slot}') on the same day ('{day}'). IMPORTANT: If the faculty is 'NF' (No Faculty), skip this check as there is no faculty conflict.
2. **Room Conflict**: The room ('{room}') is already occupied by another class in any section at the same time ('{time_slot}') on the same day ('{day}').
3. **Section Conflict**: The section ('{section}') is already assigned to a class at the same time ('{time_slot}') on the same day ('{day}').

**Current Schedule:**
```markdown
{current_schedule}
```

**New class to check:**
- Subject: {subject}
- Faculty: {faculty}
- Room: {room}
- Day: {day}
- Time: {time_slot}
- Section: {section}

Respond with JSON of the form {{"isConflict": true|false, "reason": "..."}}.
If you find a conflict, set "isConflict" to true and give a clear, concise reason such as
"Faculty Conflict: Dr. Grant is already teaching Physics in Section B at this time."
If there are no conflicts, set "isConflict" to false and omit "reason"."""

IMPROVEMENT_SYSTEM_INSTRUCTION = (
    "You are a schedule optimization expert. "
    "Answer with a single JSON object and nothing else."
)

IMPROVEMENT_PROMPT_TEMPLATE = """Review the provided schedule details and suggest improvements based on the identified conflicts, inefficiencies, and opportunities for optimization.

Schedule Details: {schedule_details}
Constraints: {constraints}

Respond with JSON of the form {{"suggestedImprovements": "...", "rationale": "..."}} where
"suggestedImprovements" is a detailed list of suggested changes and "rationale" explains why each one is suggested."""

AVAILABILITY_SYSTEM_INSTRUCTION = (
    "You are an assistant that checks room availability against a school timetable. "
    "Answer with a single JSON object and nothing else."
)

AVAILABILITY_PROMPT_TEMPLATE = """You will be given a list of rooms to check, a time range, and specific days or a specific date. You will also receive the current schedule.

Analyze the schedule and determine for each of the requested rooms whether it is 'Available', 'Unavailable', or 'Partially Available' during the specified time slot on the given days/date.

- **If 'Available'**: The room is not booked during the specified time. In the 'reason' field, state until what time it remains free, e.g. "Available until 15:00". If it is free for the rest of the working day, state "Available for the rest of the day".
- **If 'Unavailable'**: The room is fully booked during the specified time. In the 'reason' field, give the class name, section, year and exact booking time, e.g. "Booked for Physics 101 (Year 2, Section A) from 10:00-11:00".
- **If 'Partially Available'**: The room is booked for some, but not all, of the specified time or days. Explain the conflict in the reason.

Rooms to check: {rooms}
Time range: From {start_time} to {end_time}
{when}

Current Schedule to analyze:
```
{schedule}
```

Respond with JSON of the form {{"availability": [{{"name": "...", "status": "Available"|"Unavailable"|"Partially Available", "reason": "..."}}], "summary": "..."}}.
The summary should be a concise overview such as "3 of 5 rooms are fully available."."""


class GeminiScheduleAdvisor(ScheduleAdvisor):
    """Advisor backed by the Gemini API (google-genai)."""

    def __init__(self, api_key: Optional[str], model: str = "gemini-2.5-flash", temperature: float = 0.2):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self._client: Optional[genai.Client] = None

    def _get_client(self) -> genai.Client:
        if self._client is None:
            if not self.api_key:
                raise AdvisorError("Gemini API key is not configured. Set GEMINI_API_KEY in the environment.")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def _generate(self, prompt: str, system_instruction: str) -> str:
        client = self._get_client()
        try:
            response = client.models.generate_content(
                model=self.model,
                contents=prompt,
                config=types.GenerateContentConfig(
                    system_instruction=system_instruction,
                    temperature=self.temperature,
                    response_mime_type="application/json",
                ),
            )
        except Exception as e:
            logger.error(f"Gemini request failed: {str(e)}", exc_info=True)
            raise AdvisorError("The schedule advisor is temporarily unavailable. Please try again.") from e

        text = getattr(response, "text", None)
        if not text:
            raise AdvisorError("The schedule advisor returned an empty response.")
        return text

    def check_conflict(self, request: CheckConflictInput) -> CheckConflictOutput:
        # The first class of a schedule cannot conflict with anything
        if not request.current_schedule.strip():
            return CheckConflictOutput(is_conflict=False)

        new_class = request.new_class
        prompt = CONFLICT_PROMPT_TEMPLATE.format(
            current_schedule=request.current_schedule,
            subject=new_class.subject,
            faculty=new_class.faculty,
            room=new_class.room,
            day=new_class.day,
            time_slot=new_class.time_slot,
            section=new_class.section,
        )
        text = self._generate(prompt, CONFLICT_SYSTEM_INSTRUCTION)
        try:
            return CheckConflictOutput.model_validate_json(text)
        except ValidationError as e:
            logger.warning(f"Unparsable conflict verdict: {text!r}")
            raise AdvisorError("The schedule advisor returned an invalid answer.") from e

    def suggest_improvements(self, request: SuggestImprovementsInput) -> SuggestImprovementsOutput:
        prompt = IMPROVEMENT_PROMPT_TEMPLATE.format(
            schedule_details=request.schedule_details,
            constraints=request.constraints or "",
        )
        text = self._generate(prompt, IMPROVEMENT_SYSTEM_INSTRUCTION)
        try:
            return SuggestImprovementsOutput.model_validate_json(text)
        except ValidationError as e:
            logger.warning(f"Unparsable improvement suggestions: {text!r}")
            raise AdvisorError("The schedule advisor returned an invalid answer.") from e

    def check_room_availability(self, request: CheckRoomAvailabilityInput) -> CheckRoomAvailabilityOutput:
        answer = no_schedule_availability(request)
        if answer is not None:
            return answer

        if request.date:
            when = f"Date: {request.date}"
        else:
            when = f"Days: {', '.join(request.days or [])}"
        prompt = AVAILABILITY_PROMPT_TEMPLATE.format(
            rooms=", ".join(request.rooms_to_check),
            start_time=request.start_time,
            end_time=request.end_time,
            when=when,
            schedule=request.schedule,
        )
        text = self._generate(prompt, AVAILABILITY_SYSTEM_INSTRUCTION)
        try:
            return CheckRoomAvailabilityOutput.model_validate_json(text)
        except ValidationError as e:
            logger.warning(f"Unparsable room availability: {text!r}")
            raise AdvisorError("The schedule advisor returned an invalid answer.") from e


# ===========================
# Rule-based backend
# ===========================

# "Data Structures (AB) in Room 101"
_CELL_PATTERN = re.compile(r"^(?P<subject>.+?)\s*\((?P<faculty>[^()]+)\)\s+in\s+(?P<room>.+)$")


@dataclass
class ScheduledClass:
    title: str       # "## " heading, e.g. "B.Tech CSE - Year 1"
    section: str     # "### " heading, falls back to the title
    day: str
    time_slot: str
    subject: str
    faculty: str
    room: str


def parse_schedule(markdown: str) -> List[ScheduledClass]:
    """
    Extract every filled cell from the published grid.

    Layout:
        ## Program - Year
        ### Section A
        | Day | 09:00 - 10:00 | ... |
        |---|---|...|
        | Monday | Subject (FAC) in Room | - | Break |
    """
    classes = []
    title = ""
    section = ""
    slots: List[str] = []

    for line in markdown.splitlines():
        stripped = line.strip()
        if stripped.startswith("### "):
            section = stripped[4:].strip()
            slots = []
            continue
        if stripped.startswith("## "):
            title = stripped[3:].strip()
            section = title
            slots = []
            continue
        if not stripped.startswith("|"):
            continue

        cells = [cell.strip() for cell in stripped.strip("|").split("|")]
        if cells[0].lower() == "day":
            slots = cells[1:]
            continue
        if all(set(cell) <= set("-: ") for cell in cells):
            continue
        if not slots:
            continue

        day = cells[0]
        for time_slot, cell in zip(slots, cells[1:]):
            match = _CELL_PATTERN.match(cell)
            if not match:
                continue  # "-", "Break" or free text
            classes.append(ScheduledClass(
                title=title,
                section=section,
                day=day,
                time_slot=time_slot,
                subject=match.group("subject").strip(),
                faculty=match.group("faculty").strip(),
                room=match.group("room").strip(),
            ))
    return classes


def _same(a: str, b: str) -> bool:
    return a.strip().casefold() == b.strip().casefold()


def find_conflict(classes: List[ScheduledClass], new_class: NewClass) -> Optional[str]:
    """Reason for the first clash with new_class, or None."""
    concurrent = [
        c for c in classes
        if _same(c.day, new_class.day) and _same(c.time_slot, new_class.time_slot)
    ]
    if not _is_no_faculty(new_class.faculty):
        for c in concurrent:
            if _same(c.faculty, new_class.faculty):
                return (f"Faculty Conflict: {new_class.faculty} is already teaching {c.subject} "
                        f"in {c.section} at this time.")
    for c in concurrent:
        if _same(c.room, new_class.room):
            return f"Room Conflict: {new_class.room} is already occupied by {c.subject} for {c.section} at this time."
    for c in concurrent:
        if _same(c.section, new_class.section):
            return f"Section Conflict: {new_class.section} already has {c.subject} at this time."
    return None


def find_double_bookings(classes: List[ScheduledClass]) -> List[str]:
    """Describe every faculty member or room booked twice in the same slot."""
    by_slot: Dict[Tuple[str, str], List[ScheduledClass]] = defaultdict(list)
    for c in classes:
        by_slot[(c.day.casefold(), c.time_slot.casefold())].append(c)

    findings = []
    for group in by_slot.values():
        faculty_groups: Dict[str, List[ScheduledClass]] = defaultdict(list)
        room_groups: Dict[str, List[ScheduledClass]] = defaultdict(list)
        for c in group:
            if not _is_no_faculty(c.faculty):
                faculty_groups[c.faculty.casefold()].append(c)
            room_groups[c.room.casefold()].append(c)

        for clashing in faculty_groups.values():
            if len(clashing) > 1:
                first = clashing[0]
                places = ", ".join(f"{c.subject} in {c.section}" for c in clashing)
                findings.append(f"Faculty {first.faculty} is double-booked on {first.day} at "
                                f"{first.time_slot} ({places}). Move one of these classes to a free slot.")
        for clashing in room_groups.values():
            if len(clashing) > 1:
                first = clashing[0]
                places = ", ".join(f"{c.subject} for {c.section}" for c in clashing)
                findings.append(f"Room {first.room} is double-booked on {first.day} at "
                                f"{first.time_slot} ({places}). Assign a different room to one of them.")
    return findings


_TIME_PATTERN = re.compile(r"^\s*(?P<hour>\d{1,2}):(?P<minute>\d{2})\s*(?P<meridiem>[AaPp][Mm])?\s*$")


def to_minutes(value: str) -> Optional[int]:
    """Minutes since midnight for "09:30", "9:30 AM" or "2:00 PM"; None if unreadable."""
    match = _TIME_PATTERN.match(value)
    if not match:
        return None
    hour, minute = int(match.group("hour")), int(match.group("minute"))
    meridiem = (match.group("meridiem") or "").upper()
    if meridiem == "PM" and hour < 12:
        hour += 12
    elif meridiem == "AM" and hour == 12:
        hour = 0
    return hour * 60 + minute


def slot_bounds(time_slot: str) -> Optional[Tuple[int, int]]:
    """(start, end) minutes of a "09:00 - 10:00" column heading."""
    parts = time_slot.split("-")
    if len(parts) != 2:
        return None
    start, end = to_minutes(parts[0]), to_minutes(parts[1])
    if start is None or end is None or end <= start:
        return None
    return start, end


def _format_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def _covers(intervals: List[Tuple[int, int]], start: int, end: int) -> bool:
    """True if the union of intervals covers [start, end)."""
    reached = start
    for low, high in sorted(intervals):
        if low > reached:
            return False
        reached = max(reached, high)
        if reached >= end:
            return True
    return reached >= end


def days_to_check(request: CheckRoomAvailabilityInput, classes: List[ScheduledClass]) -> List[str]:
    """The weekday of the date, else the requested days, else every day in the schedule."""
    if request.date:
        try:
            return [WEEKDAYS[date.fromisoformat(request.date).weekday()]]
        except ValueError:
            logger.warning(f"Ignoring unreadable date {request.date!r} in availability check")
    if request.days:
        return list(request.days)
    seen: List[str] = []
    for c in classes:
        if c.day not in seen:
            seen.append(c.day)
    return seen


def room_status(classes: List[ScheduledClass], room: str, days: List[str], start: int, end: int) -> RoomStatus:
    clashes: List[Tuple[str, ScheduledClass]] = []
    fully_booked_days = 0
    free_until: Optional[int] = None

    for day in days:
        booked = []
        for c in classes:
            if not (_same(c.room, room) and _same(c.day, day)):
                continue
            bounds = slot_bounds(c.time_slot)
            if bounds is None:
                continue
            low, high = bounds
            if low < end and high > start:
                booked.append(bounds)
                clashes.append((day, c))
            elif low >= end and (free_until is None or low < free_until):
                free_until = low
        if booked and _covers(booked, start, end):
            fully_booked_days += 1

    if not clashes:
        if free_until is None:
            return RoomStatus(name=room, status="Available", reason="Available for the rest of the day")
        return RoomStatus(name=room, status="Available", reason=f"Available until {_format_minutes(free_until)}")

    details = "; ".join(
        f"Booked for {c.subject} ({c.title}, {c.section}) from {c.time_slot}"
        + (f" on {day}" if len(days) > 1 else "")
        for day, c in clashes
    )
    if fully_booked_days == len(days):
        return RoomStatus(name=room, status="Unavailable", reason=details)
    return RoomStatus(name=room, status="Partially Available", reason=details)


class RuleBasedScheduleAdvisor(ScheduleAdvisor):
    """Deterministic advisor working on the Markdown grid produced by the schedule editor."""

    def check_conflict(self, request: CheckConflictInput) -> CheckConflictOutput:
        if not request.current_schedule.strip():
            return CheckConflictOutput(is_conflict=False)
        reason = find_conflict(parse_schedule(request.current_schedule), request.new_class)
        if reason:
            return CheckConflictOutput(is_conflict=True, reason=reason)
        return CheckConflictOutput(is_conflict=False)

    def suggest_improvements(self, request: SuggestImprovementsInput) -> SuggestImprovementsOutput:
        findings = find_double_bookings(parse_schedule(request.schedule_details))
        if findings:
            suggestions = "\n".join(f"- {finding}" for finding in findings)
            rationale = ("Each suggestion resolves a double booking: a faculty member or room "
                         "cannot be in two classes during the same time slot.")
        else:
            suggestions = "No double bookings were found in the schedule."
            rationale = "Every faculty member and room is used at most once per time slot."
        if request.constraints:
            rationale += f" Constraints considered: {request.constraints.strip()}"
        return SuggestImprovementsOutput(suggested_improvements=suggestions, rationale=rationale)

    def check_room_availability(self, request: CheckRoomAvailabilityInput) -> CheckRoomAvailabilityOutput:
        answer = no_schedule_availability(request)
        if answer is not None:
            return answer

        start, end = to_minutes(request.start_time), to_minutes(request.end_time)
        if start is None or end is None or end <= start:
            raise ValueError("Start and end times must be HH:MM with the end after the start.")

        classes = parse_schedule(request.schedule)
        days = days_to_check(request, classes)
        availability = [room_status(classes, room, days, start, end) for room in request.rooms_to_check]
        available = sum(1 for status in availability if status.status == "Available")
        return CheckRoomAvailabilityOutput(
            availability=availability,
            summary=f"{available} of {len(availability)} rooms are fully available.",
        )


def build_advisor(backend: str, api_key: Optional[str] = None, model: str = "gemini-2.5-flash",
                  temperature: float = 0.2) -> ScheduleAdvisor:
    if backend == "rules":
        return RuleBasedScheduleAdvisor()
    if backend == "gemini":
        return GeminiScheduleAdvisor(api_key=api_key, model=model, temperature=temperature)
    raise ValueError(f"Unknown advisor backend: {backend!r}")
