# ============================================================================
# src/vet_ingestion/extractors/visit_segmenter.py
# ============================================================================
"""
Visit Segmenter

Splits the narrative of one pet block into dated visits. Each line is
classified (blank, date, prescription, exam, text) and fed to a finite
state machine:

    state              line class     -> next state       action
    NO_CURRENT_VISIT   DATE           -> IN_DESCRIPTION    open visit
    NO_CURRENT_VISIT   anything else  -> NO_CURRENT_VISIT  ignore
    IN_DESCRIPTION     TEXT           -> IN_DESCRIPTION    description
    IN_EXAM            TEXT           -> IN_EXAM           exams
    IN_*               EXAM           -> IN_EXAM           exams
    IN_*               PRESCRIPTION   -> IN_DESCRIPTION    prescriptions
    IN_*               DATE           -> IN_DESCRIPTION    close + open visit
    IN_*               BLANK          -> unchanged         raw text only

Every line of an open visit, blank or not, is also kept verbatim in the
visit's raw text. A date line is consumed by the DATE transition: text typed
after the date stays in the raw text only and never changes the state.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from vet_ingestion.constants import patterns
from vet_ingestion.core.context import LineClass, Visit, VisitState
from vet_ingestion.utils.text_normalizer import normalize_date

logger = logging.getLogger(__name__)


class Action(str, Enum):
    IGNORE = "ignore"
    RAW_ONLY = "raw_only"
    OPEN_VISIT = "open_visit"
    APPEND_DESCRIPTION = "append_description"
    APPEND_EXAM = "append_exam"
    APPEND_PRESCRIPTION = "append_prescription"


_NO = VisitState.NO_CURRENT_VISIT
_DESC = VisitState.IN_DESCRIPTION
_EXAM = VisitState.IN_EXAM

TRANSITIONS: Dict[Tuple[VisitState, LineClass], Tuple[VisitState, Action]] = {
    (_NO, LineClass.BLANK): (_NO, Action.IGNORE),
    (_NO, LineClass.DATE): (_DESC, Action.OPEN_VISIT),
    (_NO, LineClass.PRESCRIPTION): (_NO, Action.IGNORE),
    (_NO, LineClass.EXAM): (_NO, Action.IGNORE),
    (_NO, LineClass.TEXT): (_NO, Action.IGNORE),

    (_DESC, LineClass.BLANK): (_DESC, Action.RAW_ONLY),
    (_DESC, LineClass.DATE): (_DESC, Action.OPEN_VISIT),
    (_DESC, LineClass.PRESCRIPTION): (_DESC, Action.APPEND_PRESCRIPTION),
    (_DESC, LineClass.EXAM): (_EXAM, Action.APPEND_EXAM),
    (_DESC, LineClass.TEXT): (_DESC, Action.APPEND_DESCRIPTION),

    (_EXAM, LineClass.BLANK): (_EXAM, Action.RAW_ONLY),
    (_EXAM, LineClass.DATE): (_DESC, Action.OPEN_VISIT),
    (_EXAM, LineClass.PRESCRIPTION): (_DESC, Action.APPEND_PRESCRIPTION),
    (_EXAM, LineClass.EXAM): (_EXAM, Action.APPEND_EXAM),
    (_EXAM, LineClass.TEXT): (_EXAM, Action.APPEND_EXAM),
}

def classify_line(line: str) -> LineClass:
    """Classify one line, stripped or not."""
    stripped = line.strip()
    if not stripped:
        return LineClass.BLANK
    if patterns.DATE_LINE.match(stripped):
        return LineClass.DATE
    return classify_body(stripped)


def classify_body(text: str) -> LineClass:
    """Classify non-empty text that is known not to open a visit."""
    if patterns.PRESCRIPTION_TRIGGER.match(text):
        return LineClass.PRESCRIPTION
    if patterns.EXAM_TRIGGER.search(text):
        return LineClass.EXAM
    return LineClass.TEXT


@dataclass
class _VisitAccumulator:
    visited_at: Optional[str] = None
    description: List[str] = field(default_factory=list)
    exams: List[str] = field(default_factory=list)
    prescriptions: List[str] = field(default_factory=list)
    raw: List[str] = field(default_factory=list)

    def to_visit(self) -> Visit:
        return Visit(
            visited_at=self.visited_at,
            description="\n".join(self.description).strip(),
            exams_text="\n".join(self.exams).strip() if self.exams else None,
            prescriptions_text="\n".join(self.prescriptions).strip() if self.prescriptions else None,
            raw_text="\n".join(self.raw),
        )


class VisitStateMachine:
    """
    Line-driven visit builder.

    Usage:
        machine = VisitStateMachine()
        for line in block.split("\\n"):
            machine.feed(line)
        visits = machine.finish()
    """

    def __init__(self):
        self.state = VisitState.NO_CURRENT_VISIT
        self.current: Optional[_VisitAccumulator] = None
        self.visits: List[Visit] = []

    def feed(self, raw_line: str) -> None:
        line = raw_line.strip()
        self._step(classify_line(line), line, raw_line)

    def finish(self) -> List[Visit]:
        """Close the open visit, if any, and return all visits in order."""
        self._close_current()
        self.state = VisitState.NO_CURRENT_VISIT
        return self.visits

    def _step(self, line_class: LineClass, line: str, raw_line: str) -> None:
        next_state, action = TRANSITIONS[(self.state, line_class)]

        if action == Action.OPEN_VISIT:
            # The whole date line is consumed here
            self._close_current()
            self.current = _VisitAccumulator(visited_at=normalize_date(line))

        if self.current is not None:
            self.current.raw.append(raw_line)

        if action == Action.APPEND_DESCRIPTION:
            self.current.description.append(line)
        elif action == Action.APPEND_EXAM:
            self.current.exams.append(line)
        elif action == Action.APPEND_PRESCRIPTION:
            self.current.prescriptions.append(line)

        self.state = next_state

    def _close_current(self) -> None:
        if self.current is not None:
            self.visits.append(self.current.to_visit())
            self.current = None


def extract_visits(block: str) -> List[Visit]:
    """
    Segment a pet block (or any narrative) into visits.

    Lines before the first date line are ignored. Visit order follows the
    text, not the dates.
    """
    machine = VisitStateMachine()
    for raw_line in (block or "").split("\n"):
        machine.feed(raw_line)
    visits = machine.finish()

    logger.debug(f"Segmented {len(visits)} visits")
    return visits
