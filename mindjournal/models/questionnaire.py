# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the MindJournal project.
# Licensed under the MIT License - see the LICENSE file for details.

import enum
from typing import Dict, List, NamedTuple, Optional

from pydantic import BaseModel


class AssessmentKind(str, enum.Enum):
    phq9 = "PHQ-9"
    gad7 = "GAD-7"
    pcl5 = "PCL-5"


# Seeding / display order
QUESTIONNAIRE_ORDER = [AssessmentKind.phq9, AssessmentKind.gad7, AssessmentKind.pcl5]


class QuestionRecord(NamedTuple):
    id: int
    text: str


class QuestionBank(NamedTuple):
    kind: AssessmentKind
    max_score: int  # per item, min is always 0
    questions: List[QuestionRecord]

    def question_key(self, index: int) -> str:
        """Q{n}_{ASSESSMENT} with n 1-based, e.g. Q3_PHQ9."""
        return f"Q{index + 1}_{self.kind.value.replace('-', '')}"

    def keys(self) -> List[str]:
        return [self.question_key(i) for i in range(len(self.questions))]


def _bank(kind: AssessmentKind, max_score: int, texts: List[str]) -> QuestionBank:
    return QuestionBank(kind, max_score, [QuestionRecord(i + 1, t) for i, t in enumerate(texts)])


# -------------------------
# Question banks
# -------------------------

PHQ9 = _bank(AssessmentKind.phq9, 3, [
    "Little interest or pleasure in doing things",
    "Feeling down, depressed, or hopeless",
    "Trouble falling or staying asleep, or sleeping too much",
    "Feeling tired or having little energy",
    "Poor appetite or overeating",
    "Feeling bad about yourself, or that you are a failure or have let yourself or your family down",
    "Trouble concentrating on things, such as reading the newspaper or watching television",
    "Moving or speaking so slowly that other people could have noticed, or being so fidgety "
    "or restless that you have been moving around a lot more than usual",
    "Thoughts that you would be better off dead, or of hurting yourself in some way",
])

GAD7 = _bank(AssessmentKind.gad7, 3, [
    "Feeling nervous, anxious, or on edge",
    "Not being able to stop or control worrying",
    "Worrying too much about different things",
    "Trouble relaxing",
    "Being so restless that it is hard to sit still",
    "Becoming easily annoyed or irritable",
    "Feeling afraid, as if something awful might happen",
])

PCL5 = _bank(AssessmentKind.pcl5, 4, [
    "Repeated, disturbing, and unwanted memories of the stressful experience",
    "Repeated, disturbing dreams of the stressful experience",
    "Suddenly feeling or acting as if the stressful experience were actually happening again",
    "Feeling very upset when something reminded you of the stressful experience",
    "Having strong physical reactions when something reminded you of the stressful experience",
    "Avoiding memories, thoughts, or feelings related to the stressful experience",
    "Avoiding external reminders of the stressful experience",
    "Trouble remembering important parts of the stressful experience",
    "Having strong negative beliefs about yourself, other people, or the world",
    "Blaming yourself or someone else for the stressful experience or what happened after it",
    "Having strong negative feelings such as fear, horror, anger, guilt, or shame",
    "Loss of interest in activities that you used to enjoy",
    "Feeling distant or cut off from other people",
    "Trouble experiencing positive feelings",
    "Irritable behavior, angry outbursts, or acting aggressively",
    "Taking too many risks or doing things that could cause you harm",
    "Being \"superalert\" or watchful or on guard",
    "Feeling jumpy or easily startled",
    "Having difficulty concentrating",
    "Trouble falling or staying asleep",
])

QUESTION_BANKS: Dict[AssessmentKind, QuestionBank] = {b.kind: b for b in (PHQ9, GAD7, PCL5)}


def get_bank(name: str) -> Optional[QuestionBank]:
    try:
        return QUESTION_BANKS[AssessmentKind(name)]
    except ValueError:
        return None


class QuestionItem(BaseModel):
    id: int
    text: str
    score: Optional[float] = None


class Questionnaire(BaseModel):
    """Stored at users/{uid}/sessions/{sid}/questions/{assessment}."""

    assessment: AssessmentKind
    questions: Dict[str, QuestionItem]

    @classmethod
    def from_snapshot(cls, snapshot):
        data = snapshot.to_dict() or {}
        return cls(assessment=snapshot.id, questions=data.get("questions", {}))


def build_questionnaire_items() -> Dict[str, Dict[str, dict]]:
    """Fresh questionnaire structure for a new session, every score unset."""
    result = {}
    for kind in QUESTIONNAIRE_ORDER:
        bank = QUESTION_BANKS[kind]
        result[kind.value] = {
            bank.question_key(i): {"id": q.id, "text": q.text, "score": None}
            for i, q in enumerate(bank.questions)
        }
    return result
