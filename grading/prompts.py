"""Rubric prompts for the answer grader."""
from __future__ import annotations

from textwrap import dedent
from typing import Optional

SYSTEM_PROMPT = "You are a concise technical interviewer critic. Output JSON only."

BEHAVIORAL_TEMPLATE = dedent(
    """
    Evaluate the candidate answer using STAR rubric and return JSON ONLY.

    Question: "{question_text}"
    Candidate answer: "{answer}"
    Ideal/notes: "{ideal}"

    Return JSON exactly like:
    {{
      "score": <0-10>,
      "criteria": {{
        "situation_present": true/false,
        "task_present": true/false,
        "action_present": true/false,
        "result_present": true/false,
        "conciseness": <0-5>,
        "suggestions": "<short actionable suggestions>"
      }}
    }}
    """
).strip()

TECHNICAL_TEMPLATE = dedent(
    """
    You are a technical interviewer critic. Evaluate the candidate's answer w.r.t correctness, approach, complexity, and clarity. Return JSON ONLY.

    Question: "{question_text}"
    Candidate answer: "{answer}"
    Ideal/notes: "{ideal}"

    Return JSON exactly like:
    {{
      "score": <0-10>,
      "criteria": {{
        "correctness": <0-5>,
        "approach_clarity": <0-3>,
        "complexity_discussed": true/false,
        "suggestions": "<concise actionable feedback>"
      }}
    }}
    """
).strip()


def build_prompt(
    question_type: str,
    question_text: str,
    answer: str,
    ideal_answer: Optional[str] = None,
) -> str:  # Compose the rubric prompt for one answer
    template = BEHAVIORAL_TEMPLATE if question_type == "behavioral" else TECHNICAL_TEMPLATE
    return template.format(question_text=question_text, answer=answer, ideal=ideal_answer or "")
