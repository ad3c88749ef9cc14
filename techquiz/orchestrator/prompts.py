"""Prompt templates for question generation."""
from typing import Optional


SYSTEM_PROMPTS = {
    "mcq": (
        "You are a JSON generator for multiple-choice questions. "
        "Respond with a JSON array of questions."
    ),
    "technical": (
        "You are a JSON generator for technical interview questions. "
        "Respond with a JSON array of questions."
    ),
    "preflight": (
        "You are a helpful assistant. Respond with exactly what the user asks."
    ),
}

PREFLIGHT_PROMPT = 'Say "test successful" in exactly these words and nothing else.'


def mcq_prompt(topic: str, difficulty: str, count: int, tech_stack: Optional[str] = None) -> str:
    scope = tech_stack or topic
    stack_line = (
        f"The questions MUST directly involve {tech_stack} features, services, components, "
        f"APIs, configurations, or best practices."
        if tech_stack else ""
    )
    return f"""
Generate {count} *highly unique and diverse* multiple-choice question(s) ONLY within the scope of the {scope} technology stack.

STRICT REQUIREMENT:
- The questions MUST be exclusively related to "{scope}".
- Do NOT include questions from any other domain, technology, cloud provider, or general concepts outside "{scope}".
- If a question cannot be written within "{scope}", SKIP it and generate another one within the correct scope.

Difficulty MUST be exactly one of: "Easy", "Medium", "Hard".
Generate questions with {difficulty} difficulty.

{stack_line}

Ensure:
- All questions are unique.
- No repetitions.
- Wide coverage of subtopics inside the SAME technology stack.
- NO CROSS-TOPIC content.

Return ONLY a valid JSON array with this exact structure:
[
  {{
    "question": "Question text",
    "options": {{
      "A": "Option A text",
      "B": "Option B text",
      "C": "Option C text",
      "D": "Option D text"
    }},
    "correct_answer": "A",
    "topic": "{topic}",
    "difficulty": "{difficulty}",
    "tech_stack": "{tech_stack or ''}"
  }}
]
"correct_answer" must be one of "A", "B", "C", "D".
"""


def technical_prompt(
    topic: str,
    difficulty: str,
    count: int,
    tech_stack: Optional[str] = None,
    question_type: Optional[str] = None,
) -> str:
    stack_line = f"Focus on the {tech_stack} technology stack." if tech_stack else ""
    type_line = f"The question type should be {question_type}." if question_type else ""
    return f"""
Generate {count} *highly unique and distinct* technical interview question(s) strictly about the topic: "{topic}" with {difficulty} difficulty.
The difficulty MUST be one of 'Easy', 'Medium', or 'Hard'.
{stack_line}
{type_line}
Ensure all generated questions are strictly confined to the given topic and do not include sub-topics or related concepts outside the exact scope of "{topic}".
The "topic" field of every question must be EXACTLY "{topic}".
Return ONLY a JSON array with this structure:
[
  {{
    "question": "Question text",
    "topic": "{topic}",
    "difficulty": "{difficulty}",
    "tech_stack": "{tech_stack or ''}",
    "question_type": "{question_type or 'short_answer'}"
  }}
]
"""
