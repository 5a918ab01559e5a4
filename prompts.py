# Prompt text sent to the generation service.
# Difficulty only changes the problem prompt; grading tolerance is the same for all tiers.

from __future__ import annotations

from typing import Dict

DIFFICULTIES = ("Easy", "Medium", "Hard")
DEFAULT_DIFFICULTY = "Medium"

PROBLEM_SYSTEM_INSTRUCTION = (
    "You are a specialized math problem generator. Your sole task is to generate a single "
    "Primary 5 (Singapore equivalent) math word problem and its final answer. The generated "
    "problem MUST involve numerical calculations and be solvable. Respond only with the "
    "requested JSON format, using standard text and ASCII characters for fractions "
    "(e.g., 3/5) to ensure readability."
)

DIFFICULTY_PROFILES: Dict[str, str] = {
    "Easy": (
        "Difficulty: Easy. The problem must be solvable in a single step using one basic "
        "operation (+, -, * or /) on small whole numbers. No fractions, decimals or units "
        "conversion."
    ),
    "Medium": (
        "Difficulty: Medium. The problem must take 2-3 steps and mix operations "
        "(addition, subtraction, multiplication, division). It may include simple "
        "fractions such as 1/2, 1/4 or 3/5."
    ),
    "Hard": (
        "Difficulty: Hard. The problem must be multi-step and require a unit conversion "
        "(e.g., cm to m, g to kg, minutes to hours). It must combine reasoning with "
        "fractions, decimals and percentages."
    ),
}


def build_problem_prompt(difficulty: str = DEFAULT_DIFFICULTY) -> str:
    try:
        profile = DIFFICULTY_PROFILES[difficulty]
    except KeyError:
        raise ValueError(f"unknown difficulty: {difficulty!r}") from None
    return f"Generate a new math word problem.\n{profile}"


def build_solution_prompt(problem_text: str, correct_answer: float) -> str:
    return f"""
You are a math solver. Your task is to provide the full, step-by-step solution to the problem.

Instructions:
1. Output the steps as a numbered list, showing only the calculations strictly required to reach the final answer.
2. ONLY use numbers and basic arithmetic symbols (+, -, *, /) in the steps.
3. DO NOT use any words, descriptions, or labels.
4. Use the following format for each step: <calculation> = <result>.
5. The result of the final step must exactly match the Correct Answer provided.

Example of a two-step solution:
1. 3.5 - 0.8 = 2.7
2. 2.7 / 5 = 0.54

Problem: {problem_text}
Correct Answer: {correct_answer}
""".strip()


def build_feedback_prompt(
    problem_text: str, correct_answer: float, user_answer: float, is_correct: bool
) -> str:
    result = "CORRECT" if is_correct else "INCORRECT"
    return f"""
You are an encouraging and helpful math tutor. Generate personalized feedback based on the user's attempt.

Instructions:
1. Keep the feedback concise (max 3 sentences).
2. Maintain a positive and supportive tone, regardless of correctness.
3. If the answer is correct, give a simple confirmation and praise.
4. If the answer is incorrect, gently explain a small hint or suggest a step they might have missed without giving away the full solution.

Problem: {problem_text}
Correct Answer: {correct_answer}
User's Answer: {user_answer}
Result: {result}
""".strip()
