from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional

from sympy import preorder_traversal
from sympy.core.power import Pow
from sympy.parsing.sympy_parser import (
    convert_xor,
    parse_expr,
    standard_transformations,
)

# --- Grading policy ---------------------------------------------------------------
# Absolute tolerance, strict comparison; identical for every difficulty.
ANSWER_TOLERANCE = 1e-4


def is_answer_correct(user_answer: float, correct_answer: float) -> bool:
    return abs(user_answer - correct_answer) < ANSWER_TOLERANCE


# --- Solution step checking -------------------------------------------------------
# Generated solutions are numbered lines of the form "<expression> = <result>".
# The check is advisory: the caller only logs what it finds.

_STEP_RE = re.compile(r"^\s*\d+\s*[.)]\s*(?P<lhs>[^=]+?)\s*=\s*(?P<rhs>[^=]+?)\s*$")
_ALLOWED_RE = re.compile(r"^[0-9+\-*/^().,%\s]{1,200}$")

TRANSFORMS = standard_transformations + (convert_xor,)

_NON_FINITE_MSG = "Expression is not finite (e.g., division by zero)."
_TOO_COMPLEX_MSG = "Expression is too complex."
_INVALID_CHARS_MSG = "Only numbers and + - * / ^ ( ) are allowed in a step."

_MAX_OPS = 200
_MAX_EXPONENT_ABS = 2000


@dataclass
class StepCheck:
    steps: int = 0
    issues: List[str] = field(default_factory=list)
    final_value: Optional[float] = None

    @property
    def ok(self) -> bool:
        return self.steps > 0 and not self.issues


def _assert_expr_complexity(sym: Any) -> None:
    """Reject trees that would be expensive to evaluate, before evaluating them."""
    try:
        if sym.count_ops() > _MAX_OPS:
            raise ValueError(_TOO_COMPLEX_MSG)
        for node in preorder_traversal(sym):
            if isinstance(node, Pow) and node.exp.is_number:
                if abs(float(node.exp.evalf())) > _MAX_EXPONENT_ABS:
                    raise ValueError(_TOO_COMPLEX_MSG)
    except ValueError:
        raise
    except Exception:
        raise ValueError(_TOO_COMPLEX_MSG)


def eval_numeric(expr: str) -> float:
    s = expr.replace(",", "").strip()
    if _ALLOWED_RE.fullmatch(s) is None:
        raise ValueError(_INVALID_CHARS_MSG)
    # "15%" -> "(15/100)"
    s = re.sub(r"(\d+(?:\.\d+)?)\s*%", r"(\1/100)", s)
    if "%" in s:
        raise ValueError(_INVALID_CHARS_MSG)
    try:
        sym = parse_expr(s, transformations=TRANSFORMS, evaluate=False)
    except Exception:
        raise ValueError(_INVALID_CHARS_MSG)
    _assert_expr_complexity(sym)
    try:
        # complex or infinite results (e.g. 1/0 -> zoo) refuse float()
        val = float(sym.evalf())
    except (TypeError, ValueError):
        raise ValueError(_NON_FINITE_MSG)
    if not math.isfinite(val):
        raise ValueError(_NON_FINITE_MSG)
    return val


def _close(a: float, b: float) -> bool:
    # results in the steps are usually rounded, so compare loosely
    return math.isclose(a, b, rel_tol=1e-3, abs_tol=ANSWER_TOLERANCE)


def check_solution_steps(solution: str, correct_answer: float) -> StepCheck:
    check = StepCheck()
    for line in solution.splitlines():
        if not line.strip():
            continue
        m = _STEP_RE.match(line)
        if not m:
            check.issues.append(f"unrecognised step: {line.strip()!r}")
            continue
        check.steps += 1
        try:
            lhs = eval_numeric(m.group("lhs"))
            rhs = eval_numeric(m.group("rhs"))
        except ValueError as e:
            check.issues.append(f"step {check.steps}: {e}")
            # an unreadable last step has no result to compare with the answer
            check.final_value = None
            continue
        if not _close(lhs, rhs):
            check.issues.append(f"step {check.steps}: {m.group('lhs')} is {lhs:g}, not {rhs:g}")
        check.final_value = rhs

    if check.steps == 0:
        check.issues.append("no numbered steps found")
    elif check.final_value is not None and not _close(check.final_value, correct_answer):
        check.issues.append(
            f"final result {check.final_value:g} does not match answer {correct_answer:g}"
        )
    return check
