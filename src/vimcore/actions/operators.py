"""Operator executor: yank, delete and change over a resolved range."""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Union

from vimcore.buffer import TextDocument, TextEdit
from vimcore.modes.base_mode import ModeContext, ModeResult, VimMode
from vimcore.motions import MotionRange, calculate_object, resolve_motion
from vimcore.runtime.telemetry import span

from .models import MotionAction, ObjectAction

OPERATORS = ("c", "d", "y")

_CHANGE_TO_END = {"w": "e", "W": "E"}


def _charwise_bounds(motion: MotionRange) -> tuple[int, int]:
    motion = motion.normalized()
    end = motion.end + 1 if motion.inclusive else motion.end
    return motion.start, end


async def perform_operation(
    context: ModeContext,
    operator: str,
    motion: MotionRange,
    register: str,
) -> ModeResult:
    """Apply ``operator`` to ``motion`` and write the register it names.

    The register is written before the buffer changes so that a rejected
    edit still leaves the yanked text behind.
    """

    if operator not in OPERATORS:
        raise ValueError(f"Unknown operator '{operator}'")

    doc = context.document()
    start, end = _charwise_bounds(motion)
    with span(
        f"operator::{operator}",
        component="operators",
        metadata={"start": start, "end": end, "linewise": motion.linewise},
    ):
        if motion.linewise:
            return await _linewise(context, doc, operator, start, end, register)
        return await _charwise(context, doc, operator, start, end, register)


async def _charwise(
    context: ModeContext,
    doc: TextDocument,
    operator: str,
    start: int,
    end: int,
    register: str,
) -> ModeResult:
    start, end = doc.clamp_index(start), doc.clamp_index(end)
    if end <= start:
        # nothing addressed: the register keeps its previous contents
        context.move_cursor(start)
        target = VimMode.INSERT if operator == "c" else VimMode.NORMAL
        return ModeResult(consumed=True, switch_to=target)

    context.registers.write(register, False, doc.text[start:end])
    if operator == "y":
        return ModeResult(consumed=True, switch_to=VimMode.NORMAL)

    await context.edit([TextEdit.delete(start, end)])
    context.move_cursor(start)
    target = VimMode.INSERT if operator == "c" else VimMode.NORMAL
    return ModeResult(consumed=True, switch_to=target)


async def _linewise(
    context: ModeContext,
    doc: TextDocument,
    operator: str,
    start: int,
    end: int,
    register: str,
) -> ModeResult:
    first = doc.line_at(start)
    last = doc.line_at(end)
    context.registers.write(register, True, doc.text[first.start : last.end] + "\n")
    if operator == "y":
        return ModeResult(consumed=True, switch_to=VimMode.NORMAL)

    if operator == "c":
        indent = ""
        if context.config.open_line_copies_indent:
            indent = first.text[: first.first_non_blank]
        await context.edit([TextEdit(first.start, last.end, indent)])
        context.move_cursor(first.start + len(indent))
        return ModeResult(consumed=True, switch_to=VimMode.INSERT)

    includes_first = first.number == 0
    includes_last = last.number == doc.line_count - 1
    if includes_first and includes_last:
        edit = TextEdit.delete(0, len(doc))
        landing = 0
    elif includes_last:
        # Take the preceding separator so no empty trailing line is left.
        edit = TextEdit.delete(first.start - 1, last.end)
        landing = first.number - 1
    else:
        edit = TextEdit.delete(first.start, last.end + 1)
        landing = first.number

    await context.edit([edit])
    updated = context.document()
    line = updated.line(min(landing, updated.line_count - 1))
    context.move_cursor(line.start + line.first_non_blank, updated)
    return ModeResult(consumed=True, switch_to=VimMode.NORMAL)


def operator_range(
    context: ModeContext,
    operator: str,
    target: Union[MotionAction, ObjectAction],
    index: int,
) -> Optional[MotionRange]:
    """Range ``target`` covers from ``index`` when used after ``operator``."""

    doc = context.document()
    if isinstance(target, ObjectAction):
        return calculate_object(doc, target, index)

    if operator == "c" and context.config.change_word_to_end:
        motion = _CHANGE_TO_END.get(target.motion)
        if motion is not None:
            target = replace(target, motion=motion)
    return resolve_motion(
        doc, target, index, marks=context.marks, last_find=context.last_find
    )


async def apply_operator(
    context: ModeContext,
    operator: str,
    target: Union[MotionAction, ObjectAction],
    register: str,
) -> ModeResult:
    """Resolve ``target`` at the cursor and run ``operator`` over it.

    An unresolvable target abandons the command without touching the buffer
    or the register.
    """

    motion = operator_range(context, operator, target, context.cursor)
    if motion is None:
        return ModeResult(consumed=True, switch_to=VimMode.NORMAL, status="abandoned")
    return await perform_operation(context, operator, motion, register)


__all__ = ["OPERATORS", "apply_operator", "operator_range", "perform_operation"]
