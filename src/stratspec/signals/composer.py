"""Combine per-indicator votes into one composite action."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import assert_never

import pandas as pd

from stratspec.core.errors import CompositionError
from stratspec.core.types import Action, CompositionMode


@dataclass(frozen=True)
class Composition:
    action: Action
    rationale: str


def _check_count(count: int, mode: CompositionMode) -> None:
    if not 2 <= count <= 3:
        raise CompositionError(f"composites take 2 or 3 votes, got {count}")
    if mode is CompositionMode.MAJORITY and count != 3:
        raise CompositionError(f"majority needs exactly 3 votes, got {count}")


def compose(votes: Sequence[Action], mode: CompositionMode) -> Composition:
    """Compose component *votes* (primary first) under *mode*.

    Raises:
        CompositionError: vote count outside 2..3, or Majority without 3 votes.
    """
    mode = CompositionMode(mode)
    votes = [Action(v) for v in votes]
    _check_count(len(votes), mode)
    match mode:
        case CompositionMode.UNANIMOUS:
            if all(v is Action.BUY for v in votes):
                return Composition(Action.BUY, "all components vote BUY")
            if all(v is Action.SELL for v in votes):
                return Composition(Action.SELL, "all components vote SELL")
            return Composition(Action.HOLD, "components disagree")
        case CompositionMode.PRIMARY_CONFIRMER:
            primary, confirmers = votes[0], votes[1:]
            if primary is Action.HOLD:
                return Composition(Action.HOLD, "primary votes HOLD")
            if primary.opposite() in confirmers:
                return Composition(
                    Action.HOLD, f"a confirmer vetoes the primary {primary}",
                )
            return Composition(primary, f"primary {primary} not vetoed")
        case CompositionMode.MAJORITY:
            buys = votes.count(Action.BUY)
            sells = votes.count(Action.SELL)
            if buys >= 2:
                return Composition(Action.BUY, f"{buys} of 3 vote BUY")
            if sells >= 2:
                return Composition(Action.SELL, f"{sells} of 3 vote SELL")
            return Composition(Action.HOLD, "no two components agree")
        case _:
            assert_never(mode)


def describe_mode(mode: CompositionMode, component_names: Sequence[str]) -> str:
    """One-paragraph description of how *component_names* are combined."""
    names = list(component_names)
    joined = " and ".join(names) if len(names) < 3 else ", ".join(names[:-1]) + f" and {names[-1]}"
    match mode:
        case CompositionMode.UNANIMOUS:
            return (
                f"Unanimous: BUY only when {joined} all vote BUY, SELL only when they "
                "all vote SELL, otherwise HOLD. Confidence is the mean of all component "
                "confidences."
            )
        case CompositionMode.PRIMARY_CONFIRMER:
            primary, confirmers = names[0], names[1:]
            return (
                f"Primary/confirmer: {primary} is the primary signal; "
                f"{' and '.join(confirmers)} may veto it by voting the opposite action. "
                "A primary HOLD is always HOLD; a confirmer HOLD does not block the trade. "
                f"Confidence is the confidence of {primary}."
            )
        case CompositionMode.MAJORITY:
            return (
                f"Majority: {joined} each vote; BUY when at least 2 vote BUY, "
                "SELL when at least 2 vote SELL, otherwise HOLD. Confidence is the mean "
                "confidence of the components on the winning side."
            )
        case _:
            assert_never(mode)


def compose_frame(votes_frame: pd.DataFrame, mode: CompositionMode) -> pd.Series:
    """Compose each row of *votes_frame* (one column per component, primary first)."""
    mode = CompositionMode(mode)
    _check_count(len(votes_frame.columns), mode)
    composed = [compose(list(row), mode).action for row in votes_frame.itertuples(index=False)]
    return pd.Series(composed, index=votes_frame.index, dtype=object)
