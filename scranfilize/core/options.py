import math
import os
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from scranfilize.core.errors import OptionError

DEFAULT_FLIP_PROBABILITY = 0.01
DEFAULT_RELATIVE_WINDOW = 0.01
DEFAULT_ABSOLUTE_WINDOW = 1.0


def _valid_real(f: float) -> bool:
    """Rejects non-finite values and magnitudes too extreme to be intended."""
    if math.isnan(f) or math.isinf(f):
        return False
    if f < 0 and (f < -1e150 or f > -1e-150):
        return False
    if f > 0 and (f > 1e150 or f < 1e-150):
        return False
    return True


def derive_seed() -> int:
    """Mixes process time and pid into a 32-bit seed."""
    t = (8526563 * int(os.times().elapsed * 100)) & 0xFFFFFFFFFFFFFFFF
    p = (3944621 * os.getpid()) & 0xFFFFFFFFFFFFFFFF
    tmp = (t + p) & 0xFFFFFFFFFFFFFFFF
    return (tmp & 0xFFFFFFFF) ^ (tmp >> 32)


class ScrambleOptions(BaseModel):
    """
    Option values consumed by the scrambler.

    ``None`` (or a negative real) means "use the default"; call
    :meth:`resolved` to obtain a copy with every default filled in.
    """
    model_config = ConfigDict(frozen=True)

    seed: Optional[int] = Field(default=None, ge=0)
    permute_variables: bool = False
    permute_clauses: bool = False
    reverse_variables: bool = False
    reverse_clauses: bool = False
    literal_flip_probability: Optional[float] = Field(default=None, le=1.0)
    variable_move_window: Optional[float] = None
    clause_move_window: Optional[float] = None
    absolute_windows: bool = False
    force: bool = False

    @field_validator("literal_flip_probability", "variable_move_window", "clause_move_window")
    @classmethod
    def check_real(cls, v: Optional[float], info) -> Optional[float]:
        if v is not None and not _valid_real(v):
            raise ValueError(f"invalid value {v!r} for '{info.field_name}'")
        return v

    @model_validator(mode="after")
    def check_conflicts(self) -> "ScrambleOptions":
        if self.permute_variables:
            if self.reverse_variables:
                raise ValueError("can not combine '-p' and '-r'")
            if self._given(self.variable_move_window):
                raise ValueError("can not combine '-p' and '-v'")
            if self.absolute_windows:
                raise ValueError("can not combine '-p' and '-a'")
        if self.permute_clauses:
            if self.reverse_clauses:
                raise ValueError("can not combine '-P' and '-R'")
            if self._given(self.clause_move_window):
                raise ValueError("can not combine '-P' and '-c'")
            if self.absolute_windows:
                raise ValueError("can not combine '-P' and '-a'")
        return self

    @staticmethod
    def _given(value: Optional[float]) -> bool:
        return value is not None and value >= 0

    @property
    def default_window(self) -> float:
        return DEFAULT_ABSOLUTE_WINDOW if self.absolute_windows else DEFAULT_RELATIVE_WINDOW

    def resolved(self) -> "ScrambleOptions":
        """Returns a copy where seed, flip probability and windows are concrete."""
        updates: dict = {}
        if self.seed is None:
            updates["seed"] = derive_seed()
        if not self._given(self.literal_flip_probability):
            updates["literal_flip_probability"] = DEFAULT_FLIP_PROBABILITY
        if not self._given(self.variable_move_window):
            updates["variable_move_window"] = self.default_window
        if not self._given(self.clause_move_window):
            updates["clause_move_window"] = self.default_window
        return self.model_copy(update=updates)


def make_options(**kwargs: Any) -> ScrambleOptions:
    """Builds validated options, converting pydantic failures to OptionError."""
    try:
        return ScrambleOptions(**kwargs)
    except ValidationError as e:
        messages = "; ".join(err["msg"].removeprefix("Value error, ") for err in e.errors())
        raise OptionError(messages) from e
