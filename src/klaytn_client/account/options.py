"""
Weighted multi-signature options and their default filler.

A weighted multi-sig account key needs a threshold and one weight per public
key. When a caller leaves them out, an options filler supplies defaults from
the key count.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, List, Optional, Sequence, Union
from pydantic import BaseModel, Field, ValidationError, model_validator

from ..runtime.errors import InvalidInputError, ErrorCode

logger = logging.getLogger(__name__)


class WeightedMultiSigOptions(BaseModel):
    """
    Threshold and per-key weights of a weighted multi-sig key.

    The threshold must be reachable: it may not exceed the sum of weights.
    """
    threshold: int = Field(ge=1, description="Minimum total weight needed to sign")
    weights: List[int] = Field(min_length=1, description="Weight of each key, in key order")

    model_config = {"populate_by_name": True}

    @model_validator(mode="after")
    def validate_threshold(self) -> WeightedMultiSigOptions:
        if any(weight < 1 for weight in self.weights):
            raise ValueError("weights must be positive")
        if self.threshold > sum(self.weights):
            raise ValueError(
                f"Invalid options for AccountKeyWeightedMultiSig: The sum of weights({sum(self.weights)}) "
                f"is less than threshold({self.threshold})."
            )
        return self

    @classmethod
    def coerce(cls, options: Union[Dict[str, Any], WeightedMultiSigOptions]) -> WeightedMultiSigOptions:
        """Accept a plain dict or an options instance."""
        if isinstance(options, cls):
            return options
        if isinstance(options, dict):
            try:
                return cls.model_validate(options)
            except ValidationError as e:
                raise InvalidInputError(f"Invalid weighted multi-sig options: {e}", ErrorCode.INVALID_OPTIONS,
                                        cause=e)
        raise InvalidInputError(f"Invalid weighted multi-sig options type: {type(options).__name__}",
                                ErrorCode.INVALID_OPTIONS)

    def to_dict(self) -> Dict[str, Any]:
        return {"threshold": self.threshold, "weights": list(self.weights)}


OptionsLike = Union[None, Dict[str, Any], WeightedMultiSigOptions]


def _is_missing(options: OptionsLike) -> bool:
    return options is None or (isinstance(options, dict) and len(options) == 0)


class DefaultWeightedOptionsFiller:
    """
    Fills missing weighted multi-sig options.

    The default for n keys is threshold 1 with every weight 1, so any single
    key can sign.
    """

    def default_options(self, key_count: int) -> WeightedMultiSigOptions:
        return WeightedMultiSigOptions(threshold=1, weights=[1] * key_count)

    def fill_for_multisig(self, key_count: int, options: OptionsLike = None) -> WeightedMultiSigOptions:
        """
        Options for a weighted multi-sig key of key_count keys.

        Args:
            key_count: Number of public keys
            options: Caller-supplied options, if any

        Returns:
            WeightedMultiSigOptions
        """
        if _is_missing(options):
            logger.debug(f"Filling default weighted multi-sig options for {key_count} keys")
            return self.default_options(key_count)
        return WeightedMultiSigOptions.coerce(options)

    def fill_for_role_based(self, lengths: Sequence[int],
                            options: Optional[Sequence[OptionsLike]] = None) -> List[Optional[WeightedMultiSigOptions]]:
        """
        Options for each role of a role-based key.

        Only roles holding more than one key get defaults; a role with zero
        or one key and no options stays None.

        Args:
            lengths: Key count per role
            options: Caller-supplied options per role, if any

        Returns:
            One entry per role
        """
        options = list(options) if options is not None else []
        filled: List[Optional[WeightedMultiSigOptions]] = []
        for role, length in enumerate(lengths):
            role_options = options[role] if role < len(options) else None
            if _is_missing(role_options):
                filled.append(self.default_options(length) if length > 1 else None)
            else:
                filled.append(WeightedMultiSigOptions.coerce(role_options))
        return filled


__all__ = ["WeightedMultiSigOptions", "DefaultWeightedOptionsFiller", "OptionsLike"]
