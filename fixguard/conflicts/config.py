"""
Configuration for fix-operation conflict resolution.

Provides the resolution options, the priority score tables, and
loaders for batch and weight files.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Optional, Union

import yaml

from fixguard.conflicts.models import (
    ConflictStrategy,
    FixAction,
    FixDifficulty,
    Issue,
    OperationWithIssue,
)

logger = logging.getLogger(__name__)

PriorityFunction = Callable[[Issue], int]


class BatchLoadError(Exception):
    """Raised when a batch or configuration file cannot be loaded."""


def _default_difficulty_scores() -> dict[FixDifficulty, int]:
    return {
        FixDifficulty.TRIVIAL: 100,
        FixDifficulty.SAFE: 50,
        FixDifficulty.RISKY: 10,
    }


def _default_action_scores() -> dict[FixAction, int]:
    return {
        FixAction.DELETE_LINE: 30,
        FixAction.REPLACE_LINE: 25,
        FixAction.REPLACE_RANGE: 20,
        FixAction.INSERT_BEFORE: 15,
        FixAction.INSERT_AFTER: 15,
        FixAction.EXTRACT_FUNCTION: 10,
        FixAction.WRAP_FUNCTION: 10,
        FixAction.SPLIT_FILE: 5,
        FixAction.MOVE_FILE: 5,
        FixAction.CREATE_BARREL: 5,
    }


@dataclass
class PriorityWeights:
    """
    Score tables used by the default priority formula.

    Higher scores mean more important to apply. Difficulty dominates,
    simple local actions beat structural ones, and narrow ranges earn a
    bonus of ``specificity_ceiling - range_size`` (never negative).
    """

    difficulty: dict[FixDifficulty, int] = field(default_factory=_default_difficulty_scores)
    action: dict[FixAction, int] = field(default_factory=_default_action_scores)
    specificity_ceiling: int = 20

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "difficulty": {k.value: v for k, v in self.difficulty.items()},
            "action": {k.value: v for k, v in self.action.items()},
            "specificity_ceiling": self.specificity_ceiling,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PriorityWeights":
        """
        Create from dictionary.

        Tables are merged over the defaults, so a file only needs to
        list the scores it changes.
        """
        weights = cls()
        for key, value in (data.get("difficulty") or {}).items():
            weights.difficulty[FixDifficulty(key)] = int(value)
        for key, value in (data.get("action") or {}).items():
            weights.action[FixAction(key)] = int(value)
        weights.specificity_ceiling = int(
            data.get("specificity_ceiling", weights.specificity_ceiling)
        )
        return weights


@dataclass
class ConflictOptions:
    """
    Options for one conflict resolution run.

    ``strategy`` is normally a ConflictStrategy. Any other value is kept
    as given and resolves every conflict it governs by skipping both
    operations.
    """

    strategy: Union[ConflictStrategy, str] = ConflictStrategy.SKIP_LOWER_PRIORITY

    # Adjacent ranges are allowed unless this is set
    treat_adjacent_as_conflict: bool = False

    # Replaces the default priority formula entirely when set
    priority_fn: Optional[PriorityFunction] = None

    weights: PriorityWeights = field(default_factory=PriorityWeights)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary (the priority function is not serialized)."""
        strategy = self.strategy
        return {
            "strategy": strategy.value if isinstance(strategy, ConflictStrategy) else strategy,
            "treat_adjacent_as_conflict": self.treat_adjacent_as_conflict,
            "custom_priority": self.priority_fn is not None,
            "weights": self.weights.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ConflictOptions":
        """Create from dictionary."""
        return cls(
            strategy=parse_strategy(data.get("strategy", "skip-lower-priority")),
            treat_adjacent_as_conflict=data.get("treat_adjacent_as_conflict", False),
            weights=PriorityWeights.from_dict(data.get("weights") or {}),
        )


def parse_strategy(value: Union[ConflictStrategy, str]) -> Union[ConflictStrategy, str]:
    """
    Parse a strategy name.

    Unknown names are returned unchanged; the resolver warns about them
    and treats them as "skip both" rather than failing the run.
    """
    try:
        return ConflictStrategy(value)
    except ValueError:
        return value


def _read_structured_file(path: Path) -> Any:
    """Read a JSON or YAML file."""
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise BatchLoadError(f"Cannot read {path}: {e}") from e

    try:
        if path.suffix.lower() == ".json":
            return json.loads(text)
        return yaml.safe_load(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise BatchLoadError(f"Cannot parse {path}: {e}") from e


def load_priority_weights(path: Union[str, Path]) -> PriorityWeights:
    """
    Load priority tables from a YAML or JSON file.

    Args:
        path: File containing ``difficulty``, ``action`` and
            ``specificity_ceiling`` entries

    Returns:
        PriorityWeights merged over the defaults
    """
    data = _read_structured_file(Path(path)) or {}
    if not isinstance(data, dict):
        raise BatchLoadError(f"Priority weights in {path} must be a mapping")
    try:
        return PriorityWeights.from_dict(data)
    except (TypeError, ValueError) as e:
        raise BatchLoadError(f"Invalid priority weights in {path}: {e}") from e


def load_batch(path: Union[str, Path]) -> list[OperationWithIssue]:
    """
    Load a batch of (issue, operation) pairs from a JSON or YAML file.

    The file holds either a list of ``{issue, operation}`` objects or a
    mapping with such a list under ``operations``.

    Args:
        path: Batch file

    Returns:
        Parsed pairs in file order
    """
    data = _read_structured_file(Path(path))
    if isinstance(data, dict):
        data = data.get("operations", [])
    if not isinstance(data, list):
        raise BatchLoadError(f"Batch in {path} must be a list of operations")

    try:
        batch = [OperationWithIssue.from_dict(item) for item in data]
    except (AttributeError, TypeError, ValueError) as e:
        raise BatchLoadError(f"Invalid operation in {path}: {e}") from e

    logger.debug(f"Loaded {len(batch)} operations from {path}")
    return batch


def options_from_settings(settings: Any) -> ConflictOptions:
    """
    Build conflict options from application settings.

    Args:
        settings: fixguard Settings instance

    Returns:
        ConflictOptions reflecting the settings
    """
    weights = PriorityWeights()
    if settings.priority_config_path:
        weights = load_priority_weights(settings.priority_config_path)

    return ConflictOptions(
        strategy=parse_strategy(settings.default_strategy),
        treat_adjacent_as_conflict=settings.treat_adjacent_as_conflict,
        weights=weights,
    )


# Global options instance
_conflict_options: Optional[ConflictOptions] = None


def get_conflict_options() -> ConflictOptions:
    """
    Get the global conflict options.

    Creates default options if none exist.

    Returns:
        ConflictOptions instance
    """
    global _conflict_options
    if _conflict_options is None:
        _conflict_options = ConflictOptions()
    return _conflict_options


def set_conflict_options(options: Optional[ConflictOptions]):
    """
    Set the global conflict options.

    Args:
        options: ConflictOptions to use globally, or None to reset
    """
    global _conflict_options
    _conflict_options = options


def configure_conflicts(
    strategy: Union[ConflictStrategy, str] = ConflictStrategy.SKIP_LOWER_PRIORITY,
    treat_adjacent_as_conflict: bool = False,
    priority_fn: Optional[PriorityFunction] = None,
    weights_path: Optional[str] = None,
) -> ConflictOptions:
    """
    Convenience function to configure conflict resolution globally.

    Args:
        strategy: Resolution policy
        treat_adjacent_as_conflict: Count touching ranges as conflicts
        priority_fn: Optional replacement priority function
        weights_path: Optional YAML/JSON file with priority tables

    Returns:
        Configured ConflictOptions instance
    """
    options = ConflictOptions(
        strategy=parse_strategy(strategy),
        treat_adjacent_as_conflict=treat_adjacent_as_conflict,
        priority_fn=priority_fn,
        weights=load_priority_weights(weights_path) if weights_path else PriorityWeights(),
    )

    set_conflict_options(options)
    return options
