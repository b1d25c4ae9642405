"""Formula discovery - convention over configuration.

A tap keeps its formulae in ``Formula/``, else ``HomebrewFormula/``, else at
the repository root. Formulae are ``*.rb`` files directly in that directory.
Contents are never parsed here.
"""

from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from .tap import Tap

FORMULA_DIRS = ("Formula", "HomebrewFormula")


class TapFormulae(BaseModel):
    """Formula files discovered in a tap (immutable data structure)."""

    model_config = ConfigDict(frozen=True)

    formula_dir: Path
    files: list[Path] = Field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.files)

    def names(self, tap: Tap) -> list[str]:
        """Fully-qualified formula names, e.g. ``owner/name/formula``."""
        return [f"{tap.full_name}/{f.stem}" for f in self.files]


def formula_dir(tap_path: Path) -> Path:
    """Directory holding a tap's formulae."""
    for dirname in FORMULA_DIRS:
        candidate = tap_path / dirname
        if candidate.is_dir():
            return candidate
    return tap_path


def discover_formula_files(tap_path: Path) -> TapFormulae:
    """
    Discover formula files in a tap clone.

    Args:
        tap_path: Path to the tap's working copy

    Returns:
        TapFormulae with files sorted by name

    Example:
        >>> formulae = discover_formula_files(tap.path)
        >>> print(f"Found {formulae.count} formulae")
    """
    directory = formula_dir(tap_path)
    files: list[Path] = []
    if directory.is_dir():
        files = sorted(f for f in directory.glob("*.rb") if f.is_file())
    return TapFormulae(formula_dir=directory, files=files)


def pluralize_formula(count: int) -> str:
    return "formula" if count == 1 else "formulae"
