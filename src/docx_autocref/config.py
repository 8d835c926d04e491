"""
Processing options and config-file loading.

Options can be built directly, loaded from a YAML or JSON file, or set from
the command line (CLI flags override file values).
"""

import json
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from .errors import ConfigError


class MissingReferencePolicy(str, Enum):
    """What to do with a cross-reference whose footnote was never bookmarked.

    FAIL aborts the run with MissingReferenceError. SKIP leaves the number as
    plain text and logs a warning.
    """

    FAIL = "fail"
    SKIP = "skip"


@dataclass
class ProcessOptions:
    """Options controlling a processing run.

    Attributes:
        missing_reference: Policy for cross-references without a bookmark
        validate_output: Check that rewritten parts are well-formed XML
            before anything is written

    Example:
        >>> options = ProcessOptions(missing_reference="skip")
        >>> options.missing_reference
        <MissingReferencePolicy.SKIP: 'skip'>
    """

    missing_reference: MissingReferencePolicy = MissingReferencePolicy.FAIL
    validate_output: bool = True

    def __post_init__(self) -> None:
        """Coerce and validate option values."""
        if not isinstance(self.missing_reference, MissingReferencePolicy):
            try:
                self.missing_reference = MissingReferencePolicy(str(self.missing_reference))
            except ValueError:
                valid = ", ".join(p.value for p in MissingReferencePolicy)
                raise ConfigError(
                    f"Unknown missing_reference policy '{self.missing_reference}'. "
                    f"Valid options: {valid}"
                ) from None
        if not isinstance(self.validate_output, bool):
            raise ConfigError("validate_output must be true or false")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ProcessOptions":
        """Build options from a mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(
                f"Unknown option(s): {', '.join(unknown)}. "
                f"Valid options: {', '.join(sorted(known))}"
            )
        return cls(**data)

    def merged(self, **overrides: Any) -> "ProcessOptions":
        """Return a copy with every override that is not None applied."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        values.update({k: v for k, v in overrides.items() if v is not None})
        return ProcessOptions.from_dict(values)


def load_options(path: str | Path) -> ProcessOptions:
    """Load options from a YAML or JSON file.

    The file holds either a bare mapping of options or a mapping with an
    ``autocref`` key.

    Example YAML file:
        ```yaml
        autocref:
          missing_reference: skip
          validate_output: true
        ```

    Raises:
        ConfigError: If the file is missing, unparsable, or has unknown keys
    """
    file_path = Path(path)

    if not file_path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(file_path, encoding="utf-8") as f:
            if file_path.suffix.lower() == ".json":
                data = json.load(f)
            else:
                data = yaml.safe_load(f)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ConfigError(f"Failed to parse config file {path}: {e}") from e

    if data is None:
        return ProcessOptions()
    if not isinstance(data, dict):
        raise ConfigError("Config file must contain a dictionary/object")
    if "autocref" in data:
        data = data["autocref"] or {}
        if not isinstance(data, dict):
            raise ConfigError("'autocref' must be a dictionary/object")

    return ProcessOptions.from_dict(data)
