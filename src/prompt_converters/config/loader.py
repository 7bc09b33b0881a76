"""Profile Loader for loading batch conversion profiles from YAML files."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from prompt_converters.config.base import ConversionProfile, ErrorPolicy, SourceSpec


class ProfileLoader:
    """Loads conversion profiles from YAML files.

    A profile looks like::

        name: team-rules
        targets: [cursor, kiro]
        on_error: skip
        output_dir: ./converted
        sources:
          - .claude/agents/reviewer.md
          - path: docs/AGENTS.md
            format: agents.md
        options:
          kiro:
            inclusion: always
    """

    def load_file(self, path: Path | str) -> ConversionProfile:
        """Load a profile from a YAML file.

        Args:
            path: Path to the YAML file

        Returns:
            Loaded ConversionProfile instance
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Profile file not found: {path}")

        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)

        return self._parse_profile(data)

    def load_from_string(self, content: str) -> ConversionProfile:
        """Load a profile from a YAML string.

        Args:
            content: YAML content as string

        Returns:
            Loaded ConversionProfile instance
        """
        data = yaml.safe_load(content)
        return self._parse_profile(data)

    def _parse_profile(self, data: Any) -> ConversionProfile:
        """Parse profile data from YAML structure."""
        if not isinstance(data, dict):
            raise ValueError("Profile must be a YAML mapping")
        if not data.get("name"):
            raise ValueError("Profile must have a name")

        targets = data.get("targets", [])
        if isinstance(targets, str):
            targets = [targets]

        sources = []
        for s_data in data.get("sources", []):
            # Bare strings are shorthand for {path: ...}
            if isinstance(s_data, str):
                s_data = {"path": s_data}
            sources.append(s_data)

        on_error = str(data.get("on_error", data.get("onError", ErrorPolicy.SKIP.value))).lower()
        try:
            policy = ErrorPolicy(on_error)
        except ValueError:
            raise ValueError(f"Invalid on_error policy: {on_error} (expected skip or abort)") from None

        try:
            return ConversionProfile(
                name=data["name"],
                description=data.get("description", ""),
                targets=[str(t) for t in targets],
                sources=[SourceSpec.model_validate(s) for s in sources],
                output_dir=str(data.get("output_dir", data.get("outputDir", "./converted"))),
                on_error=policy,
                options=data.get("options") or {},
            )
        except ValidationError as e:
            raise ValueError(f"Invalid profile '{data['name']}': {e}") from e

    def save_file(self, profile: ConversionProfile, path: Path | str) -> None:
        """Save a profile to a YAML file.

        Args:
            profile: The profile to save
            path: Path for the output file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        data = self._profile_to_dict(profile)

        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    def _profile_to_dict(self, profile: ConversionProfile) -> dict[str, Any]:
        """Convert a ConversionProfile to a dictionary for YAML serialization."""
        return {
            "name": profile.name,
            "description": profile.description,
            "targets": profile.targets,
            "sources": [s.to_dict() for s in profile.sources],
            "output_dir": profile.output_dir,
            "on_error": profile.on_error.value,
            "options": profile.options.to_dict(),
        }


def load_profile(path: Path | str) -> ConversionProfile:
    """Convenience function to load a profile from a file.

    Args:
        path: Path to the YAML file

    Returns:
        Loaded ConversionProfile instance
    """
    loader = ProfileLoader()
    return loader.load_file(path)
