"""
Gradient Presets Library - Named control color sets
Lets users pick a gradient by name instead of typing hex lists
"""

import yaml
import logging
from pathlib import Path
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field, asdict

from .color import ControlColor, parse_hex
from ..errors import InvalidArgument

logger = logging.getLogger(__name__)


# ============================================================================
# Preset Data Structures
# ============================================================================

@dataclass
class GradientPreset:
    """A named gradient"""

    name: str
    description: str = ""

    # Hex strings without '#'
    colors: List[str] = field(default_factory=list)

    # Wrap the last color back into the first
    loop: bool = True

    tags: List[str] = field(default_factory=list)

    def control_colors(self) -> List[ControlColor]:
        """Parse the hex strings; InvalidColorFormat on a bad entry"""
        return [parse_hex(c.lstrip('#')) for c in self.colors]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for YAML serialization"""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GradientPreset':
        """Create from dictionary, ignoring unknown keys"""
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in data.items() if k in valid_fields}

        colors = filtered.get('colors', [])
        if isinstance(colors, str):
            filtered['colors'] = [c.strip() for c in colors.split(',') if c.strip()]
        elif isinstance(colors, (list, tuple)):
            filtered['colors'] = [str(c) for c in colors]
        else:
            raise TypeError(f"colors must be a list or comma separated string, got {colors!r}")

        tags = filtered.get('tags', [])
        if not isinstance(tags, (list, tuple)):
            raise TypeError(f"tags must be a list, got {tags!r}")
        filtered['tags'] = [str(t) for t in tags]

        return cls(**filtered)


# ============================================================================
# Built-in Presets
# ============================================================================

DEFAULT_PRESET = "rainbow"

BUILTIN_PRESETS: Dict[str, Dict[str, Any]] = {
    "rainbow": {
        "name": "rainbow",
        "description": "Red, orange, yellow, green, blue, violet",
        "colors": ["ff0000", "ff7f00", "ffff00", "00ff00", "0000ff", "8b00ff"],
        "tags": ["default", "vivid"],
    },
    "fire": {
        "name": "fire",
        "description": "Ember red through orange to white-hot yellow",
        "colors": ["b42d14", "ff6400", "ffc864", "fff0c8"],
        "tags": ["warm"],
    },
    "ocean": {
        "name": "ocean",
        "description": "Deep blue to cyan foam",
        "colors": ["143c64", "2878b4", "64b4dc", "b4e6ff"],
        "tags": ["cool"],
    },
    "sunset": {
        "name": "sunset",
        "description": "Magenta dusk into gold",
        "colors": ["5a1e6e", "c83c78", "ff7850", "ffc850"],
        "tags": ["warm", "vivid"],
    },
    "forest": {
        "name": "forest",
        "description": "Moss and leaf greens",
        "colors": ["1e4620", "3c8c3c", "a0d264"],
        "tags": ["cool", "nature"],
    },
    "neon": {
        "name": "neon",
        "description": "Hot pink, electric cyan, acid green",
        "colors": ["ff14b4", "14f0ff", "b4ff14"],
        "tags": ["vivid"],
    },
    "mono": {
        "name": "mono",
        "description": "Fade from black to white and back",
        "colors": ["000000", "ffffff"],
        "tags": ["neutral"],
    },
}


# ============================================================================
# Preset Manager
# ============================================================================

class PresetManager:
    """
    Loads built-in and user gradient presets.

    User presets are YAML files in user_presets_dir, either one preset per
    file (named after the file) or a `presets:` mapping of several. User
    presets override built-ins with the same name.
    """

    def __init__(self, user_presets_dir: Optional[Path] = None):
        self.user_presets_dir = Path(user_presets_dir or Path.home() / '.gradient-wash' / 'presets')

        self._builtin: Dict[str, GradientPreset] = {}
        self._user: Dict[str, GradientPreset] = {}

        self._load_builtin_presets()
        self._load_user_presets()

    def _load_builtin_presets(self) -> None:
        for name, data in BUILTIN_PRESETS.items():
            self._builtin[name] = GradientPreset.from_dict(data)

    def _load_user_presets(self) -> None:
        if not self.user_presets_dir.is_dir():
            return

        for yaml_file in sorted(self.user_presets_dir.glob('*.yaml')):
            try:
                with open(yaml_file, 'r') as f:
                    data = yaml.safe_load(f)
            except (OSError, yaml.YAMLError) as e:
                logger.warning("Could not load preset file %s: %s", yaml_file, e)
                continue

            if not isinstance(data, dict):
                logger.warning("Ignoring preset file %s: expected a mapping", yaml_file)
                continue

            try:
                presets = self._presets_from_file(yaml_file, data)
            except (AttributeError, TypeError, ValueError) as e:
                logger.warning("Ignoring preset file %s: %s", yaml_file, e)
                continue

            self._user.update(presets)

    @staticmethod
    def _presets_from_file(yaml_file: Path, data: Dict[str, Any]) -> Dict[str, GradientPreset]:
        if 'presets' not in data:
            return {yaml_file.stem: GradientPreset.from_dict({**data, 'name': yaml_file.stem})}

        # Multiple presets in one file
        entries = data['presets'] or {}
        if not isinstance(entries, dict):
            raise TypeError("'presets' must be a mapping of name to preset")

        presets = {}
        for name, preset_data in entries.items():
            preset_data = dict(preset_data or {})
            preset_data['name'] = str(name)
            presets[str(name)] = GradientPreset.from_dict(preset_data)
        return presets

    def get(self, name: str) -> Optional[GradientPreset]:
        """Get a preset by name, user presets first"""
        return self._user.get(name) or self._builtin.get(name)

    def exists(self, name: str) -> bool:
        return name in self._user or name in self._builtin

    def list_all(self) -> List[str]:
        return sorted(set(self._builtin) | set(self._user))

    def list_by_tag(self, tag: str) -> List[str]:
        matches = []
        for name, preset in {**self._builtin, **self._user}.items():
            if tag.lower() in [t.lower() for t in preset.tags]:
                matches.append(name)
        return sorted(matches)

    def control_colors(self, name: str) -> List[ControlColor]:
        """Control colors of a named preset; InvalidArgument if unknown"""
        preset = self.get(name)
        if preset is None:
            raise InvalidArgument(f"Preset '{name}' not found")
        return preset.control_colors()

    def save_preset(self, preset: GradientPreset, filename: Optional[str] = None) -> Path:
        """Save a user preset to a YAML file and register it"""
        filename = filename or f"{preset.name}.yaml"
        if not filename.endswith('.yaml'):
            filename += '.yaml'

        self.user_presets_dir.mkdir(parents=True, exist_ok=True)
        filepath = self.user_presets_dir / filename

        data = preset.to_dict()
        data.pop('name')
        with open(filepath, 'w') as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

        name = filepath.stem
        self._user[name] = GradientPreset.from_dict({**data, 'name': name})
        return filepath
