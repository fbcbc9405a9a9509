import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)

    MIN_WORD_LENGTH: int = 3
    MAX_RESULTS: int = 50
    MAX_TILES: int = 100
    INCLUDE_PATHS: bool = True

    LOG_LEVEL: str = "INFO"
    PORT: int = 10001

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                current = getattr(self, fld)
                if isinstance(current, bool):
                    setattr(self, fld, env_val.lower() in ("1", "true", "yes"))
                elif isinstance(current, int):
                    setattr(self, fld, int(env_val))
                elif isinstance(current, float):
                    setattr(self, fld, float(env_val))
                elif isinstance(current, Path):
                    setattr(self, fld, Path(env_val))
                else:
                    setattr(self, fld, env_val)


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Fields that may be changed at runtime through /api/settings
EDITABLE_FIELDS: dict[str, type] = {
    "MIN_WORD_LENGTH": int,
    "MAX_RESULTS": int,
    "INCLUDE_PATHS": bool,
    "LOG_LEVEL": str,
}


def _coerce(value, typ: type):
    if typ is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.lower()
            if lowered in ("1", "true", "yes"):
                return True
            if lowered in ("0", "false", "no"):
                return False
        raise ValueError(f"expected a boolean, got {value!r}")
    if typ is int and isinstance(value, bool):
        raise ValueError(f"expected an integer, got {value!r}")
    return typ(value)


def update_settings(cfg: Settings, **values) -> dict[str, str]:
    """Apply editable values to cfg. Returns {field: error} for the rejected ones."""
    errors: dict[str, str] = {}
    for name, value in values.items():
        if not hasattr(cfg, name):
            errors[name] = "unknown setting"
            continue
        if name not in EDITABLE_FIELDS:
            errors[name] = "setting is not editable"
            continue
        try:
            coerced = _coerce(value, EDITABLE_FIELDS[name])
        except (TypeError, ValueError) as e:
            errors[name] = str(e)
            continue
        if name == "MIN_WORD_LENGTH" and coerced < 1:
            errors[name] = "must be >= 1"
            continue
        if name == "MAX_RESULTS" and coerced < 0:
            errors[name] = "must be >= 0"
            continue
        if name == "LOG_LEVEL":
            coerced = coerced.upper()
            if coerced not in LOG_LEVELS:
                errors[name] = f"must be one of {', '.join(LOG_LEVELS)}"
                continue
        setattr(cfg, name, coerced)
    return errors


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


settings = Settings()
