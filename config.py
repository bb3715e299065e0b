from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from speedclip.units import DEFAULT_FALLBACK_UNIT, UNIT_SCALES

_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class ClipConfig:
    log_level: str = "INFO"
    json_indent: int | None = None
    ensure_ascii: bool = False
    fallback_unit: str = DEFAULT_FALLBACK_UNIT
    ini_path: Path | None = None

    @classmethod
    def load(cls, ini_path: str | Path | None = None) -> "ClipConfig":
        cfg = cls()
        path = Path(ini_path or "speedclip.ini")
        if path.exists():
            import configparser

            parser = configparser.ConfigParser()
            parser.read(path)
            log_section = parser["logging"] if "logging" in parser else None
            if log_section:
                level = log_section.get("level", fallback=cfg.log_level).strip().upper()
                if level in _LEVELS:
                    cfg.log_level = level

            output_section = parser["output"] if "output" in parser else None
            if output_section:
                try:
                    indent = output_section.getint("indent", fallback=0)
                except ValueError:
                    indent = 0
                cfg.json_indent = indent if indent and indent > 0 else None
                try:
                    cfg.ensure_ascii = output_section.getboolean(
                        "ensure_ascii", fallback=cfg.ensure_ascii
                    )
                except ValueError:
                    pass

            units_section = parser["units"] if "units" in parser else None
            if units_section:
                fallback = units_section.get("fallback", fallback=cfg.fallback_unit).strip().lower()
                if fallback in UNIT_SCALES:
                    cfg.fallback_unit = fallback
        cfg.ini_path = path
        return cfg

    @property
    def log_level_value(self) -> int:
        return getattr(logging, self.log_level, logging.INFO)

    def save(self) -> None:
        if self.ini_path is None:
            return
        import configparser

        parser = configparser.ConfigParser()
        parser["logging"] = {"level": self.log_level}
        parser["output"] = {
            "indent": str(self.json_indent or 0),
            "ensure_ascii": "true" if self.ensure_ascii else "false",
        }
        parser["units"] = {"fallback": self.fallback_unit}
        with self.ini_path.open("w") as fh:
            parser.write(fh)
