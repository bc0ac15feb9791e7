# report.py
"""Plain-text machine report: the key plus the ciphertext it produced.

The layout is meant for people (print it, file it, hand it over) but it
parses back into a MachineConfiguration that decrypts the ciphertext.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from debug import Debug
from errors import EnigmaError, ReportFormatError
from machine_config import MachineConfiguration

debug = Debug()

TITLE = "ENIGMA MACHINE CONFIGURATION AND OUTPUT"
RULE = "-" * 40
ARROW = "↔"
EMPTY_TEXT = "(empty)"
ROTOR_LABELS = ("Left Rotor (1):  ", "Middle Rotor (2): ", "Right Rotor (3):  ")
FOOTER = (
    "To decrypt this message:\n"
    "1. Load this configuration file\n"
    "2. The encrypted text will be automatically loaded and decrypted\n"
    "3. The original text will appear in the output field\n"
)

_rotor_re = re.compile(r"Type (\w+) at position (\d+)")
_refl_re = re.compile(r"Type (\w+)")


@dataclass(slots=True)
class Report:
    configuration: MachineConfiguration
    ciphertext: str
    generated: str | None = None


# ────────────────────────────────────────────────────────────────────────
#  Writer
# ────────────────────────────────────────────────────────────────────────


def format_report(
    config: MachineConfiguration,
    ciphertext: str,
    generated: datetime | None = None,
) -> str:
    stamp = (generated or datetime.now()).strftime("%Y-%m-%d %H:%M:%S")
    lines = [TITLE, f"Generated: {stamp}", "", "ROTOR CONFIGURATION:"]
    for label, name, pos in zip(ROTOR_LABELS, config.rotors, config.positions):
        lines.append(f"{label} Type {name} at position {pos:02d}")
    lines += ["", f"REFLECTOR: Type {config.reflector}", ""]

    pairs = config.plugboard().pairs
    if pairs:
        lines.append("PLUGBOARD CONNECTIONS:")
        lines += [f"{p[0]} {ARROW} {p[1]}" for p in pairs]
    else:
        lines.append("PLUGBOARD CONNECTIONS: None")

    lines += ["", "ENCRYPTED TEXT:", ciphertext or EMPTY_TEXT, "", RULE]
    return "\n".join(lines) + "\n" + FOOTER


def write_report_file(
    path: str | Path,
    config: MachineConfiguration,
    ciphertext: str,
    generated: datetime | None = None,
) -> Path:
    path = Path(path)
    # newline="" on both sides: "\r" in the ciphertext must survive the file
    with path.open("w", encoding="utf-8", newline="") as fh:
        fh.write(format_report(config, ciphertext, generated))
    debug.log("report", f"wrote {path}")
    return path


# ────────────────────────────────────────────────────────────────────────
#  Parser
# ────────────────────────────────────────────────────────────────────────


def parse_report(content: str, *, strict_plugboard: bool = False) -> Report:
    rotors: list[str] = []
    positions: list[int] = []
    reflector: str | None = None
    plugs: list[str] = []
    text_lines: list[str] | None = None
    generated: str | None = None
    section = ""

    # split on "\n" only: the ciphertext may hold other line-break characters
    for raw in content.split("\n"):
        line = raw.strip()

        if line.startswith(RULE):
            break

        if section == "text":
            # ciphertext is kept verbatim, blank lines and spacing included
            text_lines.append(raw)
            continue

        if line.startswith("Generated:"):
            generated = line.partition(":")[2].strip()
            continue
        if line.startswith("ROTOR CONFIGURATION:"):
            section = "rotors"
            continue
        if line.startswith("REFLECTOR:"):
            section = "reflector"
        elif line.startswith("PLUGBOARD CONNECTIONS:"):
            section = "plugboard"
            line = line.partition(":")[2].strip()
        elif line.startswith("ENCRYPTED TEXT:"):
            section = "text"
            text_lines = []
            continue

        if not line:
            continue

        if section == "rotors":
            m = _rotor_re.search(line)
            if m:
                rotors.append(m.group(1))
                positions.append(int(m.group(2)))
        elif section == "reflector":
            m = _refl_re.search(line)
            if m:
                reflector = m.group(1)
        elif section == "plugboard" and line != "None":
            pair = [s.strip() for s in line.split(ARROW)]
            if len(pair) == 2:
                plugs.append("".join(pair))

    if len(rotors) != 3:
        raise ReportFormatError(f"Expected 3 rotor lines, found {len(rotors)}")
    if reflector is None:
        raise ReportFormatError("No reflector line found")
    if text_lines is None:
        raise ReportFormatError("No ENCRYPTED TEXT section found")

    # the writer leaves one blank line before the rule
    if text_lines and text_lines[-1] == "":
        text_lines.pop()
    ciphertext = "\n".join(text_lines)
    if ciphertext == EMPTY_TEXT:
        ciphertext = ""

    try:
        config = MachineConfiguration(
            rotors=tuple(rotors),
            positions=tuple(positions),
            reflector=reflector,
            plugs=tuple(plugs),
            strict_plugboard=strict_plugboard,
        )
    except EnigmaError as exc:
        raise ReportFormatError(f"Report holds an invalid configuration: {exc}") from exc

    debug.log("report", f"parsed {config.describe()}")
    return Report(config, ciphertext, generated)


def read_report_file(path: str | Path, *, strict_plugboard: bool = False) -> Report:
    with Path(path).open(encoding="utf-8", newline="") as fh:
        return parse_report(fh.read(), strict_plugboard=strict_plugboard)
