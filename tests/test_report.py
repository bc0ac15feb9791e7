from datetime import datetime

import pytest

from cipher_engine import CipherEngine
from errors import ReportFormatError
from machine_config import MachineConfiguration
from report import format_report, parse_report, read_report_file, write_report_file

STAMP = datetime(2024, 3, 1, 9, 30, 0)

SAMPLE = """ENIGMA MACHINE CONFIGURATION AND OUTPUT
Generated: 3/1/2024, 9:30:00 AM

ROTOR CONFIGURATION:
Left Rotor (1):   Type III at position 00
Middle Rotor (2):  Type II at position 00
Right Rotor (3):   Type I at position 00

REFLECTOR: Type B

PLUGBOARD CONNECTIONS: None

ENCRYPTED TEXT:
F

----------------------------------------
To decrypt this message:
1. Load this configuration file
2. The encrypted text will be automatically loaded and decrypted
3. The original text will appear in the output field
"""


def _encrypt(cfg, text):
    engine = CipherEngine()
    engine.configure_from(cfg)
    return engine.transform_text(text)


def test_format_layout():
    cfg = MachineConfiguration(("III", "II", "I"), (0, 0, 0), "B", ("AB", "CD"))
    text = format_report(cfg, "XYZ", STAMP)
    lines = text.splitlines()
    assert lines[0] == "ENIGMA MACHINE CONFIGURATION AND OUTPUT"
    assert lines[1] == "Generated: 2024-03-01 09:30:00"
    assert "Left Rotor (1):   Type III at position 00" in lines
    assert "Middle Rotor (2):  Type II at position 00" in lines
    assert "Right Rotor (3):   Type I at position 00" in lines
    assert "REFLECTOR: Type B" in lines
    assert lines[lines.index("PLUGBOARD CONNECTIONS:") + 1 :][:2] == ["A ↔ B", "C ↔ D"]
    assert lines[lines.index("ENCRYPTED TEXT:") + 1] == "XYZ"
    assert "-" * 40 in lines


def test_format_empty_plugboard_and_text():
    cfg = MachineConfiguration(("III", "II", "I"), (0, 0, 0), "B")
    text = format_report(cfg, "", STAMP)
    assert "PLUGBOARD CONNECTIONS: None" in text
    assert "ENCRYPTED TEXT:\n(empty)\n" in text
    assert parse_report(text).ciphertext == ""


def test_only_accepted_pairs_are_written():
    cfg = MachineConfiguration(("III", "II", "I"), (0, 0, 0), "B", ("AB", "BC", "XY"))
    rep = parse_report(format_report(cfg, "Q", STAMP))
    assert rep.configuration.plugs == ("AB", "XY")


def test_parse_sample_and_decrypt():
    rep = parse_report(SAMPLE)
    assert rep.configuration.rotors == ("III", "II", "I")
    assert rep.configuration.positions == (0, 0, 0)
    assert rep.configuration.reflector == "B"
    assert rep.configuration.plugs == ()
    assert rep.ciphertext == "F"
    assert rep.generated == "3/1/2024, 9:30:00 AM"
    assert _encrypt(rep.configuration, rep.ciphertext) == "A"


@pytest.mark.parametrize(
    "plaintext",
    [
        "ATTACK AT DAWN",
        "LINE ONE\nLINE TWO\n\n  INDENTED LINE",
        "TRAILING NEWLINE\n",
        "  LEADING AND TRAILING SPACES  ",
        "LINE ONE\r\nLINE TWO",
        "OLD MAC\rLINE ENDINGS\r",
    ],
)
def test_round_trip_recovers_plaintext(plaintext, tmp_path):
    cfg = MachineConfiguration(("IV", "I", "V"), (3, 25, 12), "C", ("AZ", "BY", "CX"))
    cipher = _encrypt(cfg, plaintext)
    path = write_report_file(tmp_path / "report.txt", cfg, cipher, STAMP)

    rep = read_report_file(path)
    assert rep.configuration == cfg
    assert rep.ciphertext == cipher
    assert _encrypt(rep.configuration, rep.ciphertext) == plaintext


def test_missing_rotors():
    broken = SAMPLE.replace("Right Rotor (3):   Type I at position 00\n", "")
    with pytest.raises(ReportFormatError):
        parse_report(broken)


def test_missing_reflector():
    with pytest.raises(ReportFormatError):
        parse_report(SAMPLE.replace("REFLECTOR: Type B", ""))


def test_missing_text_section():
    with pytest.raises(ReportFormatError):
        parse_report(SAMPLE.replace("ENCRYPTED TEXT:", ""))


def test_invalid_configuration_in_report():
    with pytest.raises(ReportFormatError):
        parse_report(SAMPLE.replace("Type II at", "Type IX at"))


def test_report_errors_are_value_errors():
    with pytest.raises(ValueError):
        parse_report("")
