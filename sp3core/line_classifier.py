"""
Record-kind predicates over one stripped SP3 line.

Some kinds share a prefix ('#' / '##', '+' / '++'), so the longer prefix is
tested first and excluded from the shorter one.
"""


def end_of_file(line: str) -> bool:
    return line == "EOF"


def comment(line: str) -> bool:
    return line.startswith("/*")


def header_line2(line: str) -> bool:
    return line.startswith("##")


def header_line1(line: str) -> bool:
    return line.startswith("#") and not header_line2(line)


def orbit_accuracy(line: str) -> bool:
    return line.startswith("++")


def vehicle_list(line: str) -> bool:
    return line.startswith("+") and not orbit_accuracy(line)


def descriptor(line: str) -> bool:
    return line.startswith("%c")


def new_epoch(line: str) -> bool:
    return line.startswith("*  ")


def position_entry(line: str) -> bool:
    return line.startswith("P")


def velocity_entry(line: str) -> bool:
    return line.startswith("V")

