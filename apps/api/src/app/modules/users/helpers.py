"""
User Helpers

Small pure functions shared by the user and student modules.
"""


def build_full_name(first_name: str | None, middle_name: str | None, last_name: str | None) -> str:
    """
    Join name parts with single spaces.

    Empty parts are skipped and internal whitespace is collapsed, so
    ``("Ana ", None, " Cruz")`` becomes ``"Ana Cruz"``.
    """
    parts = [first_name, middle_name, last_name]
    return " ".join(" ".join(part.split()) for part in parts if part and part.strip())
