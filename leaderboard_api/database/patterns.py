import re

_GLOB_SPECIAL = re.compile(r'([\\*?\[\]])')

def escape_pattern(value: str) -> str:
    """Escape Redis glob metacharacters so ``value`` only matches itself in SCAN MATCH"""
    return _GLOB_SPECIAL.sub(r'\\\1', value)
