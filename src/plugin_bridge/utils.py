# ANSI colors
class Colors:
    HEADER = '\033[95m'
    BLUE = '\033[94m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    ENDC = '\033[0m'


def parse_csv(value) -> list:
    """'codex, gemini' -> ['codex', 'gemini']; empty entries dropped."""
    if not value:
        return []
    return [entry.strip() for entry in str(value).split(",") if entry.strip()]
