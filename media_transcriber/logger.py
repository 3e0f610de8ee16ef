import sys

from colorama import Fore, Style


def log_red(message: str) -> str:
    """Wraps a message in red."""
    return f"{Fore.RED}{message}{Style.RESET_ALL}"

def log_green(message: str) -> str:
    """Wraps a message in green."""
    return f"{Fore.GREEN}{message}{Style.RESET_ALL}"

def log_yellow(message: str) -> str:
    """Wraps a message in yellow."""
    return f"{Fore.YELLOW}{message}{Style.RESET_ALL}"

def log_blue(message: str) -> str:
    """Wraps a message in blue."""
    return f"{Fore.BLUE}{message}{Style.RESET_ALL}"

def log_cyan(message: str) -> str:
    """Wraps a message in cyan."""
    return f"{Fore.CYAN}{message}{Style.RESET_ALL}"

def log_magenta(message: str) -> str:
    """Wraps a message in magenta."""
    return f"{Fore.MAGENTA}{message}{Style.RESET_ALL}"

def log_bold(message: str) -> str:
    """Wraps a message in bold."""
    return f"{Style.BRIGHT}{message}{Style.RESET_ALL}"

def log_info(message: str) -> None:
    """
    Logs an informational message to the console.

    Args:
        message (str): The informational message to log.
    """
    print(f"[ {log_bold(log_blue('INFO'))} ] {message}")

def log_error(message: str) -> None:
    """
    Logs an error message to the error stream.

    Args:
        message (str): The error message to log.
    """
    print(f"[ {log_bold(log_red('ERROR'))} ] {message}", file=sys.stderr)

def log_success(message: str) -> None:
    """
    Logs a success message to the console.

    Args:
        message (str): The success message to log.
    """
    print(f"[ {log_bold(log_green('SUCCESS'))} ] {message}")

def log_warning(message: str) -> None:
    """
    Logs a warning message to the console.

    Args:
        message (str): The warning message to log.
    """
    print(f"[ {log_bold(log_yellow('WARNING'))} ] {message}")

def log_debug(message: str) -> None:
    """
    Logs a debug message to the console.

    Args:
        message (str): The debug message to log.
    """
    print(f"[ {log_bold(log_magenta('DEBUG'))} ] {message}")
