"""Console output and logging setup"""

import logging
import sys
from datetime import datetime


class CustomFormatter(logging.Formatter):
    """Custom formatter for console output"""

    def format(self, record):
        timestamp = datetime.now().strftime("%H:%M:%S")
        return f"[{timestamp}] {record.levelname.lower()}: {record.getMessage()}"


def setup_logging(verbose: bool = False):
    """Configure logging system"""
    logger = logging.getLogger("bl3shift")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Remove existing handlers
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    # Diagnostics go to stderr so stdout only carries status lines
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(CustomFormatter())
    logger.addHandler(console_handler)

    return logger


class Colors:
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    END = '\033[0m'
    GRAY = '\033[90m'


def log(message: str, color: str = "", file=None):
    """Timestamped console line, optionally colored"""
    timestamp = datetime.now().strftime("%H:%M:%S")
    if color:
        print(f"{Colors.GRAY}[{timestamp}]{Colors.END} {color}{message}{Colors.END}", file=file)
    else:
        print(f"{Colors.GRAY}[{timestamp}]{Colors.END} {message}", file=file)


def log_section(message: str, show_time: bool = False):
    width = 50
    if show_time:
        timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
        title = f"{message} - {timestamp}"
    else:
        title = message

    print(f"\n{Colors.CYAN}{'─' * width}{Colors.END}")
    print(f"{Colors.CYAN}{Colors.BOLD}{title}{Colors.END}")
    print(f"{Colors.CYAN}{'─' * width}{Colors.END}")


def log_success(message: str):
    """Log a success message"""
    log(f"SUCCESS: {message}", Colors.GREEN)


def log_error(message: str):
    """Log an error message to stderr"""
    log(f"ERROR: {message}", Colors.RED, file=sys.stderr)


def log_warning(message: str):
    """Log a warning message"""
    log(f"WARNING: {message}", Colors.YELLOW)


def log_info(message: str):
    """Log an info message"""
    log(f"INFO: {message}", Colors.CYAN)


def log_code(code: str, status: str, details: str = "", color: str = Colors.CYAN):
    """Log code-related information with consistent formatting"""
    log(f"{status}: {Colors.BOLD}{code}{Colors.END} {details}".rstrip(), color)
