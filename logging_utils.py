"""
Phase logging for the AI Media Studio engine
=============================================

Colored, phase-framed logging for the request pipeline with timing.
IMPORTANT: No emojis in console output (Windows encoding issues).
"""

import logging
import time
from typing import Optional, Dict, Any
from contextlib import contextmanager
from datetime import datetime
from colorama import Fore, Style, init

# Initialize colorama for Windows
init(autoreset=True)


class Phase:
    """Phase constants for the generation pipeline"""
    PROMPT = "PROMPT_COMPOSITION"
    GENERATION = "CONTENT_GENERATION"
    IMAGE_BATCH = "IMAGE_BATCH"
    NORMALIZATION = "NORMALIZATION"
    COMPLETION = "COMPLETION"


PHASE_COLORS = {
    Phase.PROMPT: Fore.CYAN,
    Phase.GENERATION: Fore.GREEN,
    Phase.IMAGE_BATCH: Fore.MAGENTA,
    Phase.NORMALIZATION: Fore.BLUE,
    Phase.COMPLETION: Fore.GREEN + Style.BRIGHT,
}

# Text-based icons (no emojis for Windows)
PHASE_ICONS = {
    Phase.PROMPT: "[PRM]",
    Phase.GENERATION: "[GEN]",
    Phase.IMAGE_BATCH: "[IMG]",
    Phase.NORMALIZATION: "[NRM]",
    Phase.COMPLETION: "[OK ]",
}


class TimingTracker:
    """Track timing for phases and operations"""

    def __init__(self):
        self._timings: Dict[str, float] = {}
        self._start_times: Dict[str, float] = {}

    def start(self, key: str):
        self._start_times[key] = time.time()

    def end(self, key: str) -> float:
        """End timing and return elapsed seconds"""
        if key not in self._start_times:
            return 0.0
        elapsed = time.time() - self._start_times.pop(key)
        self._timings[key] = elapsed
        return elapsed

    def get(self, key: str) -> Optional[float]:
        return self._timings.get(key)

    def get_all(self) -> Dict[str, float]:
        return self._timings.copy()


class PhaseLogger:
    """
    Logger with phase tracking and visual formatting

    Usage:
        phase_logger = PhaseLogger(operation="analysis", extra_verbose=True)

        with phase_logger.phase(Phase.GENERATION):
            phase_logger.log_prompt("gemini-3-pro-preview", prompt)
            ...
            phase_logger.log_response("gemini-3-pro-preview", raw_text)
    """

    def __init__(
        self,
        operation: str,
        extra_verbose: bool = False,
        logger: Optional[logging.Logger] = None
    ):
        self.operation = operation
        self.extra_verbose = extra_verbose
        self.logger = logger or logging.getLogger(__name__)
        self.timing_tracker = TimingTracker()
        self._current_phase: Optional[str] = None
        self._phase_stack = []

    @contextmanager
    def phase(self, phase_name: str, sub_label: Optional[str] = None):
        """
        Context manager for phase tracking with automatic timing

        Example:
            with phase_logger.phase(Phase.IMAGE_BATCH, sub_label="Group 2/3"):
                ...
        """
        self._enter_phase(phase_name, sub_label)
        try:
            yield self
        finally:
            self._exit_phase(phase_name)

    def _enter_phase(self, phase_name: str, sub_label: Optional[str] = None):
        self._phase_stack.append(self._current_phase)
        self._current_phase = phase_name
        self.timing_tracker.start(f"phase_{phase_name}_{len(self._phase_stack)}")

        color = PHASE_COLORS.get(phase_name, Fore.WHITE)
        icon = PHASE_ICONS.get(phase_name, "[???]")
        timestamp = datetime.now().strftime("%H:%M:%S")
        sub_str = f" - {sub_label}" if sub_label else ""
        self.logger.info(
            f"{color}{icon} {phase_name} ({self.operation}){sub_str} [{timestamp}]{Style.RESET_ALL}"
        )

    def _exit_phase(self, phase_name: str):
        elapsed = self.timing_tracker.end(f"phase_{phase_name}_{len(self._phase_stack)}")

        color = PHASE_COLORS.get(phase_name, Fore.WHITE)
        icon = PHASE_ICONS.get(phase_name, "[???]")
        elapsed_str = f"{elapsed:.2f}s" if elapsed > 0 else "N/A"
        self.logger.info(f"{color}{icon} {phase_name} COMPLETED (Elapsed: {elapsed_str}){Style.RESET_ALL}")

        self._current_phase = self._phase_stack.pop() if self._phase_stack else None

    def info(self, message: str):
        """Log info message with current phase context"""
        if self._current_phase:
            color = PHASE_COLORS.get(self._current_phase, Fore.WHITE)
            icon = PHASE_ICONS.get(self._current_phase, "[???]")
            self.logger.info(f"{color}{icon}{Style.RESET_ALL} {message}")
        else:
            self.logger.info(message)

    def warning(self, message: str):
        self.logger.warning(f"{Fore.YELLOW}[WARN] {message}{Style.RESET_ALL}")

    def error(self, message: str):
        self.logger.error(f"{Fore.RED}{Style.BRIGHT}[ERROR] {message}{Style.RESET_ALL}")

    def log_prompt(self, model: str, prompt: str, **kwargs):
        """Log the full prompt (only if extra_verbose)"""
        if not self.extra_verbose:
            return

        separator = "~" * 60
        self.logger.info(f"{Fore.CYAN}{separator}{Style.RESET_ALL}")
        self.logger.info(f"{Fore.CYAN}[EXTRA_VERBOSE] PROMPT TO {model}{Style.RESET_ALL}")
        self.logger.info(prompt)
        if kwargs:
            self.logger.info(f"{Fore.YELLOW}[PARAMETERS]{Style.RESET_ALL}")
            for key, value in kwargs.items():
                self.logger.info(f"  {key}: {value}")
        self.logger.info(f"{Fore.CYAN}{separator}{Style.RESET_ALL}")

    def log_response(self, model: str, response: str, metadata: Optional[Dict[str, Any]] = None):
        """Log the raw backend response (only if extra_verbose)"""
        if not self.extra_verbose:
            return

        separator = "~" * 60
        self.logger.info(f"{Fore.GREEN}{separator}{Style.RESET_ALL}")
        self.logger.info(f"{Fore.GREEN}[EXTRA_VERBOSE] RESPONSE FROM {model}{Style.RESET_ALL}")
        if metadata:
            for key, value in metadata.items():
                self.logger.info(f"  {key}: {value}")
        self.logger.info(response)
        self.logger.info(f"{Fore.GREEN}{separator}{Style.RESET_ALL}")

    def log_timing_summary(self):
        """Log timing summary for all phases (only if extra_verbose)"""
        if not self.extra_verbose:
            return

        total_time = 0.0
        for key, elapsed in sorted(self.timing_tracker.get_all().items()):
            phase_name = key.replace("phase_", "").rsplit("_", 1)[0]
            color = PHASE_COLORS.get(phase_name, Fore.WHITE)
            self.logger.info(f"{color}{phase_name:30s} {elapsed:8.2f}s{Style.RESET_ALL}")
            total_time += elapsed
        self.logger.info(f"{Fore.WHITE}{Style.BRIGHT}TOTAL TIME: {total_time:.2f}s{Style.RESET_ALL}")


def create_phase_logger(operation: str, extra_verbose: bool = False) -> PhaseLogger:
    """Create a new PhaseLogger instance"""
    return PhaseLogger(operation=operation, extra_verbose=extra_verbose)
