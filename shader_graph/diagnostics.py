"""
Structured compile diagnostics.

Recoverable problems are accumulated here instead of being raised, so one
malformed node never prevents the rest of the shader from compiling.
Each entry is also forwarded to the package logger at its severity.
"""

import logging
from dataclasses import dataclass, field
from typing import List

from .logger import get_logger, log_error, log_warning


@dataclass
class Diagnostics:
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    def warn(self, message: str):
        entry = f"[WARNING] {message}"
        if entry in self.warnings:
            return
        self.warnings.append(entry)
        log_warning(message)

    def error(self, message: str):
        self.errors.append(f"[ERROR] {message}")
        log_error(message)

    @property
    def ok(self) -> bool:
        return not self.errors

    def extend(self, other: 'Diagnostics'):
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)

    def log_summary(self, level=logging.DEBUG):
        get_logger().log(level, f"{len(self.errors)} error(s), {len(self.warnings)} warning(s)")
