"""
Diagnostic side channel for the analysis routines.

Two independent switches, each paired with a text sink:
    - trace: step-by-step notes from the matcher, histogram and playback
    - model print: decompression model state dumps at each playback minute

A Diagnostics value is passed explicitly to each analysis call (or held by a
DiveAnalysis session), so concurrent sessions never share switches. Nothing
written here feeds back into computed results.
"""

from dataclasses import dataclass
from typing import Optional, TextIO


@dataclass
class Diagnostics:
    """Trace and model-print switches with their destination sinks."""

    trace_sink: Optional[TextIO] = None
    model_sink: Optional[TextIO] = None
    trace_enabled: bool = False
    model_print_enabled: bool = False

    def enable_trace(self, sink: TextIO) -> None:
        self.trace_sink = sink
        self.trace_enabled = True

    def disable_trace(self) -> None:
        self.trace_enabled = False

    def enable_model_print(self, sink: TextIO) -> None:
        self.model_sink = sink
        self.model_print_enabled = True

    def disable_model_print(self) -> None:
        self.model_print_enabled = False

    @property
    def tracing(self) -> bool:
        return self.trace_enabled and self.trace_sink is not None

    @property
    def printing_model(self) -> bool:
        return self.model_print_enabled and self.model_sink is not None

    def trace(self, message: str) -> None:
        """Write one line of trace text if tracing is on."""
        if self.tracing:
            self.trace_sink.write(message + "\n")
