"""Taskecho: timestamped, color-coded console reporter for task runners.

Attaches to a host task-execution engine as an observer and renders its
lifecycle notifications (task and script boundaries, exit codes, log
messages, file changes) as one stamped line each:

    + <elapsed> <icon> <message>
"""

__version__ = "0.1.0"

from taskecho.core.correlator import LifecycleCorrelator
from taskecho.core.event_hub import EventHub, ReporterHost
from taskecho.cli.app import app as cli

__all__ = ["LifecycleCorrelator", "EventHub", "ReporterHost", "cli", "__version__"]
