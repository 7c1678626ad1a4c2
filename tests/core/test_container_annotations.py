"""
Container tests for modules using postponed annotation evaluation.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Optional

import pytest

from vmkit.core.container import Container, constructor_dependencies
from vmkit.core.exceptions import DependencyCycleError

if TYPE_CHECKING:
    from vmkit.core.timer import ElapsedTimer as Telemetry


class Ping:
    def __init__(self, pong: Pong, telemetry: Telemetry = None):
        self.pong = pong


class Pong:
    def __init__(self, ping: Ping):
        self.ping = ping


class Ledger:
    pass


class Report:
    def __init__(self, ledger: Ledger, backup: Optional[Ledger] = None, title: str = "Report"):
        self.ledger = ledger
        self.backup = backup
        self.title = title


class TestPostponedAnnotations:

    def test_dependencies_resolved_despite_unresolvable_parameter(self, log_messages):
        assert constructor_dependencies(Ping) == [Pong]
        assert constructor_dependencies(Pong) == [Ping]
        assert any("Telemetry" in message for message in log_messages)

    def test_string_annotations_resolved(self):
        assert constructor_dependencies(Report) == [Ledger, Ledger, str]

    def test_cycle_detected(self):
        container = Container()
        container.register_type(Ping)
        container.register_type(Pong)

        with pytest.raises(DependencyCycleError) as exc_info:
            container.check_for_cycles()

        assert exc_info.value.cycles == [[Ping, Pong, Ping]]

    def test_resolve(self):
        container = Container()
        container.register_type(Ledger)
        container.register_type(Report)

        report = container.resolve(Report)

        assert isinstance(report.ledger, Ledger)
        assert isinstance(report.backup, Ledger)
        assert report.title == "Report"
