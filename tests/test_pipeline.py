from __future__ import annotations

import pytest

from rubikpi_setup.intent import Intent
from rubikpi_setup.lib.command import CommandError
from rubikpi_setup.main import build_steps
from rubikpi_setup.pipeline import StepContext, StepOutcome, run_pipeline
from rubikpi_setup.settings import Settings


class RecordingStep:
    def __init__(self, step_id: str, *, enabled: bool = True, error: Exception | None = None, log: list[str]) -> None:
        self.step_id = step_id
        self._enabled = enabled
        self._error = error
        self._log = log

    def enabled(self, intent: Intent) -> bool:
        return self._enabled

    def run(self, ctx: StepContext) -> None:
        self._log.append(self.step_id)
        if self._error is not None:
            raise self._error


def _ctx(intent: Intent | None = None) -> StepContext:
    return StepContext(intent=intent or Intent.run_all(), settings=Settings(), dry_run=True)


def test_step_order_is_fixed() -> None:
    assert [s.step_id for s in build_steps()] == [
        "10_set_hostname",
        "20_add_repository",
        "30_install_camera",
        "40_install_software",
        "50_upgrade_system",
        "90_reboot",
    ]


@pytest.mark.parametrize(
    "intent,expected",
    [
        (Intent.run_all(), ["20_add_repository", "30_install_camera", "40_install_software", "50_upgrade_system", "90_reboot"]),
        (Intent.run_all(hostname="pi"), ["10_set_hostname", "20_add_repository", "30_install_camera", "40_install_software", "50_upgrade_system", "90_reboot"]),
        (Intent(run_upgrade=True, run_ppa=True), ["20_add_repository", "50_upgrade_system", "90_reboot"]),
        (Intent(hostname=""), ["10_set_hostname", "90_reboot"]),
        (Intent(), ["90_reboot"]),
    ],
)
def test_enabled_steps_follow_intent(intent: Intent, expected: list[str]) -> None:
    assert [s.step_id for s in build_steps() if s.enabled(intent)] == expected


def test_pipeline_runs_enabled_steps_in_order() -> None:
    log: list[str] = []
    steps = [
        RecordingStep("a", log=log),
        RecordingStep("b", enabled=False, log=log),
        RecordingStep("c", log=log),
    ]
    result = run_pipeline(ctx=_ctx(), steps=steps)
    assert log == ["a", "c"]
    assert result.ok
    assert result.ran_steps == ["a", "c"]
    assert result.skipped_steps == ["b"]
    assert result.exit_code == 0


def test_pipeline_stops_at_first_failure() -> None:
    log: list[str] = []
    steps = [
        RecordingStep("a", log=log),
        RecordingStep("b", error=CommandError(["apt-get", "update"], 100, "E: lock"), log=log),
        RecordingStep("c", log=log),
    ]
    result = run_pipeline(ctx=_ctx(), steps=steps)
    assert log == ["a", "b"]
    assert not result.ok
    assert result.ran_steps == ["a"]
    assert result.failure is not None
    assert result.failure.step_id == "b"
    assert result.exit_code == 100


def test_file_errors_fail_the_step_with_exit_code_one() -> None:
    log: list[str] = []
    steps = [RecordingStep("a", error=PermissionError("/etc/hosts"), log=log), RecordingStep("b", log=log)]
    result = run_pipeline(ctx=_ctx(), steps=steps)
    assert log == ["a"]
    assert result.exit_code == 1


def test_other_exceptions_propagate() -> None:
    steps = [RecordingStep("a", error=KeyError("bug"), log=[])]
    with pytest.raises(KeyError):
        run_pipeline(ctx=_ctx(), steps=steps)


def test_outcome_exit_code_for_signal_death_is_one() -> None:
    outcome = StepOutcome(step_id="x", ok=False, error=CommandError(["wget"], -9))
    assert outcome.exit_code == 1
