import json
from pathlib import Path

import pytest

from lsystem3d import ColorMode
from lsystem3d.lsystem.presets import get_preset, preset_names
from lsystem3d.lsystem.rule import LSystemRule
from lsystem3d.runtime.session import MAX_ANGLE, MIN_STEP_LENGTH, RuleSession


def _write_rule(path: Path, **changes: object) -> Path:
    data: dict[str, object] = {
        "name": "File rule",
        "axiom": "F",
        "angle": 45,
        "iterations": 1,
        "rules": {"F": "F[+F]F"},
    }
    data.update(changes)
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


@pytest.fixture()
def koch_session() -> RuleSession:
    return RuleSession(get_preset("koch"))


class TestSessionPublishing:
    """Every accepted change reaches subscribers of the rule stream."""

    def test_current_rule_is_replayed(self, koch_session: RuleSession) -> None:
        seen: list[LSystemRule] = []

        koch_session.rules.subscribe(seen.append)

        assert seen == [koch_session.rule]

    def test_adjustments_are_published(self, koch_session: RuleSession) -> None:
        seen: list[LSystemRule] = []
        koch_session.rules.subscribe(seen.append)

        assert koch_session.adjust(angle=-5.0) is True

        assert [rule.angle for rule in seen] == [90.0, 85.0]


class TestSessionAdjust:
    """Parameter nudges stay inside the viewer's ranges."""

    def test_angle_is_clamped(self, koch_session: RuleSession) -> None:
        """Koch already sits at the maximum angle, so increasing it changes nothing."""

        assert koch_session.adjust(angle=5.0) is False
        assert koch_session.rule.angle == MAX_ANGLE

    def test_wide_preset_angle_is_not_pulled_into_range(self) -> None:
        """Sierpinski starts at 120 degrees; raising it must not drop it to the maximum."""

        session = RuleSession(get_preset("sierpinski"))

        assert session.adjust(angle=5.0) is False
        assert session.rule.angle == 120.0

        assert session.adjust(angle=-5.0) is True
        assert session.rule.angle == 115.0

    def test_iterations_above_configured_maximum_can_still_decrease(
        self, koch_session: RuleSession, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LSYSTEM_MAX_ITERATIONS", "2")

        assert koch_session.adjust(iterations=1) is False
        assert koch_session.adjust(iterations=-1) is True
        assert koch_session.rule.iterations == 2

    def test_step_length_is_clamped(self, koch_session: RuleSession) -> None:
        for _ in range(10):
            koch_session.adjust(step_length=-0.1)

        assert koch_session.rule.step_length == pytest.approx(MIN_STEP_LENGTH)

    def test_iterations_never_go_negative(self) -> None:
        session = RuleSession(
            LSystemRule(name="flat", axiom="F", angle=30.0, iterations=0, rules={})
        )

        assert session.adjust(iterations=-1) is False
        assert session.adjust(iterations=1) is True
        assert session.rule.iterations == 1

    def test_iterations_respect_configured_maximum(
        self, koch_session: RuleSession, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("LSYSTEM_MAX_ITERATIONS", "3")

        assert koch_session.adjust(iterations=1) is False
        assert koch_session.rule.iterations == 3

    def test_toggle_coloring(self, koch_session: RuleSession) -> None:
        assert koch_session.rule.color_mode is ColorMode.PALETTE

        koch_session.toggle_coloring()

        assert koch_session.rule.color_mode is ColorMode.DEPTH


class TestSessionSources:
    """Reloading from disk and cycling presets."""

    def test_reload_reads_file_again(self, tmp_path: Path) -> None:
        path = _write_rule(tmp_path / "rule.json")
        session = RuleSession(LSystemRule.from_mapping(json.loads(path.read_text())), path)

        _write_rule(path, angle=60)

        assert session.reload() is True
        assert session.rule.angle == 60.0

    def test_failed_reload_keeps_rule(self, tmp_path: Path) -> None:
        """A broken edit on disk leaves the last good rule on screen."""

        path = _write_rule(tmp_path / "rule.json")
        session = RuleSession(LSystemRule.from_mapping(json.loads(path.read_text())), path)
        before = session.rule

        _write_rule(path, iterations=-3)
        invalid = session.reload()
        path.unlink()
        missing = session.reload()

        assert (invalid, missing) == (False, False)
        assert session.rule == before

    def test_presets_have_nothing_to_reload(self, koch_session: RuleSession) -> None:
        assert koch_session.reload() is False

    def test_cycle_preset_walks_menu(self, koch_session: RuleSession) -> None:
        names = preset_names()
        index = names.index("koch")

        forward = koch_session.cycle_preset()
        back = koch_session.cycle_preset(-1)

        assert forward == get_preset(names[(index + 1) % len(names)])
        assert back == get_preset("koch")
        assert koch_session.path is None

    def test_cycle_from_file_rule_starts_menu(self, tmp_path: Path) -> None:
        path = _write_rule(tmp_path / "rule.json")
        session = RuleSession(LSystemRule.from_mapping(json.loads(path.read_text())), path)

        rule = session.cycle_preset()

        assert rule == get_preset(preset_names()[0])
        assert session.path is None
