"""Tests for the closed enumerations and the status decode step."""

import pytest

from portal.models.enums import (
    BudgetRange,
    ProjectStatus,
    TRANSITION_TARGETS,
    UserRole,
)


class TestStatusDecode:
    @pytest.mark.parametrize(
        "raw",
        [
            "inProgress",
            {"inProgress": None},
            {"__kind__": "inProgress"},
            ProjectStatus.IN_PROGRESS,
        ],
    )
    def test_every_wire_shape(self, raw):
        assert ProjectStatus.decode(raw) is ProjectStatus.IN_PROGRESS

    @pytest.mark.parametrize(
        "raw",
        ["in_progress", "", None, 3, {}, {"a": 1, "b": 2}, {"__kind__": "done"}, ["new"]],
    )
    def test_rejects_unknown_values(self, raw):
        with pytest.raises(ValueError):
            ProjectStatus.decode(raw)

    def test_new_is_not_a_transition_target(self):
        assert ProjectStatus.NEW not in TRANSITION_TARGETS
        assert TRANSITION_TARGETS == {
            ProjectStatus.REVIEWED,
            ProjectStatus.FOLLOWUP,
            ProjectStatus.IN_PROGRESS,
            ProjectStatus.COMPLETED,
        }

    def test_labels(self):
        assert ProjectStatus.FOLLOWUP.label == "Trenger oppfølging"
        assert ProjectStatus.COMPLETED.label == "Fullført"


def test_wire_values_are_verbatim():
    assert [s.value for s in ProjectStatus] == ["new", "reviewed", "followup", "inProgress", "completed"]
    assert [r.value for r in UserRole] == ["admin", "user", "guest"]
    assert [b.value for b in BudgetRange] == [
        "range1_10kNOK",
        "range10_50kNOK",
        "range50_100kNOK",
        "range100kPlusNOK",
    ]
    assert BudgetRange.RANGE_100K_PLUS.label == "100 000 NOK +"
