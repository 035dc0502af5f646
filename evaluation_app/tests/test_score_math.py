import pytest
from evaluation_app.exceptions import InvalidLevel, InvalidTeamScore
from evaluation_app.services.score_math import (
    compute_civil_service_score, SECTION_KEYS, TECHNICAL_WEIGHTS, OWN_WEIGHTS, SUPERVISOR_WEIGHTS
)
from evaluation_app.tests.conftest import full_sections


class TestCivilServiceScore:
    def test_group_weights_each_sum_to_100(self):
        for weights in (TECHNICAL_WEIGHTS, OWN_WEIGHTS, SUPERVISOR_WEIGHTS):
            assert sum(w for _, w in weights) == 100

    def test_section_keys_cover_all_groups_and_team(self):
        assert len(SECTION_KEYS) == 19
        assert SECTION_KEYS[-1] == "team"

    def test_top_marks_give_exactly_100(self):
        result = compute_civil_service_score(full_sections(level=4, team=5))
        assert result["technicalTotal"] == pytest.approx(70.0)
        assert result["ownTotal"] == pytest.approx(5.0)
        assert result["supTotal"] == pytest.approx(10.0)
        assert result["teamTotal"] == pytest.approx(15.0)
        assert result["overallResult"] == 100.00
        assert result["averagePoint"] == 300.00

    def test_lowest_marks(self):
        result = compute_civil_service_score(full_sections(level=1, team=1))
        assert result["technicalTotal"] == pytest.approx(17.5)
        assert result["ownTotal"] == pytest.approx(1.25)
        assert result["supTotal"] == pytest.approx(2.5)
        assert result["teamTotal"] == pytest.approx(3.0)
        assert result["overallResult"] == 24.25
        # 25 + 25 + 25, team left out
        assert result["averagePoint"] == 75.0

    def test_mixed_levels_use_per_item_weights(self):
        # a1 (25%) at 4, everything else at 2, team 3
        sections = full_sections(level=2, team=3, a1=4)
        result = compute_civil_service_score(sections)
        technical_points = 25 * 4 / 4 + 75 * 2 / 4          # 62.5
        behavioural_points = 100 * 2 / 4                    # 50
        assert result["technicalTotal"] == pytest.approx(technical_points * 0.70)
        assert result["ownTotal"] == pytest.approx(behavioural_points * 0.05)
        assert result["supTotal"] == pytest.approx(behavioural_points * 0.10)
        assert result["teamTotal"] == pytest.approx(9.0)
        assert result["overallResult"] == round(43.75 + 2.5 + 5.0 + 9.0, 2)
        assert result["averagePoint"] == 162.5

    def test_numeric_strings_are_accepted(self):
        sections = {k: "3" for k in SECTION_KEYS}
        sections["team"] = "4"
        assert compute_civil_service_score(sections) == compute_civil_service_score(
            full_sections(level=3, team=4)
        )

    def test_fractional_levels_round_half_up(self):
        # a3 (weight 10) at 1.5 adds 1.25 technical points and a third decimal
        sections = full_sections(level=1, team=1, a3=1.5)
        result = compute_civil_service_score(sections)
        # technical points 26.25 → total 18.375; overall 18.375 + 1.25 + 2.5 + 3.0 = 25.125
        assert result["technicalTotal"] == pytest.approx(18.375)
        assert result["overallResult"] == 25.13

    @pytest.mark.parametrize("bad", [0, 5, -1, 4.01, "x", None, True])
    def test_out_of_range_level_raises(self, bad):
        with pytest.raises(InvalidLevel) as exc:
            compute_civil_service_score(full_sections(a1=bad))
        assert exc.value.key == "a1"
        assert exc.value.value == bad

    def test_missing_behavioural_key_raises(self):
        sections = full_sections()
        del sections["b2_6"]
        with pytest.raises(InvalidLevel) as exc:
            compute_civil_service_score(sections)
        assert exc.value.key == "b2_6"

    @pytest.mark.parametrize("bad", [0, 6, "five", None])
    def test_team_out_of_range_raises(self, bad):
        with pytest.raises(InvalidTeamScore):
            compute_civil_service_score(full_sections(team=bad))

    def test_team_accepts_five_but_levels_do_not(self):
        compute_civil_service_score(full_sections(team=5))
        with pytest.raises(InvalidLevel):
            compute_civil_service_score(full_sections(b1_1=5))

    def test_non_mapping_input_is_rejected_as_missing_levels(self):
        with pytest.raises(InvalidLevel):
            compute_civil_service_score(["a1", 4])

    def test_unknown_keys_are_ignored(self):
        base = compute_civil_service_score(full_sections(level=3, team=2))
        extra = compute_civil_service_score(full_sections(level=3, team=2, comment="great"))
        assert base == extra

    def test_is_deterministic(self):
        sections = full_sections(level=2, team=4, a5=3, b1_2=1)
        assert compute_civil_service_score(sections) == compute_civil_service_score(dict(sections))

    def test_error_message_names_the_value(self):
        with pytest.raises(InvalidLevel) as exc:
            compute_civil_service_score(full_sections(a2=7))
        assert "7" in str(exc.value.detail)
        assert "between 1 and 4" in str(exc.value.detail)
