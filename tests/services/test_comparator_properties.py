"""Property-based tests for the condition comparator."""
import pytest
from hypothesis import given, strategies as st

from photoverify.domain.value_objects.conditions import ConditionProfile
from photoverify.services.condition_analyzer import lighting_quality_for
from photoverify.services.condition_comparator import ComparisonThresholds, ConditionComparator

comparator = ConditionComparator(ComparisonThresholds())


@st.composite
def condition_profiles(draw):
    """Generate arbitrary but valid condition profiles."""
    lighting_score = draw(st.one_of(
        st.sampled_from([0.2, 0.5, 0.8]),
        st.floats(min_value=0.0, max_value=1.0),
    ))
    roll = draw(st.floats(min_value=0.0, max_value=45.0))
    pan = draw(st.floats(min_value=0.0, max_value=45.0))
    tilt = draw(st.floats(min_value=0.0, max_value=45.0))
    return ConditionProfile(
        lighting_score=lighting_score,
        lighting_quality=lighting_quality_for(lighting_score),
        face_size_percent=draw(st.floats(min_value=0.0, max_value=100.0)),
        pose_deviation_degrees=(roll ** 2 + pan ** 2 + tilt ** 2) ** 0.5,
        roll_degrees=roll,
        pan_degrees=pan,
        tilt_degrees=tilt,
        background_clutter=draw(st.sampled_from([0.0, 0.2, 0.4, 0.6, 0.8, 1.0])),
        expression_neutral=draw(st.booleans()),
    )


@given(baseline=condition_profiles(), checkin=condition_profiles())
def test_compare_is_deterministic(baseline, checkin):
    assert comparator.compare(baseline, checkin) == comparator.compare(baseline, checkin)


@given(baseline=condition_profiles(), checkin=condition_profiles())
def test_confidence_counts_passing_checks(baseline, checkin):
    report = comparator.compare(baseline, checkin)
    passing = sum(1 for check in report.checks.ordered() if check.passed)

    assert report.confidence_score == pytest.approx(passing / 5)
    assert report.overall_valid == (report.confidence_score == 1.0)
    assert len(report.suggestions) == 5 - passing


@given(baseline=condition_profiles(), checkin=condition_profiles())
def test_suggestions_only_on_failing_checks(baseline, checkin):
    report = comparator.compare(baseline, checkin)

    for check in report.checks.ordered():
        assert (check.suggestion is None) == check.passed


@given(a=condition_profiles(), b=condition_profiles())
def test_lighting_check_is_symmetric(a, b):
    assert comparator.compare(a, b).checks.lighting.passed == comparator.compare(b, a).checks.lighting.passed


@given(baseline=condition_profiles(), checkin=condition_profiles())
def test_fixing_a_check_raises_confidence_by_one_step(baseline, checkin):
    frowning = checkin.model_copy(update={"expression_neutral": False})
    neutral = checkin.model_copy(update={"expression_neutral": True})

    before = comparator.compare(baseline, frowning)
    after = comparator.compare(baseline, neutral)

    assert after.confidence_score == pytest.approx(before.confidence_score + 0.2)
    assert after.confidence_score > before.confidence_score
