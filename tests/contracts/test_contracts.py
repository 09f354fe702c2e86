"""Tests for pipeline contracts.

These tests verify that contracts are enforced at stage boundaries.
They test contract violations directly, without defensive logic downstream.
"""

import dataclasses
from datetime import date

import numpy as np
import pytest

pytestmark = pytest.mark.unit

from bonanza.contracts import (
    BonanzaError,
    ContractViolation,
    InsufficientDataError,
    LoadError,
    ParseError,
    assert_finite_sample,
    assert_juveniles,
    assert_observations,
    assert_sex_summaries,
    assert_year_counts,
    require,
)
from bonanza.contracts.invariants import PIPELINE_INVARIANTS, STAGE_REQUIREMENTS
from bonanza.hares.aggregator import SexSummary, YearCount
from bonanza.hares.records import JuvenileObservation, Observation, ObservationTable

SITES = {"bonbs": "Black Spruce", "bonmat": "Mature", "bonrip": "Riparian"}


def _obs(row_id=0, **overrides):
    fields = dict(row_id=row_id, date="6/1/2001", site="bonrip", age="juvenile",
                  sex="female", weight=700.0, hindfoot_length=115.0)
    fields.update(overrides)
    return Observation(**fields)


def test_require_raises():
    require(True, "never raised")
    with pytest.raises(ContractViolation, match="broken"):
        require(False, "broken")


def test_error_taxonomy():
    assert issubclass(LoadError, BonanzaError)
    assert issubclass(ParseError, BonanzaError)
    assert issubclass(InsufficientDataError, BonanzaError)
    assert not issubclass(ContractViolation, BonanzaError)


class TestObservationContract:

    def test_passes_for_loaded_table(self, observations):
        assert_observations(observations, SITES)

    def test_fails_on_out_of_order_rows(self):
        with pytest.raises(ContractViolation, match="out of order"):
            assert_observations(ObservationTable([_obs(1), _obs(0)]), SITES)

    def test_fails_on_raw_sex_code(self):
        with pytest.raises(ContractViolation, match="sex 'f'"):
            assert_observations(ObservationTable([_obs(sex="f")]), SITES)

    def test_fails_on_unknown_site(self):
        with pytest.raises(ContractViolation, match="site"):
            assert_observations(ObservationTable([_obs(site="bonxyz")]), SITES)

    def test_fails_on_nan_weight(self):
        with pytest.raises(ContractViolation, match="must be None"):
            assert_observations(ObservationTable([_obs(weight=float("nan"))]), SITES)

    def test_fails_on_negative_hindfoot(self):
        with pytest.raises(ContractViolation, match="negative"):
            assert_observations(ObservationTable([_obs(hindfoot_length=-3.0)]), SITES)


class TestJuvenileContract:

    def test_passes_for_selected_table(self, juveniles):
        assert_juveniles(juveniles)

    def test_fails_on_adult(self):
        adult = JuvenileObservation(**{**dataclasses.asdict(_obs(age="adult")),
                                       "observed_on": date(2001, 6, 1), "year": 2001})
        with pytest.raises(ContractViolation, match="age 'adult'"):
            assert_juveniles(ObservationTable([adult]))

    def test_fails_on_year_mismatch(self):
        wrong = JuvenileObservation(**{**dataclasses.asdict(_obs()),
                                       "observed_on": date(2001, 6, 1), "year": 2002})
        with pytest.raises(ContractViolation, match="year 2002"):
            assert_juveniles(ObservationTable([wrong]))


class TestAnalysisContracts:

    def test_year_counts_must_increase(self):
        with pytest.raises(ContractViolation, match="strictly increasing"):
            assert_year_counts((YearCount(2001, 1), YearCount(2000, 2)))

    def test_year_counts_non_negative(self):
        with pytest.raises(ContractViolation, match="negative"):
            assert_year_counts((YearCount(2000, -1),))

    def test_sex_summary_rejects_unknown(self):
        row = SexSummary("unknown", 1.0, 1.0, 0.0, 2)
        with pytest.raises(ContractViolation, match="unexpected sex"):
            assert_sex_summaries((row,))

    def test_sex_summary_rejects_duplicates(self):
        row = SexSummary("female", 1.0, 1.0, 0.0, 2)
        with pytest.raises(ContractViolation, match="duplicate"):
            assert_sex_summaries((row, row))

    def test_finite_sample(self):
        assert_finite_sample(np.array([1.0, 2.0]), "ok")
        with pytest.raises(ContractViolation, match="non-finite"):
            assert_finite_sample(np.array([1.0, np.inf]), "bad")
        with pytest.raises(ContractViolation, match="dims"):
            assert_finite_sample(np.ones((2, 2)), "matrix")


def test_invariants_cover_every_stage():
    assert STAGE_REQUIREMENTS["load"] == "REQUIRED"
    assert STAGE_REQUIREMENTS["juvenile"] == "REQUIRED"
    for stage in ("load", "juvenile", "annual_counts", "sex_summary"):
        assert PIPELINE_INVARIANTS[stage]


@pytest.mark.parametrize("section", ["annual_counts", "sex_summary", "comparison", "regression"])
def test_report_sections_are_section_level(section):
    assert STAGE_REQUIREMENTS[section] == "SECTION"
